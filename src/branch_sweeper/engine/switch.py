"""Fail-safe switch away from a checked-out branch that is about to go."""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum

from ..cancel import CancelToken
from ..connection.base import Connection
from ..models import Branch, BranchState

logger = logging.getLogger(__name__)


class SwitchState(str, Enum):
    NO_SWITCH_NEEDED = "no_switch_needed"
    # Labels moved to the default branch but the checkout was skipped (dry run)
    SWITCH_PENDING = "switch_pending"
    SWITCHED = "switched"


def switch_to_default_branch(
    connection: Connection,
    token: CancelToken,
    branches: list[Branch],
    default_branch_name: str,
    dry_run: bool = False,
) -> tuple[list[Branch], SwitchState]:
    """Move HEAD to the default branch when the current branch is deletable.

    A failed checkout propagates as ``CommandFailure`` and no branch list is
    returned.  If the default branch is not among ``branches`` a
    not-deletable entry is added for it before HEAD is relabelled.
    """
    current = next((branch for branch in branches if branch.head), None)
    if current is None or current.state != BranchState.DELETABLE:
        return branches, SwitchState.NO_SWITCH_NEEDED

    if dry_run:
        state = SwitchState.SWITCH_PENDING
    else:
        logger.info("Checking out %s before deleting %s", default_branch_name, current.name)
        connection.checkout_branch(token, default_branch_name)
        state = SwitchState.SWITCHED

    if not any(branch.name == default_branch_name for branch in branches):
        branches = [*branches, Branch(head=False, name=default_branch_name, state=BranchState.NOT_DELETABLE)]

    return [replace(branch, head=branch.name == default_branch_name) for branch in branches], state
