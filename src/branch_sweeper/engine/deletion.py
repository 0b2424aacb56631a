"""Deletion of deletable branches."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..cancel import CancelToken
from ..connection.base import Connection
from ..errors import CommandFailure
from ..models import Branch, BranchState
from .loader import parse_branch_names

logger = logging.getLogger(__name__)


def get_branch_names(branches: list[Branch], state: BranchState) -> list[str]:
    return [branch.name for branch in branches if branch.state == state]


def delete_branches(connection: Connection, token: CancelToken, branches: list[Branch]) -> list[Branch]:
    """Delete every deletable branch in one call and report what is gone.

    git may refuse individual branches; that is not an error.  The branch
    listing taken afterwards decides: a deletable branch that is no longer
    listed becomes ``DELETED``, one that is still listed stays ``DELETABLE``.
    """
    names = get_branch_names(branches, BranchState.DELETABLE)
    if not names:
        return branches

    logger.info("Deleting %d branches: %s", len(names), ", ".join(names))
    try:
        connection.delete_branches(token, names)
    except CommandFailure as exc:
        logger.warning("Some branches could not be deleted: %s", exc)

    remaining = {branch.name for branch in parse_branch_names(connection.get_branch_names(token))}
    return [
        replace(branch, state=BranchState.DELETED)
        if branch.state == BranchState.DELETABLE and branch.name not in remaining
        else branch
        for branch in branches
    ]
