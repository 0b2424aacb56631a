"""End-to-end branch classification.

``get_branches`` runs the whole pipeline for one invocation:

1. repository names and default branch from the forge
2. branch list with merge, protection and remote head data
3. ancestry trimming of every branch's log
4. pull request search and matching
5. classification against the working tree
6. the fail-safe switch away from a deletable checked-out branch

All external calls happen one at a time.  Any fatal failure propagates and
no partial result is returned.
"""

from __future__ import annotations

import logging

from ..cancel import CancelToken
from ..connection.base import Connection
from ..models import Branch, Remote
from .classify import classify_branches, parse_uncommitted_changes
from .loader import get_repo_view, load_branches
from .matcher import attach_pull_requests, fetch_pull_requests, get_explicit_pr_numbers
from .switch import switch_to_default_branch
from .trimmer import apply_commits

logger = logging.getLogger(__name__)


def get_branches(
    connection: Connection,
    token: CancelToken,
    remote: Remote,
    dry_run: bool = False,
) -> list[Branch]:
    """Classify every local branch, returning them sorted by name.

    With ``dry_run`` the fail-safe checkout is skipped but HEAD is still
    reported on the default branch.
    """
    repo = get_repo_view(connection, token, remote)
    repo_names = repo.repo_names
    default_branch_name = repo.default_branch_name
    connection.check_repos(token, remote.hostname, repo_names)

    branches = load_branches(connection, token, remote, default_branch_name)
    branches = apply_commits(connection, token, branches, default_branch_name)

    explicit_numbers = get_explicit_pr_numbers(connection, token, branches)
    pull_requests = fetch_pull_requests(
        connection, token, remote.hostname, repo_names, branches, default_branch_name
    )
    branches = attach_pull_requests(branches, pull_requests, explicit_numbers, default_branch_name)

    changes = parse_uncommitted_changes(connection.get_uncommitted_changes(token))
    branches = classify_branches(branches, changes)

    branches, switch_state = switch_to_default_branch(connection, token, branches, default_branch_name, dry_run)
    logger.debug("Fail-safe switch: %s", switch_state.value)

    return sorted(branches, key=lambda branch: branch.name)
