"""Branch tool implementations.

Each tool builds a ``LocalConnection`` for the requested working tree, runs
one engine operation with a fresh cancellation token and returns a
JSON-serializable dictionary.
"""

from __future__ import annotations

import logging

from ..cancel import CancelToken
from ..connection.local import LocalConnection
from ..engine import protect as protect_engine
from ..engine.deletion import delete_branches
from ..engine.remote import get_remote
from ..engine.service import get_branches
from ..models import Branch, BranchState, PullRequest
from ..state import CONFIG

logger = logging.getLogger(__name__)


def _connection(repo_path: str) -> LocalConnection:
    return LocalConnection(repo_path or CONFIG.repo_path, CONFIG)


def pull_request_to_dict(pr: PullRequest) -> dict[str, object]:
    return {
        "number": pr.number,
        "name": pr.name,
        "state": pr.state.value,
        "is_draft": pr.is_draft,
        "url": pr.url,
        "author": pr.author,
        "commits": sorted(pr.commits),
    }


def branch_to_dict(branch: Branch) -> dict[str, object]:
    return {
        "name": branch.name,
        "head": branch.head,
        "state": branch.state.value,
        "is_merged": branch.is_merged,
        "is_protected": branch.is_protected,
        "remote_head_oid": branch.remote_head_oid,
        "commits": list(branch.commits),
        "pull_requests": [pull_request_to_dict(pr) for pr in branch.pull_requests],
    }


def list_branches(repo_path: str = "") -> dict[str, object]:
    """Classify local branches without changing anything.

    HEAD is reported on the default branch when the checked-out branch would
    be deleted, but no checkout happens.
    """
    connection = _connection(repo_path)
    token = CancelToken()
    remote = get_remote(connection, token)
    branches = get_branches(connection, token, remote, dry_run=True)
    return {
        "remote": remote.name,
        "hostname": remote.hostname,
        "repo": remote.repo_name,
        "branches": [branch_to_dict(branch) for branch in branches],
    }


def sweep_branches(repo_path: str = "", dry_run: bool = False) -> dict[str, object]:
    """Delete every branch whose work is fully merged upstream.

    When the checked-out branch is deletable, the default branch is checked
    out first.  With ``dry_run`` nothing is checked out or deleted.
    """
    connection = _connection(repo_path)
    token = CancelToken()
    remote = get_remote(connection, token)
    branches = get_branches(connection, token, remote, dry_run=dry_run)
    if not dry_run:
        branches = delete_branches(connection, token, branches)

    deleted = [b.name for b in branches if b.state == BranchState.DELETED]
    if deleted:
        logger.info("Deleted %d branches", len(deleted))
    return {
        "dry_run": dry_run,
        "deleted": deleted,
        "deletable": [b.name for b in branches if b.state == BranchState.DELETABLE],
        "branches": [branch_to_dict(branch) for branch in branches],
    }


def protect_branches(branch_names: list[str], repo_path: str = "") -> dict[str, object]:
    """Protect branches from deletion regardless of their pull requests."""
    protect_engine.protect_branches(_connection(repo_path), CancelToken(), branch_names)
    return {"protected": branch_names}


def unprotect_branches(branch_names: list[str], repo_path: str = "") -> dict[str, object]:
    """Remove deletion protection from branches."""
    protect_engine.unprotect_branches(_connection(repo_path), CancelToken(), branch_names)
    return {"unprotected": branch_names}
