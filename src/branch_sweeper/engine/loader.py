"""Branch loading: the initial branch list with merge and protection flags."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..cancel import CancelToken
from ..connection.base import Connection
from ..constants import PROTECTED_CONFIG_NAME
from ..errors import CommandFailure
from ..github.schema import RepoView, parse_repo
from ..models import Branch, Remote

logger = logging.getLogger(__name__)


def parse_branch_names(text: str) -> list[Branch]:
    """Parse ``<head-marker>:<name>`` lines into bare ``Branch`` values."""
    branches: list[Branch] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        marker, _, name = line.partition(":")
        branches.append(Branch(head=marker.strip() == "*", name=name.strip()))
    return branches


def parse_merged_branch_names(text: str) -> set[str]:
    """Parse ``git branch --merged`` output.

    Lines are ``  name``, ``* name`` for the checked-out branch and ``+ name``
    for a branch checked out in another worktree.
    """
    names: set[str] = set()
    for line in text.splitlines():
        name = line.strip().lstrip("*+").strip()
        if name:
            names.add(name)
    return names


def get_repo_view(connection: Connection, token: CancelToken, remote: Remote) -> RepoView:
    """Fetch the repository's full name, fork parent and default branch."""
    return parse_repo(connection.get_repo_names(token, remote.hostname, remote.repo_name))


def is_protected(connection: Connection, token: CancelToken, branch_name: str) -> bool:
    """Read ``branch.<name>.gh-poi-protected``; an unreadable key means unprotected."""
    try:
        value = connection.get_config(token, f"branch.{branch_name}.{PROTECTED_CONFIG_NAME}")
    except CommandFailure as exc:
        logger.debug("No protection flag for %s: %s", branch_name, exc)
        return False
    return value.strip() == "true"


def get_remote_head_oid(connection: Connection, token: CancelToken, remote: Remote, branch_name: str) -> str:
    """Return the remote head commit of ``branch_name``, or ``""`` if unknown.

    The remote-tracking ref is tried first.  Branches checked out from
    someone else's fork have no such ref, so the branch's configured remote
    (often a URL) is then asked directly with ``ls-remote``.
    """
    try:
        fields = connection.get_remote_head_oid(token, remote.name, branch_name).split()
        return fields[0] if fields else ""
    except CommandFailure:
        pass

    try:
        url = connection.get_config(token, f"branch.{branch_name}.remote").strip()
    except CommandFailure:
        return ""
    if not url:
        return ""

    try:
        output = connection.get_ls_remote_head_oid(token, url, branch_name)
    except CommandFailure as exc:
        logger.debug("ls-remote for %s failed: %s", branch_name, exc)
        return ""
    fields = output.split()
    return fields[0] if fields else ""


def load_branches(
    connection: Connection,
    token: CancelToken,
    remote: Remote,
    default_branch_name: str,
) -> list[Branch]:
    """Build the branch list and attach merge, protection and remote head data.

    A detached HEAD has no branch name to look up and is passed through bare.
    """
    branches = parse_branch_names(connection.get_branch_names(token))
    merged = parse_merged_branch_names(
        connection.get_merged_branch_names(token, remote.name, default_branch_name)
    )

    results: list[Branch] = []
    for branch in branches:
        if branch.is_detached:
            results.append(branch)
            continue
        results.append(
            replace(
                branch,
                is_merged=branch.name in merged,
                is_protected=is_protected(connection, token, branch.name),
                remote_head_oid=get_remote_head_oid(connection, token, remote, branch.name),
            )
        )
    return results
