"""Ancestry trimming: which of a branch's commits are not yet upstream.

A squash or rebase merge leaves no merge commit behind, so ``git branch
--merged`` cannot see it.  What can still be observed is where a branch's
history stops being its own: walking the log newest-first, the first commit
that also belongs to an unrelated branch marks the fork point.  The commits
before it are the ones a pull request must account for.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..cancel import CancelToken
from ..connection.base import Connection
from ..models import Branch

logger = logging.getLogger(__name__)


def strip_ref_name(ref_name: str) -> str:
    """Reduce ``refs/heads/x`` and ``refs/remotes/<remote>/x`` to ``x``."""
    if ref_name.startswith("refs/heads/"):
        return ref_name[len("refs/heads/"):]
    if ref_name.startswith("refs/remotes/"):
        _remote, _, name = ref_name[len("refs/remotes/"):].partition("/")
        return name
    return ref_name


def parse_ref_names(text: str) -> set[str]:
    """Parse associated ref names, dropping symbolic ``HEAD`` refs and detached entries."""
    names: set[str] = set()
    for line in text.splitlines():
        name = strip_ref_name(line.strip())
        if not name or name == "HEAD" or name.startswith("("):
            continue
        names.add(name)
    return names


def trim_commits(
    connection: Connection,
    token: CancelToken,
    branch_name: str,
    default_branch_name: str,
    remote_head_oid: str,
    is_merged: bool,
    oids: list[str],
) -> tuple[str, ...]:
    """Return the newest-first commits unique to ``branch_name``.

    A branch with a known remote head, or one already merged, is caught up:
    only its tip is kept.  Otherwise the walk stops at the first commit that
    another, unrelated branch also contains.  Branches that share the tip
    commit are siblings with the same fork point and do not stop the walk.
    A tip contained in the default branch yields no commits at all.
    """
    if not oids:
        return ()
    if remote_head_oid or is_merged:
        return (oids[0],)

    results: list[str] = []
    siblings: set[str] = set()
    for i, oid in enumerate(oids):
        names = parse_ref_names(connection.get_associated_ref_names(token, oid))
        if i == 0:
            if default_branch_name in names:
                logger.debug("%s: tip is already on %s", branch_name, default_branch_name)
                return ()
            siblings = names - {branch_name}
        elif names - siblings - {branch_name}:
            logger.debug("%s: history shared with other branches from %s", branch_name, oid)
            break
        results.append(oid)
    return tuple(results)


def apply_commits(
    connection: Connection,
    token: CancelToken,
    branches: list[Branch],
    default_branch_name: str,
) -> list[Branch]:
    """Attach trimmed commit lists to every branch except a detached HEAD."""
    results: list[Branch] = []
    for branch in branches:
        if branch.is_detached:
            results.append(replace(branch, commits=()))
            continue
        oids = [line.strip() for line in connection.get_log(token, branch.name).splitlines() if line.strip()]
        commits = trim_commits(
            connection,
            token,
            branch.name,
            default_branch_name,
            branch.remote_head_oid,
            branch.is_merged,
            oids,
        )
        results.append(replace(branch, commits=commits))
    return results
