"""Pull request lookup and matching.

Pull requests are found by commit id rather than by branch name, because a
local branch name says nothing about which repository (fork or upstream) a
pull request was opened against.  Names only decide attachment, and an
explicit ``refs/pull/<n>`` tracking ref always wins over a name.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from ..cancel import CancelToken
from ..connection.base import Connection
from ..constants import QUERY_MAX_LENGTH
from ..errors import CommandFailure
from ..github.schema import parse_pull_requests
from ..models import Branch, PullRequest

logger = logging.getLogger(__name__)

_PULL_REF_RE = re.compile(r"^refs/pull/(\d+)")


def query_oid(branch: Branch) -> str:
    """The commit a branch is searched by: remote head, else oldest retained commit."""
    if branch.remote_head_oid:
        return branch.remote_head_oid
    if branch.commits:
        return branch.commits[-1]
    return ""


def build_hash_filters(branches: list[Branch], default_branch_name: str = "") -> list[str]:
    """Group ``hash:<oid>`` filters into blocks of at most QUERY_MAX_LENGTH characters.

    The default branch is never searched.
    """
    blocks: list[str] = []
    current = ""
    for branch in branches:
        if branch.name == default_branch_name:
            continue
        oid = query_oid(branch)
        if not oid:
            continue
        hash_filter = f"hash:{oid}"
        if current and len(current) + 1 + len(hash_filter) > QUERY_MAX_LENGTH:
            blocks.append(current)
            current = hash_filter
        else:
            current = f"{current} {hash_filter}" if current else hash_filter
    if current:
        blocks.append(current)
    return blocks


def build_org_filter(repo_names: list[str]) -> str:
    owners = dict.fromkeys(name.split("/", 1)[0] for name in repo_names)
    return " ".join(f"org:{owner}" for owner in owners)


def build_repo_filter(repo_names: list[str]) -> str:
    return " ".join(f"repo:{name}" for name in repo_names)


def fetch_pull_requests(
    connection: Connection,
    token: CancelToken,
    hostname: str,
    repo_names: list[str],
    branches: list[Branch],
    default_branch_name: str,
) -> list[PullRequest]:
    """Search pull requests for every branch, one request per filter block."""
    org_filter = build_org_filter(repo_names)
    repo_filter = build_repo_filter(repo_names)
    results: list[PullRequest] = []
    for hash_filter in build_hash_filters(branches, default_branch_name):
        text = connection.get_pull_requests(token, hostname, org_filter, repo_filter, hash_filter)
        results.extend(parse_pull_requests(text))
    logger.debug("Fetched %d pull requests", len(results))
    return results


def parse_pull_ref(value: str) -> int | None:
    """Return ``n`` for a ``refs/pull/<n>/...`` merge ref, else None."""
    match = _PULL_REF_RE.match(value.strip())
    return int(match.group(1)) if match else None


def get_explicit_pr_numbers(connection: Connection, token: CancelToken, branches: list[Branch]) -> dict[str, int]:
    """Map branch names to the PR number their ``branch.<name>.merge`` tracks.

    Branches without an upstream have no merge key; they are simply absent
    from the result.
    """
    numbers: dict[str, int] = {}
    for branch in branches:
        if branch.is_detached:
            continue
        try:
            merge_ref = connection.get_config(token, f"branch.{branch.name}.merge")
        except CommandFailure as exc:
            logger.debug("No upstream merge ref for %s: %s", branch.name, exc)
            continue
        number = parse_pull_ref(merge_ref)
        if number is not None:
            numbers[branch.name] = number
    return numbers


def attach_pull_requests(
    branches: list[Branch],
    pull_requests: list[PullRequest],
    explicit_numbers: dict[str, int],
    default_branch_name: str = "",
) -> list[Branch]:
    """Attach each pull request to at most one branch.

    A pull request whose number a branch explicitly tracks goes to that
    branch only.  Any other pull request goes to the branch named like its
    head ref.  A number, once attached, is never attached again.  Each
    branch's list ends up ordered by ascending number.  The default branch
    never receives pull requests.
    """
    owners = {number: name for name, number in explicit_numbers.items()}
    attached: dict[str, list[PullRequest]] = {
        branch.name: [] for branch in branches if branch.name != default_branch_name
    }
    matched: set[int] = set()

    for pr in pull_requests:
        if pr.number in matched:
            continue
        if pr.number in owners:
            target = owners[pr.number]
            if target in attached:
                attached[target].append(pr)
                matched.add(pr.number)
            continue
        for branch in branches:
            if branch.name == pr.name and branch.name in attached:
                attached[branch.name].append(pr)
                matched.add(pr.number)
                break

    return [
        replace(branch, pull_requests=tuple(sorted(attached.get(branch.name, []), key=lambda pr: pr.number)))
        for branch in branches
    ]
