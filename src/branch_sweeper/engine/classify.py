"""Deletion verdicts for branches."""

from __future__ import annotations

from dataclasses import replace

from ..models import Branch, BranchState, PullRequest, PullRequestState, UncommittedChange


def parse_uncommitted_changes(text: str) -> list[UncommittedChange]:
    """Parse ``git status --porcelain`` output (``XY path`` lines)."""
    changes: list[UncommittedChange] = []
    for line in text.splitlines():
        if len(line) < 4:
            continue
        changes.append(UncommittedChange(line[0], line[1], line[3:]))
    return changes


def is_fully_merged(branch: Branch, pr: PullRequest) -> bool:
    """True if ``pr`` is merged and contains the branch's oldest retained commit.

    The merged label alone is not trusted: a reused branch name or a
    same-named pull request in another repository would otherwise pass.
    """
    if pr.state != PullRequestState.MERGED or not branch.commits or not branch.commits[-1]:
        return False
    return branch.commits[-1] in pr.commits


def get_branch_state(branch: Branch, changes: list[UncommittedChange]) -> BranchState:
    if branch.is_protected:
        return BranchState.NOT_DELETABLE

    # Untracked files survive a checkout, so only tracked edits block
    if branch.head and any(not change.is_untracked for change in changes):
        return BranchState.NOT_DELETABLE

    if not branch.pull_requests:
        return BranchState.NOT_DELETABLE

    if any(pr.state == PullRequestState.OPEN for pr in branch.pull_requests):
        return BranchState.NOT_DELETABLE

    if not any(is_fully_merged(branch, pr) for pr in branch.pull_requests):
        return BranchState.NOT_DELETABLE

    return BranchState.DELETABLE


def classify_branches(branches: list[Branch], changes: list[UncommittedChange]) -> list[Branch]:
    return [replace(branch, state=get_branch_state(branch, changes)) for branch in branches]
