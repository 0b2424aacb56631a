"""Tests for deletion verdicts."""

from __future__ import annotations

import pytest
from fakes import A97, B8A

from branch_sweeper.engine.classify import (
    classify_branches,
    get_branch_state,
    is_fully_merged,
    parse_uncommitted_changes,
)
from branch_sweeper.models import Branch, BranchState, PullRequest, PullRequestState, UncommittedChange


def pr(state: PullRequestState, *commits: str, number: int = 1) -> PullRequest:
    return PullRequest("issue1", state, False, number, frozenset(commits))


def branch(*prs: PullRequest, head: bool = False, protected: bool = False, commits=(A97,)) -> Branch:
    return Branch(head=head, name="issue1", is_protected=protected, commits=commits, pull_requests=prs)


def test_parse_uncommitted_changes() -> None:
    changes = parse_uncommitted_changes(" M README.md\n?? notes.txt\nR  old -> new\n\n")
    assert changes == [
        UncommittedChange(" ", "M", "README.md"),
        UncommittedChange("?", "?", "notes.txt"),
        UncommittedChange("R", " ", "old -> new"),
    ]
    assert [c.is_untracked for c in changes] == [False, True, False]


class TestIsFullyMerged:
    """Tests for the merged-and-contains-the-tip check."""

    def test_merged_with_tip(self) -> None:
        assert is_fully_merged(branch(), pr(PullRequestState.MERGED, A97)) is True

    def test_merged_without_tip(self) -> None:
        assert is_fully_merged(branch(), pr(PullRequestState.MERGED, B8A)) is False

    def test_closed_with_tip(self) -> None:
        assert is_fully_merged(branch(), pr(PullRequestState.CLOSED, A97)) is False

    def test_oldest_retained_commit_is_the_evidence(self) -> None:
        assert is_fully_merged(branch(commits=(B8A, A97)), pr(PullRequestState.MERGED, A97)) is True

    def test_newest_commit_alone_is_not_evidence(self) -> None:
        assert is_fully_merged(branch(commits=(B8A, A97)), pr(PullRequestState.MERGED, B8A)) is False

    def test_no_commits(self) -> None:
        assert is_fully_merged(branch(commits=()), pr(PullRequestState.MERGED, A97)) is False


class TestGetBranchState:
    """Tests for ``get_branch_state`` in priority order."""

    def test_protected_wins(self) -> None:
        b = branch(pr(PullRequestState.MERGED, A97), protected=True)
        assert get_branch_state(b, []) == BranchState.NOT_DELETABLE

    def test_head_with_tracked_change(self) -> None:
        b = branch(pr(PullRequestState.MERGED, A97), head=True)
        changes = [UncommittedChange(" ", "M", "README.md")]
        assert get_branch_state(b, changes) == BranchState.NOT_DELETABLE

    def test_head_with_only_untracked_files(self) -> None:
        b = branch(pr(PullRequestState.MERGED, A97), head=True)
        changes = [UncommittedChange("?", "?", "notes.txt")]
        assert get_branch_state(b, changes) == BranchState.DELETABLE

    def test_changes_do_not_affect_other_branches(self) -> None:
        b = branch(pr(PullRequestState.MERGED, A97))
        assert get_branch_state(b, [UncommittedChange("M", " ", "a.py")]) == BranchState.DELETABLE

    def test_no_pull_requests(self) -> None:
        assert get_branch_state(branch(), []) == BranchState.NOT_DELETABLE

    def test_any_open_pull_request_blocks(self) -> None:
        b = branch(pr(PullRequestState.MERGED, A97, number=1), pr(PullRequestState.OPEN, A97, number=2))
        assert get_branch_state(b, []) == BranchState.NOT_DELETABLE

    def test_closed_without_merge(self) -> None:
        assert get_branch_state(branch(pr(PullRequestState.CLOSED, A97)), []) == BranchState.NOT_DELETABLE

    def test_merged_but_tip_missing(self) -> None:
        assert get_branch_state(branch(pr(PullRequestState.MERGED, B8A)), []) == BranchState.NOT_DELETABLE

    @pytest.mark.parametrize("other", [PullRequestState.CLOSED, PullRequestState.MERGED])
    def test_one_fully_merged_is_enough(self, other: PullRequestState) -> None:
        b = branch(pr(other, B8A, number=1), pr(PullRequestState.MERGED, A97, number=2))
        assert get_branch_state(b, []) == BranchState.DELETABLE


def test_classify_branches_sets_every_state() -> None:
    branches = [Branch(head=True, name="main"), branch(pr(PullRequestState.MERGED, A97))]
    assert [b.state for b in classify_branches(branches, [])] == [
        BranchState.NOT_DELETABLE,
        BranchState.DELETABLE,
    ]


def test_commits_after_the_merged_one_still_deletable() -> None:
    b = Branch(
        head=False,
        name="issue1",
        commits=(B8A, A97),
        pull_requests=(pr(PullRequestState.MERGED, A97),),
    )
    assert get_branch_state(b, []) == BranchState.DELETABLE
