"""Tests for the ancestry walk that trims a branch's commits."""

from __future__ import annotations

import pytest
from fakes import A97, B8A, CB1, D78, EBE, S62, FakeConnection

from branch_sweeper.errors import CommandFailure
from branch_sweeper.engine.trimmer import apply_commits, parse_ref_names, strip_ref_name, trim_commits
from branch_sweeper.models import Branch


def refs(*names: str) -> str:
    return "".join(f"{name}\n" for name in names)


@pytest.mark.parametrize(
    ("ref_name", "expected"),
    [
        ("refs/heads/issue1", "issue1"),
        ("refs/heads/fork/main", "fork/main"),
        ("refs/remotes/origin/main", "main"),
        ("refs/remotes/upstream/feature/x", "feature/x"),
        ("issue1", "issue1"),
    ],
)
def test_strip_ref_name(ref_name: str, expected: str) -> None:
    assert strip_ref_name(ref_name) == expected


def test_parse_ref_names_skips_symbolic_and_detached() -> None:
    text = refs("refs/heads/issue1", "refs/remotes/origin/HEAD", "(HEAD detached at a97e963)", "refs/remotes/origin/issue1")
    assert parse_ref_names(text) == {"issue1"}


class TestTrimCommits:
    """Tests for ``trim_commits``."""

    def test_empty_log(self, token) -> None:
        conn = FakeConnection()
        assert trim_commits(conn, token, "issue1", "main", "", False, []) == ()

    def test_remote_head_keeps_only_tip(self, token) -> None:
        conn = FakeConnection()
        assert trim_commits(conn, token, "issue1", "main", A97, False, [A97, EBE]) == (A97,)
        assert conn.called("get_associated_ref_names") == []

    def test_merged_keeps_only_tip(self, token) -> None:
        conn = FakeConnection()
        assert trim_commits(conn, token, "issue1", "main", "", True, [A97, EBE]) == (A97,)

    def test_tip_on_default_branch_yields_nothing(self, token) -> None:
        conn = FakeConnection(associated_ref_names={EBE: refs("refs/heads/main", "refs/heads/issue1")})
        assert trim_commits(conn, token, "issue1", "main", "", False, [EBE]) == ()

    def test_tip_on_remote_default_branch_yields_nothing(self, token) -> None:
        conn = FakeConnection(associated_ref_names={EBE: refs("refs/heads/issue1", "refs/remotes/origin/main")})
        assert trim_commits(conn, token, "issue1", "main", "", False, [EBE]) == ()

    def test_squash_merged_branch_stops_at_fork_point(self, token) -> None:
        conn = FakeConnection(associated_ref_names={
            A97: refs("refs/heads/issue1"),
            EBE: refs("refs/heads/main", "refs/heads/issue1"),
        })
        assert trim_commits(conn, token, "issue1", "main", "", False, [A97, EBE]) == (A97,)

    def test_commits_after_merge_are_kept(self, token) -> None:
        conn = FakeConnection(associated_ref_names={
            B8A: refs("refs/heads/issue1"),
            A97: refs("refs/heads/issue1"),
            EBE: refs("refs/heads/main", "refs/heads/issue1"),
            CB1: refs("refs/heads/main"),
        })
        assert trim_commits(conn, token, "issue1", "main", "", False, [B8A, A97, EBE, CB1]) == (B8A, A97)
        assert CB1 not in [args[0] for args in conn.called("get_associated_ref_names")]

    def test_siblings_sharing_the_tip_do_not_stop_the_walk(self, token) -> None:
        conn = FakeConnection(associated_ref_names={
            A97: refs("refs/heads/issue1", "refs/heads/issue1-copy"),
            B8A: refs("refs/heads/issue1", "refs/heads/issue1-copy"),
            EBE: refs("refs/heads/issue1", "refs/heads/issue1-copy", "refs/heads/other"),
        })
        assert trim_commits(conn, token, "issue1", "main", "", False, [A97, B8A, EBE]) == (A97, B8A)

    def test_whole_bounded_log_is_kept(self, token) -> None:
        conn = FakeConnection(associated_ref_names={oid: refs("refs/heads/issue1") for oid in (S62, B8A, D78)})
        assert trim_commits(conn, token, "issue1", "main", "", False, [S62, B8A, D78]) == (S62, B8A, D78)

    def test_lookup_failure_is_fatal(self, token) -> None:
        conn = FakeConnection()
        with pytest.raises(CommandFailure):
            trim_commits(conn, token, "issue1", "main", "", False, [A97])


class TestApplyCommits:
    """Tests for attaching commits to a branch list."""

    def test_only_detached_is_not_walked(self, token) -> None:
        conn = FakeConnection(
            logs={"issue1": f"{A97}\n{EBE}\n", "main": f"{EBE}\n{CB1}\n"},
            associated_ref_names={A97: refs("refs/heads/issue1"), EBE: refs("refs/heads/main")},
        )
        branches = [
            Branch(head=True, name="(HEAD detached at a97e963)"),
            Branch(head=False, name="issue1"),
            Branch(head=False, name="main", is_merged=True),
        ]
        result = apply_commits(conn, token, branches, "main")
        # Merged, so the default branch keeps only its tip
        assert [b.commits for b in result] == [(), (A97,), (EBE,)]
        assert conn.called("get_log") == [("issue1",), ("main",)]

    def test_log_failure_is_fatal(self, token) -> None:
        conn = FakeConnection()
        with pytest.raises(CommandFailure):
            apply_commits(conn, token, [Branch(head=False, name="issue1")], "main")
