"""Tests for loading the branch list."""

from __future__ import annotations

import pytest
from fakes import A97, FakeConnection

from branch_sweeper.errors import CommandFailure
from branch_sweeper.engine.loader import (
    get_remote_head_oid,
    is_protected,
    load_branches,
    parse_branch_names,
    parse_merged_branch_names,
)
from branch_sweeper.models import Branch


def test_parse_branch_names_marks_head() -> None:
    branches = parse_branch_names("*:main\n :issue1\n :fork/main\n\n")
    assert branches == [
        Branch(head=True, name="main"),
        Branch(head=False, name="issue1"),
        Branch(head=False, name="fork/main"),
    ]


def test_parse_branch_names_detached_head() -> None:
    (branch,) = parse_branch_names("*:(HEAD detached at a97e963)\n")
    assert branch.head is True
    assert branch.is_detached is True


def test_parse_merged_branch_names() -> None:
    assert parse_merged_branch_names("* main\n  issue1\n") == {"main", "issue1"}


def test_parse_merged_branch_names_other_worktree() -> None:
    assert parse_merged_branch_names("* main\n+ issue1\n  issue2\n") == {"main", "issue1", "issue2"}


class TestIsProtected:
    """Tests for reading the protection flag."""

    def test_true_value(self, token) -> None:
        conn = FakeConnection(config={"branch.issue1.gh-poi-protected": "true\n"})
        assert is_protected(conn, token, "issue1") is True

    def test_other_value(self, token) -> None:
        conn = FakeConnection(config={"branch.issue1.gh-poi-protected": "false\n"})
        assert is_protected(conn, token, "issue1") is False

    def test_lookup_failure_means_unprotected(self, token, caplog) -> None:
        with caplog.at_level("DEBUG", logger="branch_sweeper.engine.loader"):
            assert is_protected(FakeConnection(), token, "issue1") is False
        assert "No protection flag for issue1" in caplog.text


class TestRemoteHeadOid:
    """Tests for the remote-tracking ref and ls-remote fallback."""

    def test_tracking_ref(self, token, remote) -> None:
        conn = FakeConnection(remote_head_oids={"issue1": f"{A97}\n"})
        assert get_remote_head_oid(conn, token, remote, "issue1") == A97
        assert conn.called("get_ls_remote_head_oid") == []

    def test_falls_back_to_ls_remote(self, token, remote) -> None:
        url = "https://github.com/someone/repo.git"
        conn = FakeConnection(
            config={"branch.issue1.remote": f"{url}\n"},
            ls_remote_head_oids={"issue1": f"{A97}\trefs/heads/issue1\n"},
        )
        assert get_remote_head_oid(conn, token, remote, "issue1") == A97
        assert conn.called("get_ls_remote_head_oid") == [(url, "issue1")]

    def test_no_remote_configured(self, token, remote) -> None:
        conn = FakeConnection()
        assert get_remote_head_oid(conn, token, remote, "issue1") == ""
        assert conn.called("get_ls_remote_head_oid") == []

    def test_ls_remote_without_match(self, token, remote) -> None:
        conn = FakeConnection(config={"branch.issue1.remote": "origin"}, ls_remote_head_oids={"issue1": ""})
        assert get_remote_head_oid(conn, token, remote, "issue1") == ""


class TestLoadBranches:
    """Tests for the assembled branch list."""

    def test_flags_are_attached(self, token, remote) -> None:
        conn = FakeConnection(
            branch_names="*:main\n :issue1\n :issue2\n",
            merged_branch_names="* main\n  issue1\n",
            remote_head_oids={"issue1": A97},
            config={"branch.issue2.gh-poi-protected": "true"},
        )
        branches = load_branches(conn, token, remote, "main")
        assert branches == [
            Branch(head=True, name="main", is_merged=True),
            Branch(head=False, name="issue1", is_merged=True, remote_head_oid=A97),
            Branch(head=False, name="issue2", is_protected=True),
        ]

    def test_only_detached_skips_remote_head(self, token, remote) -> None:
        conn = FakeConnection(
            branch_names="*:(HEAD detached at a97e963)\n :main\n",
            merged_branch_names="  main\n",
            remote_head_oids={"main": A97},
        )
        detached, main = load_branches(conn, token, remote, "main")
        assert conn.called("get_remote_head_oid") == [("origin", "main")]
        assert detached.remote_head_oid == ""
        assert main.remote_head_oid == A97

    def test_merged_listing_failure_is_fatal(self, token, remote) -> None:
        conn = FakeConnection(failures={"get_merged_branch_names": CommandFailure("git branch --merged")})
        with pytest.raises(CommandFailure):
            load_branches(conn, token, remote, "main")
