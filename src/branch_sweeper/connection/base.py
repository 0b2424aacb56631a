"""Connector interface consumed by the classification engine.

The engine never runs processes or performs HTTP itself; it calls a
``Connection``.  Every method takes the caller's ``CancelToken`` first and
returns the raw text the underlying tool produced.  Any failure is raised as
``CommandFailure`` (or ``OperationCancelled``); deciding which failures are
fatal is the engine's job.

In production, ``LocalConnection`` is used.  For testing, a FakeConnection is
available in tests/fakes.py.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..cancel import CancelToken


class Connection(Protocol):
    """Interface for git, ssh and forge access."""

    def check_repos(self, token: CancelToken, hostname: str, repo_names: Sequence[str]) -> None:
        ...

    def get_remote_names(self, token: CancelToken) -> str:
        ...

    def get_ssh_config(self, token: CancelToken, hostname: str) -> str:
        ...

    def get_repo_names(self, token: CancelToken, hostname: str, repo_name: str) -> str:
        ...

    def get_branch_names(self, token: CancelToken) -> str:
        ...

    def get_merged_branch_names(self, token: CancelToken, remote_name: str, default_branch_name: str) -> str:
        ...

    def get_remote_head_oid(self, token: CancelToken, remote_name: str, branch_name: str) -> str:
        ...

    def get_ls_remote_head_oid(self, token: CancelToken, url: str, branch_name: str) -> str:
        ...

    def get_log(self, token: CancelToken, branch_name: str) -> str:
        ...

    def get_associated_ref_names(self, token: CancelToken, oid: str) -> str:
        ...

    def get_pull_requests(
        self,
        token: CancelToken,
        hostname: str,
        org_filter: str,
        repo_filter: str,
        hash_filter: str,
    ) -> str:
        ...

    def get_uncommitted_changes(self, token: CancelToken) -> str:
        ...

    def get_config(self, token: CancelToken, key: str) -> str:
        ...

    def add_config(self, token: CancelToken, key: str, value: str) -> None:
        ...

    def remove_config(self, token: CancelToken, key: str) -> None:
        ...

    def checkout_branch(self, token: CancelToken, branch_name: str) -> None:
        ...

    def delete_branches(self, token: CancelToken, branch_names: Sequence[str]) -> str:
        ...
