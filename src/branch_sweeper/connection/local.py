"""Production connector backed by the git and ssh command-line tools.

Git operations run as child processes inside ``repo_path``; forge
operations are delegated to the GraphQL wrapper in ``connection.github``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..cancel import CancelToken
from ..config import Config
from ..constants import LOG_MAX_COUNT
from . import github
from .runner import run_command

logger = logging.getLogger(__name__)


class LocalConnection:
    """Connection that executes against a working tree on this machine."""

    def __init__(self, repo_path: str, config: Config) -> None:
        self.repo_path = repo_path
        self.config = config

    def _git(self, token: CancelToken, *args: str) -> str:
        return run_command(["git", *args], self.repo_path, token, secrets=[self.config.github_token])

    # Forge

    def check_repos(self, token: CancelToken, hostname: str, repo_names: Sequence[str]) -> None:
        github.check_repos(self.config, token, hostname, repo_names)

    def get_repo_names(self, token: CancelToken, hostname: str, repo_name: str) -> str:
        return github.get_repo(self.config, token, hostname, repo_name)

    def get_pull_requests(
        self,
        token: CancelToken,
        hostname: str,
        org_filter: str,
        repo_filter: str,
        hash_filter: str,
    ) -> str:
        return github.search_pull_requests(self.config, token, hostname, org_filter, repo_filter, hash_filter)

    # Remotes

    def get_remote_names(self, token: CancelToken) -> str:
        return self._git(token, "remote", "-v")

    def get_ssh_config(self, token: CancelToken, hostname: str) -> str:
        return run_command(["ssh", "-G", hostname], self.repo_path, token)

    # Branches

    def get_branch_names(self, token: CancelToken) -> str:
        return self._git(token, "branch", "--format=%(HEAD):%(refname:short)")

    def get_merged_branch_names(self, token: CancelToken, remote_name: str, default_branch_name: str) -> str:
        return self._git(token, "branch", "--merged", f"refs/remotes/{remote_name}/{default_branch_name}")

    def get_remote_head_oid(self, token: CancelToken, remote_name: str, branch_name: str) -> str:
        return self._git(token, "rev-parse", "--verify", "--quiet", f"refs/remotes/{remote_name}/{branch_name}")

    def get_ls_remote_head_oid(self, token: CancelToken, url: str, branch_name: str) -> str:
        return self._git(token, "ls-remote", url, f"refs/heads/{branch_name}")

    def get_log(self, token: CancelToken, branch_name: str) -> str:
        return self._git(
            token,
            "-c", "log.showSignature=false",
            "log", "--first-parent", f"--max-count={LOG_MAX_COUNT}", "--format=%H",
            f"refs/heads/{branch_name}", "--",
        )

    def get_associated_ref_names(self, token: CancelToken, oid: str) -> str:
        return self._git(token, "branch", "--all", "--contains", oid, "--format=%(refname)")

    def get_uncommitted_changes(self, token: CancelToken) -> str:
        return self._git(token, "status", "--porcelain", "--untracked-files=normal")

    # Config

    def get_config(self, token: CancelToken, key: str) -> str:
        return self._git(token, "config", "--get", key)

    def add_config(self, token: CancelToken, key: str, value: str) -> None:
        self._git(token, "config", key, value)

    def remove_config(self, token: CancelToken, key: str) -> None:
        self._git(token, "config", "--unset", key)

    # Mutations

    def checkout_branch(self, token: CancelToken, branch_name: str) -> None:
        self._git(token, "checkout", "--quiet", branch_name)

    def delete_branches(self, token: CancelToken, branch_names: Sequence[str]) -> str:
        return self._git(token, "branch", "-D", *branch_names)
