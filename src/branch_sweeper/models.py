"""Domain models for Branch Sweeper.

All entities are rebuilt from live git refs, git config and forge responses
on every invocation; nothing here is persisted.  Models are frozen so that a
failed step can never leave a half-updated branch list behind: each stage
derives new values with ``dataclasses.replace``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from .errors import NotFoundError

_DETACHED_RE = re.compile(r"^\(HEAD detached at [0-9a-f]{7,}\)$")


class BranchState(str, Enum):
    """Deletion verdict of a local branch.

    Transitions are monotonic within a run: ``UNKNOWN`` becomes
    ``NOT_DELETABLE`` or ``DELETABLE``, and only a successful delete of a
    ``DELETABLE`` branch yields ``DELETED``.
    """

    UNKNOWN = "unknown"
    NOT_DELETABLE = "not_deletable"
    DELETABLE = "deletable"
    DELETED = "deleted"


class PullRequestState(str, Enum):
    CLOSED = "closed"
    MERGED = "merged"
    OPEN = "open"

    @classmethod
    def from_api(cls, value: str) -> PullRequestState:
        """Map a forge state string (``CLOSED``/``MERGED``/``OPEN``) to an enum member."""
        try:
            return cls[value]
        except KeyError:
            raise NotFoundError(f"unexpected pull request state: {value}") from None


@dataclass(frozen=True)
class Remote:
    """The primary git remote and the forge coordinates derived from it."""

    name: str
    hostname: str
    repo_name: str


@dataclass(frozen=True)
class PullRequest:
    """A pull request as recorded by the forge.

    ``name`` is the PR's head branch name and ``commits`` the commit ids the
    forge knows for it.
    """

    name: str
    state: PullRequestState
    is_draft: bool
    number: int
    commits: frozenset[str] = field(default_factory=frozenset)
    url: str = ""
    author: str = ""


@dataclass(frozen=True)
class Branch:
    """A local branch together with everything needed to judge it.

    ``commits`` is newest-first and only holds commits not yet proven to be
    upstream.
    """

    head: bool
    name: str
    is_merged: bool = False
    is_protected: bool = False
    remote_head_oid: str = ""
    commits: tuple[str, ...] = ()
    pull_requests: tuple[PullRequest, ...] = ()
    state: BranchState = BranchState.UNKNOWN

    @property
    def is_detached(self) -> bool:
        return bool(_DETACHED_RE.match(self.name))


@dataclass(frozen=True)
class UncommittedChange:
    """One ``git status --porcelain`` entry."""

    x: str
    y: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.x == "?" and self.y == "?"
