"""Schema-bound deserialization of GitHub GraphQL responses.

The engine never inspects raw JSON.  Responses are validated against the
pydantic models below and converted into the domain types of
``branch_sweeper.models``; any shape mismatch becomes a
``MalformedResponseError`` naming the call.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import MalformedResponseError
from ..models import PullRequest, PullRequestState


class _Login(BaseModel):
    login: str


class _RepoRef(BaseModel):
    owner: _Login
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner.login}/{self.name}"


class _BranchRef(BaseModel):
    name: str


class RepoView(BaseModel):
    """Repository metadata: full name, default branch and fork parent."""

    model_config = ConfigDict(populate_by_name=True)

    owner: _Login
    name: str
    default_branch_ref: _BranchRef = Field(alias="defaultBranchRef")
    parent: Optional[_RepoRef] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner.login}/{self.name}"

    @property
    def repo_names(self) -> list[str]:
        """The repository itself followed by its parent when it is a fork."""
        names = [self.full_name]
        if self.parent is not None:
            names.append(self.parent.full_name)
        return names

    @property
    def default_branch_name(self) -> str:
        return self.default_branch_ref.name


class _RepoData(BaseModel):
    repository: RepoView


class _RepoResponse(BaseModel):
    data: _RepoData


class _CommitOid(BaseModel):
    oid: str


class _CommitNode(BaseModel):
    commit: _CommitOid


class _CommitConnection(BaseModel):
    nodes: list[_CommitNode] = []


class _PullRequestNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number: int
    head_ref_name: str = Field(alias="headRefName")
    head_ref_oid: str = Field(alias="headRefOid")
    url: str
    state: str
    is_draft: bool = Field(alias="isDraft")
    # Deleted accounts come back as a null author
    author: Optional[_Login] = None
    commits: _CommitConnection


class _Edge(BaseModel):
    node: _PullRequestNode


class _Search(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issue_count: int = Field(alias="issueCount")
    edges: list[_Edge]


class _SearchData(BaseModel):
    search: _Search


class _SearchResponse(BaseModel):
    data: _SearchData


def parse_repo(text: str) -> RepoView:
    """Parse a repository view response."""
    try:
        return _RepoResponse.model_validate_json(text).data.repository
    except ValidationError as exc:
        raise MalformedResponseError("repo view", str(exc)) from exc


def parse_pull_requests(text: str) -> list[PullRequest]:
    """Parse a pull request search response into ``PullRequest`` values.

    Raises ``NotFoundError`` when a state is outside CLOSED/MERGED/OPEN.
    """
    try:
        response = _SearchResponse.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedResponseError("pull request search", str(exc)) from exc

    results: list[PullRequest] = []
    for edge in response.data.search.edges:
        node = edge.node
        results.append(
            PullRequest(
                name=node.head_ref_name,
                state=PullRequestState.from_api(node.state),
                is_draft=node.is_draft,
                number=node.number,
                commits=frozenset(c.commit.oid for c in node.commits.nodes),
                url=node.url,
                author=node.author.login if node.author else "",
            )
        )
    return results
