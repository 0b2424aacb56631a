"""GitHub GraphQL API wrapper.

Forge calls go straight to the GraphQL endpoint of the host the primary
remote points at.  Responses are returned as raw JSON text; turning them into
domain values is the job of ``branch_sweeper.github.schema``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from ..cancel import CancelToken
from ..config import Config
from ..constants import GITHUB_HOSTNAME, HTTP_TIMEOUT_S, LOCAL_HOSTNAME, PR_COMMIT_LIMIT, SEARCH_LIMIT
from ..errors import CommandFailure, MalformedResponseError
from ..policy.redaction import redact_secrets

logger = logging.getLogger(__name__)

CHECK_REPO_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
  }
}
"""

REPO_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    owner { login }
    name
    defaultBranchRef { name }
    parent {
      owner { login }
      name
    }
  }
}
"""

SEARCH_QUERY = f"""
query($q: String!) {{
  search(type: ISSUE, query: $q, first: {SEARCH_LIMIT}) {{
    issueCount
    edges {{
      node {{
        ... on PullRequest {{
          number
          headRefName
          headRefOid
          url
          state
          isDraft
          author {{ login }}
          commits(last: {PR_COMMIT_LIMIT}) {{
            nodes {{
              commit {{ oid }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""


def graphql_url(hostname: str) -> str:
    """Return the GraphQL endpoint for a (normalized) forge hostname."""
    if hostname == GITHUB_HOSTNAME:
        return "https://api.github.com/graphql"
    if hostname == LOCAL_HOSTNAME:
        return "http://api.github.localhost/graphql"
    # GitHub Enterprise Server
    return f"https://{hostname}/api/graphql"


def get_github_client(config: Config) -> httpx.Client:
    """Return a configured GitHub httpx client with the Authorization header set."""
    return httpx.Client(
        headers={
            "Authorization": f"bearer {config.github_token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": "branch-sweeper",
        },
        timeout=HTTP_TIMEOUT_S,
    )


def _split_repo_name(repo_name: str) -> tuple[str, str]:
    try:
        owner, name = repo_name.split("/", 1)
    except ValueError as exc:
        raise ValueError(f"Invalid repository name '{repo_name}'") from exc
    return owner, name


def _graphql(
    config: Config,
    token: CancelToken,
    hostname: str,
    call: str,
    query: str,
    variables: dict[str, object],
) -> str:
    """POST a GraphQL document and return the response body.

    Transport errors, non-2xx statuses and GraphQL ``errors`` entries are all
    raised as ``CommandFailure``.  The cancellation token is checked before
    the request is sent and again once it returns; the request itself is
    bounded by the client timeout.
    """
    token.raise_if_cancelled()
    url = graphql_url(hostname)
    secrets = [config.github_token]
    try:
        with get_github_client(config) as client:
            resp = client.post(url, json={"query": query, "variables": variables})
    except httpx.HTTPError as exc:
        logger.error("GitHub API request failed: %s", exc)
        raise CommandFailure(call, redact_secrets(str(exc), secrets)) from exc
    token.raise_if_cancelled()

    if not 200 <= resp.status_code < 300:
        logger.error("GitHub API error %s on %s", resp.status_code, call)
        raise CommandFailure(call, f"HTTP {resp.status_code}: {redact_secrets(resp.text, secrets)}")

    try:
        payload = resp.json()
    except ValueError as exc:
        raise MalformedResponseError(call, "response is not JSON") from exc

    # GraphQL reports failures such as unknown repositories with a 200 status
    if isinstance(payload, dict) and payload.get("errors"):
        messages = "; ".join(str(err.get("message", err)) for err in payload["errors"] if isinstance(err, dict))
        raise CommandFailure(call, redact_secrets(messages or "unknown GraphQL error", secrets))
    return resp.text


def check_repos(config: Config, token: CancelToken, hostname: str, repo_names: Sequence[str]) -> None:
    """Fail unless the forge knows every repository in ``repo_names``."""
    for repo_name in repo_names:
        owner, name = _split_repo_name(repo_name)
        _graphql(config, token, hostname, f"check repo {repo_name}", CHECK_REPO_QUERY, {"owner": owner, "name": name})


def get_repo(config: Config, token: CancelToken, hostname: str, repo_name: str) -> str:
    """Return owner, name, default branch and fork parent of ``repo_name``."""
    owner, name = _split_repo_name(repo_name)
    return _graphql(config, token, hostname, f"repo view {repo_name}", REPO_QUERY, {"owner": owner, "name": name})


def search_pull_requests(
    config: Config,
    token: CancelToken,
    hostname: str,
    org_filter: str,
    repo_filter: str,
    hash_filter: str,
) -> str:
    """Run one batched pull request search over the given filters."""
    query = " ".join(part for part in ("is:pr", org_filter, repo_filter, hash_filter) if part)
    logger.debug("Searching pull requests: %s", query)
    return _graphql(config, token, hostname, "pull request search", SEARCH_QUERY, {"q": query})
