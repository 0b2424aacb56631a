"""Typed views of GitHub API responses."""

from .schema import RepoView, parse_pull_requests, parse_repo

__all__ = [
    "RepoView",
    "parse_repo",
    "parse_pull_requests",
]
