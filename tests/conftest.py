"""Pytest configuration and fixtures for Branch Sweeper tests.

IMPORTANT: Environment variables must be set BEFORE importing branch_sweeper
modules, as the state module loads configuration at import time.
"""

from __future__ import annotations

import os

# Set environment variables BEFORE any branch_sweeper imports
os.environ.setdefault("GITHUB_TOKEN", "test-github-token")

import pytest

from branch_sweeper.cancel import CancelToken
from branch_sweeper.models import Remote


@pytest.fixture
def token() -> CancelToken:
    return CancelToken()


@pytest.fixture
def remote() -> Remote:
    return Remote("origin", "github.com", "owner/repo")


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up basic test environment."""
    monkeypatch.setenv("GITHUB_TOKEN", "test-github-token")
