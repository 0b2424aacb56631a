"""Configuration loading for Branch Sweeper.

This module loads environment variables from a `.env` file using
`python-dotenv` and populates a `Config` object.

Required variables:
- GITHUB_TOKEN (``GH_TOKEN`` is accepted as an alias)

Optional variables with defaults:
- SWEEPER_REPO_PATH (default: '.')
- LOG_LEVEL (default: 'INFO')
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class Config:
    """Configuration values loaded from the environment."""

    github_token: str
    repo_path: str
    log_level: str

    @classmethod
    def load_from_env(cls) -> Config:
        """Load configuration from environment variables.

        The `.env` file is loaded if present.  Raises `RuntimeError` if
        required variables are missing.
        """
        load_dotenv()

        # Required: GITHUB_TOKEN, falling back to the gh CLI's GH_TOKEN
        github_token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
        if not github_token:
            raise RuntimeError("Missing required environment variables: GITHUB_TOKEN")

        repo_path = os.getenv("SWEEPER_REPO_PATH", ".")
        log_level = os.getenv("LOG_LEVEL", "INFO")

        return cls(
            github_token=github_token,
            repo_path=repo_path,
            log_level=log_level,
        )
