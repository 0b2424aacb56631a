"""Policy utilities for Branch Sweeper."""

from .redaction import redact_secrets

__all__ = [
    "redact_secrets",
]
