"""Branch Sweeper exception hierarchy.

All sweeper-specific exceptions inherit from SweeperError.
"""

from __future__ import annotations


class SweeperError(Exception):
    """Base exception for all Branch Sweeper errors."""


class CommandFailure(SweeperError):
    """Raised when a call to git, ssh or the forge API fails."""

    def __init__(self, command: str, detail: str = "", exit_code: int | None = None) -> None:
        self.command = command
        self.detail = detail
        self.exit_code = exit_code
        message = f"failed to run external command: {command}"
        if exit_code is not None:
            message += f" (exit {exit_code})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class NotFoundError(SweeperError):
    """Raised when an expected value is absent or outside a known enumeration."""


class MalformedResponseError(SweeperError):
    """Raised when a forge response does not have the expected shape.

    The message names the call whose response failed validation.
    """

    def __init__(self, call: str, reason: str) -> None:
        self.call = call
        super().__init__(f"malformed response from {call}: {reason}")


class OperationCancelled(SweeperError):
    """Raised when the cancellation token fires before or during a call."""
