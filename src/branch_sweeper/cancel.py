"""Cancellation token threaded through every external call."""

from __future__ import annotations

import threading

from .errors import OperationCancelled


class CancelToken:
    """A one-shot, thread-safe cancellation flag.

    The token is created by the caller of a top-level operation and passed to
    every connector call.  Cancelling it makes the in-flight call abort and
    raise ``OperationCancelled``.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; return True if cancelled meanwhile."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("operation cancelled")
