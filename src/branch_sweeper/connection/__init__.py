"""Access to git, ssh and the forge."""

from .base import Connection
from .local import LocalConnection
from .runner import run_command

__all__ = [
    "Connection",
    "LocalConnection",
    "run_command",
]
