"""Branch classification engine."""

from .classify import get_branch_state
from .deletion import delete_branches
from .protect import protect_branches, unprotect_branches
from .remote import get_remote
from .service import get_branches

__all__ = [
    "get_remote",
    "get_branches",
    "get_branch_state",
    "delete_branches",
    "protect_branches",
    "unprotect_branches",
]
