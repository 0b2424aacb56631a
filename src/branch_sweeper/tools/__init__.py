"""Tool module exports for Branch Sweeper.

Usage:

    from branch_sweeper.tools import branch_tools
    branch_tools.list_branches(repo_path=".")

The server imports these modules and dispatches requests accordingly.
"""

from . import branch_tools  # noqa: F401

__all__ = [
    "branch_tools",
]
