"""MCP stdio server entrypoint for Branch Sweeper.

The server runs over standard input/output using the Model Context Protocol.
It registers tool functions that clients can invoke to inspect, protect and
delete local branches whose pull requests have been merged.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

from mcp.server.fastmcp import FastMCP

from .constants import MCP_TRANSPORT
from .state import CONFIG
from .tools import branch_tools


def build_tools_dispatch() -> dict[str, Callable[..., dict[str, Any]]]:
    """Return a mapping from tool names to callables.

    Each callable accepts keyword arguments and returns a JSON-serializable
    dictionary.
    """
    return {
        "list_branches": branch_tools.list_branches,
        "sweep_branches": branch_tools.sweep_branches,
        "protect_branches": branch_tools.protect_branches,
        "unprotect_branches": branch_tools.unprotect_branches,
    }


def main() -> None:
    """Entrypoint for the Branch Sweeper MCP server."""
    # Configure logging to stderr (stdout is used for MCP protocol)
    logging.basicConfig(
        level=getattr(logging, CONFIG.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)
    logger.info("Starting Branch Sweeper MCP server")

    mcp = FastMCP("branch-sweeper")

    dispatch = build_tools_dispatch()
    for name, func in dispatch.items():
        mcp.add_tool(func, name=name)

    logger.info("Registered %d tools", len(dispatch))

    mcp.run(transport=MCP_TRANSPORT)


if __name__ == "__main__":
    main()
