"""Global constants for Branch Sweeper.

These values serve as defaults for command execution, history depth and
forge search limits.  Changing these values is discouraged; instead override
environment variables as needed.
"""

import os

# Command execution
COMMAND_TIMEOUT_S = int(os.environ.get("COMMAND_TIMEOUT_S", 60))
CANCEL_POLL_INTERVAL_S = float(os.environ.get("CANCEL_POLL_INTERVAL_S", 0.1))
HTTP_TIMEOUT_S = float(os.environ.get("HTTP_TIMEOUT_S", 10.0))

# History walk
LOG_MAX_COUNT = int(os.environ.get("LOG_MAX_COUNT", 30))

# Forge search
# https://docs.github.com/en/rest/search/search#limitations-on-query-length
QUERY_MAX_LENGTH = 256
SEARCH_LIMIT = int(os.environ.get("SEARCH_LIMIT", 100))
PR_COMMIT_LIMIT = int(os.environ.get("PR_COMMIT_LIMIT", 100))

# Hostnames
GITHUB_HOSTNAME = "github.com"
LOCAL_HOSTNAME = "github.localhost"

# Git config
PROTECTED_CONFIG_NAME = "gh-poi-protected"

# Transport
MCP_TRANSPORT = os.environ.get("MCP_TRANSPORT", "stdio")

