"""Top‑level package for Branch Sweeper.

This package decides which local branches of a GitHub-hosted repository are
fully incorporated upstream (merged, fast-forwarded or squash-merged through a
pull request) and deletes them.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
