"""Protection flags stored in git config (``branch.<name>.gh-poi-protected``)."""

from __future__ import annotations

import logging

from ..cancel import CancelToken
from ..connection.base import Connection
from ..constants import PROTECTED_CONFIG_NAME
from ..errors import CommandFailure, NotFoundError
from .loader import parse_branch_names

logger = logging.getLogger(__name__)


def protected_key(branch_name: str) -> str:
    return f"branch.{branch_name}.{PROTECTED_CONFIG_NAME}"


def _check_branches_exist(connection: Connection, token: CancelToken, branch_names: list[str]) -> None:
    existing = {branch.name for branch in parse_branch_names(connection.get_branch_names(token))}
    missing = [name for name in branch_names if name not in existing]
    if missing:
        raise NotFoundError(f"branch not found: {', '.join(missing)}")


def protect_branches(connection: Connection, token: CancelToken, branch_names: list[str]) -> None:
    """Mark branches so they are never classified deletable."""
    _check_branches_exist(connection, token, branch_names)
    for name in branch_names:
        connection.add_config(token, protected_key(name), "true")
        logger.info("Protected %s", name)


def unprotect_branches(connection: Connection, token: CancelToken, branch_names: list[str]) -> None:
    """Remove protection marks; branches that were not protected are left alone."""
    _check_branches_exist(connection, token, branch_names)
    for name in branch_names:
        try:
            connection.remove_config(token, protected_key(name))
        except CommandFailure as exc:
            # git config --unset fails when the key is absent
            logger.debug("%s was not protected: %s", name, exc)
            continue
        logger.info("Unprotected %s", name)
