"""Remote resolution: which remote is primary and which forge host it names."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..cancel import CancelToken
from ..connection.base import Connection
from ..constants import GITHUB_HOSTNAME, LOCAL_HOSTNAME
from ..errors import CommandFailure, NotFoundError
from ..models import Remote

logger = logging.getLogger(__name__)

# origin  git@github.com:owner/repo.git (fetch)
# origin  https://github.com/owner/repo (push)
# origin  ssh://git@github.com:22/owner/repo.git (fetch)
_REMOTE_RE = re.compile(
    r"^(?P<name>\S+)\s+"
    r"(?:[A-Za-z][A-Za-z0-9+.-]*://(?:[^@/\s]+@)?|[^@/\s]+@)"
    r"(?P<host>[^:/\s]+)(?::\d+(?=/))?[:/]"
    r"(?P<repo>[^/\s]+/[^/\s]+?)(?:\.git)?/?(?:\s|$)"
)


def parse_remotes(text: str) -> list[Remote]:
    """Parse ``git remote -v`` output, keeping the first line seen per remote.

    Hostnames are returned as written in the URL; see ``normalize_hostname``.
    Lines that do not name a forge repository (local paths, for example) are
    skipped.
    """
    remotes: list[Remote] = []
    seen: set[str] = set()
    for line in text.splitlines():
        match = _REMOTE_RE.match(line.strip())
        if not match or match.group("name") in seen:
            continue
        seen.add(match.group("name"))
        remotes.append(Remote(match.group("name"), match.group("host"), match.group("repo")))
    return remotes


def get_primary_remote(remotes: list[Remote]) -> Remote:
    for remote in remotes:
        if remote.name == "origin":
            return remote
    return remotes[0]


def find_hostname(ssh_config_lines: Iterable[str], default: str) -> str:
    """Return the ``hostname`` value of an ``ssh -G`` dump, or ``default``."""
    for line in ssh_config_lines:
        parts = line.strip().split(None, 1)
        if len(parts) == 2 and parts[0].lower() == "hostname":
            return parts[1].strip()
    return default


def normalize_hostname(hostname: str) -> str:
    """Lowercase ``hostname`` and fold subdomains of github.com/github.localhost."""
    hostname = hostname.lower()
    for canonical in (GITHUB_HOSTNAME, LOCAL_HOSTNAME):
        if hostname == canonical or hostname.endswith(f".{canonical}"):
            return canonical
    return hostname


def get_remote(connection: Connection, token: CancelToken) -> Remote:
    """Resolve the primary remote and the forge hostname behind it.

    An ssh alias is resolved through ``ssh -G``; when that lookup fails the
    hostname from the URL is used as is.  Raises ``NotFoundError`` if no
    remote can be parsed.
    """
    remotes = parse_remotes(connection.get_remote_names(token))
    if not remotes:
        raise NotFoundError("no git remote pointing at a forge repository was found")
    remote = get_primary_remote(remotes)

    hostname = remote.hostname
    try:
        hostname = find_hostname(connection.get_ssh_config(token, remote.hostname).splitlines(), remote.hostname)
    except CommandFailure as exc:
        logger.debug("ssh config lookup for %s failed, using it verbatim: %s", remote.hostname, exc)

    resolved = Remote(remote.name, normalize_hostname(hostname), remote.repo_name)
    logger.debug("Using remote %s on %s (%s)", resolved.name, resolved.hostname, resolved.repo_name)
    return resolved
