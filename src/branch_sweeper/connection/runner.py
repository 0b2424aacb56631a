"""Child process execution with timeout and cancellation."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from collections.abc import Iterable, Sequence

from ..cancel import CancelToken
from ..constants import CANCEL_POLL_INTERVAL_S, COMMAND_TIMEOUT_S
from ..errors import CommandFailure, OperationCancelled
from ..policy.redaction import redact_secrets

logger = logging.getLogger(__name__)


def run_command(
    argv: Sequence[str],
    cwd: str,
    token: CancelToken,
    timeout_s: int = COMMAND_TIMEOUT_S,
    secrets: Iterable[str] = (),
) -> str:
    """Run ``argv`` in ``cwd`` and return its stdout.

    The call blocks, polling ``token`` while the process runs.  Cancellation
    kills the process and raises ``OperationCancelled``; a non-zero exit, a
    missing executable or an exceeded timeout raises ``CommandFailure`` with
    the redacted stderr.
    """
    token.raise_if_cancelled()
    command = shlex.join(argv)
    secrets = list(secrets)
    logger.debug("Running %s", redact_secrets(command, secrets))

    start_ns = time.time_ns()
    try:
        proc = subprocess.Popen(
            list(argv),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            shell=False,
            text=True,
            env={
                **os.environ,
                "GIT_TERMINAL_PROMPT": "0",
                "LC_ALL": "C",
            },
        )
    except OSError as exc:
        raise CommandFailure(argv[0], str(exc)) from exc

    deadline = time.monotonic() + timeout_s
    while True:
        try:
            stdout, stderr = proc.communicate(timeout=CANCEL_POLL_INTERVAL_S)
            break
        except subprocess.TimeoutExpired:
            if token.cancelled:
                proc.kill()
                proc.communicate()
                raise OperationCancelled(f"cancelled: {argv[0]}") from None
            if time.monotonic() > deadline:
                proc.kill()
                proc.communicate()
                raise CommandFailure(argv[0], f"timed out after {timeout_s}s") from None

    duration_ms = int((time.time_ns() - start_ns) / 1_000_000)
    logger.debug("%s exited %d in %dms", argv[0], proc.returncode, duration_ms)

    if proc.returncode != 0:
        detail = redact_secrets((stderr or "").strip(), secrets)
        raise CommandFailure(redact_secrets(command, secrets), detail, proc.returncode)
    return stdout or ""
