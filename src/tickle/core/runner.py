"""Blocking execution of external control-plane commands."""

import logging
import os
import subprocess

from tickle.core.errors import ControlPlaneUnavailable

logger = logging.getLogger(__name__)


def run(program: str, *args: str) -> subprocess.CompletedProcess:
    """Run ``program`` with ``args`` and capture its output as text.

    Undecodable output bytes are replaced rather than raising. A non-zero
    exit is returned to the caller untouched; only a failure to launch the
    program raises ControlPlaneUnavailable.
    """
    argv = [program, *args]
    logger.debug("running %s", " ".join(argv))
    try:
        result = subprocess.run(argv, capture_output=True, text=True, errors="replace")
    except OSError as e:
        raise ControlPlaneUnavailable(f"Failed to run {program}: {e}") from e
    logger.debug("%s exited with %d", program, result.returncode)
    return result


def stderr_text(result: subprocess.CompletedProcess) -> str:
    """Trimmed stderr of a finished command."""
    return (result.stderr or "").strip()


def replace_process(argv: list[str]) -> None:
    """Replace the current process with ``argv``.

    Only returns (by raising ControlPlaneUnavailable) when the exec fails.
    """
    logger.debug("exec %s", " ".join(argv))
    try:
        os.execvp(argv[0], argv)
    except OSError as e:
        raise ControlPlaneUnavailable(f"Failed to run {argv[0]}: {e}") from e
