"""Compose stack detection and control via docker compose / docker-compose."""

import logging
from pathlib import Path

from rich.markup import escape

from tickle.core import runner
from tickle.core.errors import ControlPlaneUnavailable, OperationFailed
from tickle.core.theme import fmt, print_info, print_warning

logger = logging.getLogger(__name__)

# Probed in this order; the first match wins.
MANIFEST_NAMES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
    "container-compose.yml",
    "container-compose.yaml",
)

MODERN_CLI = ("docker", "compose")
LEGACY_CLI = ("docker-compose",)


def locate(cwd: Path | None = None) -> Path | None:
    """Return the first compose manifest present in ``cwd``, if any."""
    base = Path.cwd() if cwd is None else cwd
    for name in MANIFEST_NAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def _run_compose(*args: str) -> None:
    """Run a compose command, preferring ``docker compose`` over ``docker-compose``.

    Any failure of the modern CLI, launch or exit status, falls through to
    the legacy one; the legacy attempt's error is the one reported.
    """
    try:
        result = runner.run(*MODERN_CLI, *args)
    except ControlPlaneUnavailable as e:
        logger.info("%s, trying docker-compose", e)
    else:
        if result.returncode == 0:
            return
        logger.info("docker compose failed (%s), trying docker-compose", runner.stderr_text(result))

    result = runner.run(*LEGACY_CLI, *args)
    if result.returncode != 0:
        raise OperationFailed(f"Compose command failed: {runner.stderr_text(result)}")


def up(manifest: Path) -> None:
    """Bring the stack up in detached mode."""
    print_info(f"Starting compose stack {fmt(manifest.name)}...")
    _run_compose("-f", str(manifest), "up", "-d")


def down(manifest: Path) -> None:
    """Bring the stack down."""
    print_info(f"Stopping compose stack {fmt(manifest.name)}...")
    _run_compose("-f", str(manifest), "down")


def down_up(manifest: Path) -> None:
    """Take the stack down and bring it back up.

    Not atomic: if ``down`` fails, ``up`` is never attempted.
    """
    down(manifest)
    up(manifest)


def follow_logs(manifest: Path) -> None:
    """Replace this process with ``compose logs -f`` for the stack."""
    args = ["-f", str(manifest), "logs", "-f"]
    print_info("Following compose logs (Ctrl+C to stop)...")
    try:
        runner.replace_process([*MODERN_CLI, *args])
    except ControlPlaneUnavailable as e:
        print_warning(f"docker compose not available ({escape(str(e))}), trying docker-compose...")
        runner.replace_process([*LEGACY_CLI, *args])
