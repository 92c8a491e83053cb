"""Systemd service inspection, restart strategy and control."""

import logging
import subprocess
from enum import Enum

from tickle.core import runner
from tickle.core.errors import ControlPlaneUnavailable, OperationFailed
from tickle.core.theme import fmt, print_info, print_kv

logger = logging.getLogger(__name__)


class ServiceState(Enum):
    """Activation state reported by ``systemctl is-active``."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class RestartStrategy(Enum):
    """How a tickle restarts a service."""

    RESTART = "Restart"
    STOP_START = "StopStart"


_STATES = {
    "active": ServiceState.ACTIVE,
    "inactive": ServiceState.INACTIVE,
    "failed": ServiceState.FAILED,
}


def _run_systemctl(*args: str, user: bool = False) -> subprocess.CompletedProcess:
    """Run systemctl, adding --user for user units."""
    if user:
        return runner.run("systemctl", "--user", *args)
    return runner.run("systemctl", *args)


def check_available(user: bool = False) -> None:
    """Raise ControlPlaneUnavailable unless systemctl can be launched."""
    try:
        _run_systemctl("--version", user=user)
    except ControlPlaneUnavailable as e:
        raise ControlPlaneUnavailable(
            "systemctl is not available. This tool requires systemd."
        ) from e


def parse_state(text: str) -> ServiceState:
    """Map ``is-active`` output to a ServiceState. Never fails."""
    return _STATES.get(text.strip().lower(), ServiceState.UNKNOWN)


def get_state(name: str, user: bool = False) -> ServiceState:
    """Query the current activation state of a service.

    "inactive" and "failed" are ordinary answers, not errors; only a launch
    failure of systemctl raises.
    """
    result = _run_systemctl("is-active", name, user=user)
    return parse_state(result.stdout or "")


def _show_property(name: str, key: str, user: bool = False) -> str | None:
    """Value of a unit property, or None if the probe gave no usable answer."""
    result = _run_systemctl("show", name, f"--property={key}", user=user)
    if result.returncode != 0:
        logger.info("could not read %s of %s: %s", key, name, runner.stderr_text(result))
        return None
    for line in (result.stdout or "").splitlines():
        prop, sep, value = line.strip().partition("=")
        if sep and prop == key:
            return value.strip()
    return None


def resolve_strategy(name: str, user: bool = False) -> RestartStrategy:
    """Decide whether ``name`` can take a direct restart.

    CanRestart is missing on many installations, so the property probes are
    advisory: anything short of a clear "no" falls back to Restart. A unit
    that cannot be found at all gets StopStart.
    """
    if _run_systemctl("cat", name, user=user).returncode != 0:
        logger.info("unit %s not found, using stop/start", name)
        return RestartStrategy.STOP_START

    if _show_property(name, "CanRestart", user=user) == "yes":
        return RestartStrategy.RESTART

    unit_type = _show_property(name, "Type", user=user)
    if unit_type == "oneshot":
        # oneshot units only survive a restart when they stay active after exit
        if _show_property(name, "RemainAfterExit", user=user) == "yes":
            return RestartStrategy.RESTART
        return RestartStrategy.STOP_START

    return RestartStrategy.RESTART


def _control(action: str, name: str, user: bool = False) -> None:
    result = _run_systemctl(action, name, user=user)
    if result.returncode != 0:
        raise OperationFailed(f"{action.capitalize()} failed: {runner.stderr_text(result)}")


def start(name: str, user: bool = False) -> None:
    """Start a service. Raises OperationFailed on a non-zero exit."""
    print_info(f"Starting {fmt(name)}...")
    _control("start", name, user=user)


def stop(name: str, user: bool = False) -> None:
    """Stop a service. Raises OperationFailed on a non-zero exit."""
    print_info(f"Stopping {fmt(name)}...")
    _control("stop", name, user=user)


def restart(name: str, user: bool = False) -> None:
    """Restart a service. Raises OperationFailed on a non-zero exit."""
    print_info(f"Restarting {fmt(name)}...")
    _control("restart", name, user=user)


def stop_start(name: str, user: bool = False) -> None:
    """Stop then start a service.

    Not atomic: a failed stop skips the start, and a failed start leaves the
    service stopped. Re-inspect the state before retrying after a failure.
    """
    stop(name, user=user)
    start(name, user=user)


def tickle(name: str, force_stop_start: bool = False, user: bool = False) -> RestartStrategy:
    """Restart ``name`` with the best available strategy and return it."""
    check_available(user)

    state = get_state(name, user=user)
    print_kv("Current state", fmt(state.value))

    if force_stop_start:
        strategy = RestartStrategy.STOP_START
    else:
        strategy = resolve_strategy(name, user=user)
    print_kv("Strategy", fmt(strategy.value))

    if strategy is RestartStrategy.RESTART:
        restart(name, user=user)
    else:
        stop_start(name, user=user)
    return strategy


def follow_logs(name: str, user: bool = False) -> None:
    """Replace this process with ``journalctl -f`` for the service."""
    argv = ["journalctl", "-f", "-u", name]
    if user:
        argv.insert(1, "--user")
    print_info(f"Following logs for {fmt(name)} (Ctrl+C to stop)...")
    runner.replace_process(argv)
