"""Route a tickle/start/stop request to systemd or compose and record it."""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.markup import escape

from tickle.core import compose, systemd
from tickle.core.config import Settings
from tickle.core.errors import (
    ControlPlaneUnavailable,
    HistoryError,
    NoTargetError,
    TickleError,
    UsageError,
)
from tickle.core.history import HistoryLedger
from tickle.core.notify import notify
from tickle.core.theme import fmt, print_error, print_kv, print_success, print_warning

logger = logging.getLogger(__name__)


class Operation(Enum):
    TICKLE = "tickle"
    START = "start"
    STOP = "stop"


@dataclass
class Request:
    """A parsed tickle, start or stop invocation."""

    operation: Operation
    service: str | None = None
    follow: bool = False
    stop_start: bool = False


@dataclass(frozen=True)
class SystemService:
    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class ComposeStack:
    manifest: Path

    @property
    def label(self) -> str:
        project = self.manifest.parent.resolve().name or "unknown"
        return f"compose:{project}:{self.manifest.name}"


Target = SystemService | ComposeStack


def parse_request(operation: Operation, args: Sequence[str]) -> Request:
    """Parse the arguments that follow the (possibly implicit) subcommand.

    Flags are read left to right until the first non-flag argument, which is
    taken as the service name.
    """
    request = Request(operation)
    for arg in args:
        if arg in ("-f", "--follow"):
            request.follow = True
        elif arg in ("-s", "--stop-start"):
            if operation is not Operation.TICKLE:
                raise UsageError("--stop-start option only valid with tickle command")
            request.stop_start = True
        elif not arg.startswith("-"):
            request.service = arg
            break
        else:
            raise UsageError(f"Unknown option: {arg}")
    return request


def resolve_target(request: Request, cwd: Path | None = None) -> Target:
    """A named service wins; otherwise look for a compose file in ``cwd``."""
    if request.service:
        return SystemService(request.service)
    manifest = compose.locate(cwd)
    if manifest is None:
        raise NoTargetError("No service name provided and no compose file found")
    return ComposeStack(manifest)


def _execute(request: Request, target: Target, settings: Settings) -> None:
    if isinstance(target, ComposeStack):
        actions = {
            Operation.TICKLE: compose.down_up,
            Operation.START: compose.up,
            Operation.STOP: compose.down,
        }
        actions[request.operation](target.manifest)
        return

    user = settings.user_units
    if request.operation is Operation.TICKLE:
        systemd.tickle(target.name, force_stop_start=request.stop_start, user=user)
        return

    systemd.check_available(user)
    if request.operation is Operation.START:
        systemd.start(target.name, user=user)
    else:
        systemd.stop(target.name, user=user)


def _report_final_state(name: str, settings: Settings) -> None:
    try:
        state = systemd.get_state(name, user=settings.user_units)
    except TickleError as e:
        print_warning(f"Could not verify final state: {escape(str(e))}")
        return
    print_kv("Final state", fmt(state.value))


def _follow(target: Target, settings: Settings) -> int:
    try:
        if isinstance(target, ComposeStack):
            compose.follow_logs(target.manifest)
        else:
            systemd.follow_logs(target.name, user=settings.user_units)
    except ControlPlaneUnavailable as e:
        print_error(f"Failed to follow logs: {escape(str(e))}")
        return 1
    return 0


def dispatch(
    request: Request,
    ledger: HistoryLedger,
    settings: Settings,
    cwd: Path | None = None,
) -> int:
    """Run the request and return the process exit code.

    Every attempt that reaches systemd or compose is logged to ``ledger``
    exactly once, whatever the outcome. A request without a target is
    rejected before anything runs and is not logged.
    """
    try:
        target = resolve_target(request, cwd)
    except NoTargetError as e:
        print_error(escape(str(e)))
        return 1

    if isinstance(target, SystemService) and not settings.user_units and os.geteuid() != 0:
        print_warning("You may need to run with sudo for system services")

    command = request.operation.value
    error: TickleError | None = None
    try:
        _execute(request, target, settings)
    except TickleError as e:
        error = e

    try:
        ledger.log(command, target.label, error is None)
    except HistoryError as e:
        print_warning(f"Failed to log to history: {escape(str(e))}")

    if settings.notify:
        if error is None:
            notify("tickle", f"{command} {target.label} succeeded")
        else:
            notify("tickle", f"{command} {target.label} failed", urgency="critical")

    if error is not None:
        logger.debug("%s %s failed", command, target.label, exc_info=error)
        print_error(escape(str(error)))
        return 1

    print_success(f"{command.capitalize()} of {fmt(target.label)} completed successfully!")

    if isinstance(target, SystemService) and request.operation is not Operation.TICKLE:
        _report_final_state(target.name, settings)

    if request.follow:
        return _follow(target, settings)
    return 0
