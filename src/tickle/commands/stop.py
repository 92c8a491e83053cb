"""Stop a service or compose stack."""

from tickle.commands._operation import run_operation
from tickle.core.config import Settings
from tickle.core.dispatch import Operation

COMMAND = {
    "description": "Stop a service or compose stack",
    "args": "[-f] [service]",
}


def run(*args: str, settings: Settings | None = None) -> int:
    return run_operation(Operation.STOP, args, settings)
