"""Default command: restart a service or compose stack."""

from tickle.commands._operation import run_operation
from tickle.core.config import Settings
from tickle.core.dispatch import Operation

COMMAND = {
    "description": "Restart a service or compose stack (default)",
    "args": "[-s] [-f] [service]",
    "subcommands": [],
}


def run(*args: str, settings: Settings | None = None) -> int:
    """Restart, or stop then start, the target."""
    return run_operation(Operation.TICKLE, args, settings)
