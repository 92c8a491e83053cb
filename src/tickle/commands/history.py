"""Show or clear the operation history."""

from rich.markup import escape

from tickle.core.config import Settings, load_settings
from tickle.core.errors import TickleError, UsageError
from tickle.core.history import HistoryLedger
from tickle.core.theme import print_error, print_info, print_success

COMMAND = {
    "description": "Show command history",
    "args": "[clear | -n <lines>]",
    "subcommands": [
        ("clear", "", "Clear all history"),
        ("-n", "<lines>", "Show the last n entries"),
    ],
}


def _parse_limit(args: tuple[str, ...]) -> int | None:
    """Value of the first ``-n <lines>`` pair, if any."""
    for i, arg in enumerate(args[:-1]):
        if arg == "-n":
            try:
                limit = int(args[i + 1])
            except ValueError:
                raise UsageError("Invalid number for -n option") from None
            if limit < 0:
                raise UsageError("Invalid number for -n option")
            return limit
    return None


def clear(ledger: HistoryLedger) -> int:
    """Delete the history file."""
    if ledger.clear():
        print_success("History cleared successfully.")
    else:
        print_info("No history file to clear.")
    return 0


def run(*args: str, settings: Settings | None = None) -> int:
    """Dispatch history subcommands."""
    if settings is None:
        settings = load_settings()
    ledger = HistoryLedger(settings.history_file)

    try:
        if args and args[0] == "clear":
            return clear(ledger)
        ledger.show(_parse_limit(args))
    except TickleError as e:
        print_error(escape(str(e)))
        return 1
    return 0
