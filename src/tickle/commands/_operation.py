"""Shared entry for the tickle, start and stop commands."""

from rich.markup import escape

from tickle.core.config import Settings, load_settings
from tickle.core.dispatch import Operation, dispatch, parse_request
from tickle.core.errors import UsageError
from tickle.core.history import HistoryLedger
from tickle.core.theme import console, print_error


def run_operation(operation: Operation, args: tuple[str, ...], settings: Settings | None) -> int:
    """Parse ``args`` for ``operation`` and dispatch it."""
    if settings is None:
        settings = load_settings()

    try:
        request = parse_request(operation, args)
    except UsageError as e:
        print_error(escape(str(e)))
        console.print("Run [value]tickle --help[/value] for usage")
        return 1

    return dispatch(request, HistoryLedger(settings.history_file), settings)
