"""Append-only history of tickle operations."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from rich.markup import escape

from tickle.core.errors import HistoryError
from tickle.core.theme import console, create_table, print_header, print_info

logger = logging.getLogger(__name__)

SEPARATOR = " | "
SUCCESS = "SUCCESS"
FAILED = "FAILED"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def timestamp(now: datetime | None = None) -> str:
    """UTC timestamp for a ledger line; UTC keeps append order monotonic."""
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _last(records: list["HistoryRecord"], limit: int | None) -> list["HistoryRecord"]:
    if limit is None:
        return records
    if limit <= 0:
        return []
    return records[-limit:]


@dataclass(frozen=True)
class HistoryRecord:
    """One ledger line: when, what, on which target, and how it went."""

    timestamp: str
    command: str
    target: str
    outcome: str

    @property
    def succeeded(self) -> bool:
        return self.outcome == SUCCESS

    def to_line(self) -> str:
        return SEPARATOR.join((self.timestamp, self.command, self.target, self.outcome)) + "\n"

    @classmethod
    def from_line(cls, line: str) -> "HistoryRecord":
        """Parse a ledger line.

        Lines from other format versions are kept whole in ``timestamp`` so
        they still display.
        """
        fields = line.rstrip("\n").split(SEPARATOR)
        if len(fields) != 4:
            return cls(line.rstrip("\n"), "", "", "")
        return cls(*(f.strip() for f in fields))


class HistoryLedger:
    """Per-user history file, created lazily on the first logged operation."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"HistoryLedger({str(self.path)!r})"

    def log(self, command: str, target: str, success: bool) -> HistoryRecord:
        """Append one record. Raises HistoryError if the file can't be written."""
        record = HistoryRecord(timestamp(), command, target, SUCCESS if success else FAILED)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(record.to_line())
        except OSError as e:
            raise HistoryError(f"Failed to write history file: {e}") from e
        logger.debug("logged %s", record)
        return record

    def records(self) -> list[HistoryRecord] | None:
        """All records in append order, or None when there is no ledger."""
        if not self.path.exists():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise HistoryError(f"Failed to read history file: {e}") from e
        return [HistoryRecord.from_line(line) for line in text.splitlines() if line.strip()]

    def show(self, limit: int | None = None) -> int:
        """Print the ledger as a table and return the number of rows shown."""
        records = self.records()
        if records is None:
            print_info("No history found. Start using tickle to build your history!")
            return 0
        if not records:
            print_info("History file is empty.")
            return 0

        shown = _last(records, limit)

        print_header(f"Tickle History [muted]({escape(str(self.path))})[/muted]")
        table = create_table("Timestamp", "Command", "Target", "Status")
        for record in shown:
            if not record.outcome:
                status = ""
            elif record.succeeded:
                status = f"[bool_on]{record.outcome}[/bool_on]"
            else:
                status = f"[error]{record.outcome}[/error]"
            table.add_row(escape(record.timestamp), escape(record.command), escape(record.target), status)
        console.print(table)
        console.print(f"Total entries: [num]{len(records)}[/num]")
        return len(shown)

    def clear(self) -> bool:
        """Delete the ledger. Returns False when there was nothing to clear."""
        if not self.path.exists():
            return False
        try:
            self.path.unlink()
        except OSError as e:
            raise HistoryError(f"Failed to clear history: {e}") from e
        return True
