"""Tests for tickle.core.history module."""

import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

from tickle.core import history
from tickle.core.errors import HistoryError
from tickle.core.history import HistoryLedger, HistoryRecord
from tickle.core.theme import console


class TestTimestamp(unittest.TestCase):
    """Tests for timestamp()."""

    def test_format(self):
        now = datetime(2024, 2, 29, 13, 5, 9, tzinfo=timezone.utc)
        self.assertEqual(history.timestamp(now), "2024-02-29 13:05:09")

    def test_converted_to_utc(self):
        now = datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(history.timestamp(now), "2023-12-31 23:00:00")

    def test_sorts_chronologically(self):
        """Lexical order of timestamps follows real time."""
        base = datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        stamps = [history.timestamp(base + timedelta(seconds=s)) for s in (0, 1, 86400 * 40)]
        self.assertEqual(stamps, sorted(stamps))


class TestHistoryRecord(unittest.TestCase):
    """Tests for HistoryRecord serialisation."""

    def test_to_line(self):
        record = HistoryRecord("2025-01-02 03:04:05", "tickle", "nginx", "SUCCESS")
        self.assertEqual(record.to_line(), "2025-01-02 03:04:05 | tickle | nginx | SUCCESS\n")

    def test_from_line(self):
        record = HistoryRecord.from_line("2025-01-02 03:04:05 | stop | compose:app:compose.yaml | FAILED\n")
        self.assertEqual(record.command, "stop")
        self.assertEqual(record.target, "compose:app:compose.yaml")
        self.assertFalse(record.succeeded)

    def test_unknown_format_kept_whole(self):
        record = HistoryRecord.from_line("some | future | line | with | extra fields")
        self.assertEqual(record.timestamp, "some | future | line | with | extra fields")
        self.assertEqual(record.outcome, "")


class TestHistoryLedger(unittest.TestCase):
    """Tests for HistoryLedger."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / ".tickle" / "history.log"
        self.ledger = HistoryLedger(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_created_lazily(self):
        self.assertIsNone(self.ledger.records())
        self.ledger.log("start", "nginx", True)
        self.assertTrue(self.path.exists())

    def test_log_appends_lines(self):
        self.ledger.log("tickle", "nginx", True)
        self.ledger.log("stop", "redis", False)
        lines = self.path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].endswith(" | tickle | nginx | SUCCESS"))
        self.assertTrue(lines[1].endswith(" | stop | redis | FAILED"))

    def test_records_in_insertion_order(self):
        targets = [f"svc{i}" for i in range(5)]
        for target in targets:
            self.ledger.log("tickle", target, True)
        self.assertEqual([r.target for r in self.ledger.records()], targets)

    def test_show_all(self):
        for i in range(4):
            self.ledger.log("tickle", f"svc{i}", i % 2 == 0)
        with console.capture() as capture:
            shown = self.ledger.show()
        self.assertEqual(shown, 4)
        output = capture.get()
        self.assertIn("Total entries: 4", output)
        self.assertLess(output.index("svc0"), output.index("svc3"))

    def test_show_limited(self):
        for i in range(4):
            self.ledger.log("tickle", f"svc{i}", True)
        with console.capture() as capture:
            shown = self.ledger.show(2)
        self.assertEqual(shown, 2)
        output = capture.get()
        self.assertNotIn("svc1", output)
        self.assertIn("svc2", output)
        self.assertIn("svc3", output)

    def test_show_limit_edges(self):
        for i in range(3):
            self.ledger.log("tickle", f"svc{i}", True)
        with console.capture():
            self.assertEqual(self.ledger.show(50), 3)
            self.assertEqual(self.ledger.show(0), 0)

    def test_show_missing(self):
        with console.capture() as capture:
            self.assertEqual(self.ledger.show(), 0)
        self.assertIn("No history found", capture.get())

    def test_show_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.touch()
        with console.capture() as capture:
            self.assertEqual(self.ledger.show(), 0)
        self.assertIn("History file is empty", capture.get())

    def test_show_mixed_formats(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("legacy entry without separators\n", encoding="utf-8")
        self.ledger.log("start", "nginx", True)
        with console.capture():
            self.assertEqual(self.ledger.show(), 2)

    def test_clear(self):
        self.ledger.log("tickle", "nginx", True)
        self.assertTrue(self.ledger.clear())
        self.assertFalse(self.path.exists())
        with console.capture() as capture:
            self.ledger.show()
        self.assertIn("No history found", capture.get())

    def test_clear_nothing(self):
        self.assertFalse(self.ledger.clear())

    def test_log_failure_raises(self):
        with patch.object(Path, "open", side_effect=PermissionError("denied")):
            with self.assertRaises(HistoryError):
                self.ledger.log("tickle", "nginx", True)


if __name__ == "__main__":
    unittest.main()
