"""Tests for tickle.core.config module."""

import unittest
from pathlib import Path

from tickle.core.config import Settings


class TestSettings(unittest.TestCase):
    """Tests for Settings.from_env()."""

    def test_defaults(self):
        settings = Settings.from_env({})
        self.assertEqual(settings.history_dir, Path.home() / ".tickle")
        self.assertEqual(settings.history_file, Path.home() / ".tickle" / "history.log")
        self.assertFalse(settings.user_units)
        self.assertFalse(settings.notify)
        self.assertFalse(settings.debug)

    def test_tickle_home(self):
        settings = Settings.from_env({"TICKLE_HOME": "/var/tmp/tickle"})
        self.assertEqual(settings.history_file, Path("/var/tmp/tickle/history.log"))

    def test_flags(self):
        settings = Settings.from_env(
            {"TICKLE_USER_UNITS": "yes", "TICKLE_NOTIFY": "1", "TICKLE_DEBUG": "True"}
        )
        self.assertTrue(settings.user_units)
        self.assertTrue(settings.notify)
        self.assertTrue(settings.debug)

    def test_falsy_flags(self):
        for value in ("0", "no", "off", "", "maybe"):
            with self.subTest(value=value):
                self.assertFalse(Settings.from_env({"TICKLE_NOTIFY": value}).notify)


if __name__ == "__main__":
    unittest.main()
