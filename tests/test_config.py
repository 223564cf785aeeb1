"""Tests for settings resolution and file-backed logging setup."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rover.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_PATH,
    BrowserSettings,
    normalize_log_level,
    resolve_settings,
    settings_from_env,
)
from rover.log import configure_logging


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = settings_from_env({})
        self.assertEqual(settings, BrowserSettings())
        self.assertTrue(settings.show_hidden)
        self.assertTrue(settings.color)
        self.assertEqual(settings.log_file, DEFAULT_LOG_PATH)
        self.assertEqual(settings.log_level, DEFAULT_LOG_LEVEL)

    def test_environment_overrides(self) -> None:
        settings = settings_from_env(
            {
                "ROVER_SHOW_HIDDEN": "no",
                "NO_COLOR": "1",
                "ROVER_LOG_FILE": "/var/tmp/rover-test.log",
                "ROVER_LOG_LEVEL": "debug",
            }
        )
        self.assertFalse(settings.show_hidden)
        self.assertFalse(settings.color)
        self.assertEqual(settings.log_file, Path("/var/tmp/rover-test.log"))
        self.assertEqual(settings.log_level, "DEBUG")

    def test_malformed_environment_values_fall_back(self) -> None:
        settings = settings_from_env({"ROVER_SHOW_HIDDEN": "maybe", "NO_COLOR": "", "ROVER_LOG_LEVEL": "loud"})
        self.assertEqual(settings, BrowserSettings())

    def test_cli_choices_win_over_environment(self) -> None:
        settings = resolve_settings(
            show_hidden=True,
            no_color=True,
            log_file=Path("/var/tmp/cli.log"),
            log_level="info",
            environ={"ROVER_SHOW_HIDDEN": "0", "ROVER_LOG_LEVEL": "ERROR"},
        )
        self.assertTrue(settings.show_hidden)
        self.assertFalse(settings.color)
        self.assertEqual(settings.log_file, Path("/var/tmp/cli.log"))
        self.assertEqual(settings.log_level, "INFO")

    def test_unset_cli_choices_keep_environment(self) -> None:
        settings = resolve_settings(environ={"ROVER_SHOW_HIDDEN": "off"})
        self.assertFalse(settings.show_hidden)
        self.assertTrue(settings.color)

    def test_normalize_log_level(self) -> None:
        self.assertEqual(normalize_log_level(" warning "), "WARNING")
        self.assertIsNone(normalize_log_level("verbose"))
        self.assertIsNone(normalize_log_level(""))
        self.assertIsNone(normalize_log_level(10))


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger("rover")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_writes_records_to_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "nested" / "rover.log"
            handler = configure_logging(log_file, "INFO")
            logging.getLogger("rover.navigation").info("entered %s", "/project")
            handler.flush()

            self.assertIsInstance(handler, logging.FileHandler)
            self.assertIn("INFO rover.navigation: entered /project", log_file.read_text(encoding="utf-8"))
            handler.close()

    def test_reconfiguring_replaces_previous_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging(Path(tmp) / "one.log", "WARNING")
            configure_logging(Path(tmp) / "two.log", "DEBUG")

            logger = logging.getLogger("rover")
            self.assertEqual(len(logger.handlers), 1)
            self.assertEqual(logger.level, logging.DEBUG)
            logger.handlers[0].close()

    def test_unwritable_location_falls_back_to_null_handler(self) -> None:
        with mock.patch("rover.log.Path.mkdir", side_effect=PermissionError(13, "Permission denied")):
            handler = configure_logging(Path("/nonexistent/rover.log"), "WARNING")

        self.assertIsInstance(handler, logging.NullHandler)


if __name__ == "__main__":
    unittest.main()
