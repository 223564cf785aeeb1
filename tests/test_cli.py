"""CLI argument, startup validation, and default-path behavior tests.

Verifies how ``rover.cli.main`` chooses the start directory and settings,
and that startup failures exit before the terminal is touched.
"""

from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from rover import cli


def _tty_sys(is_tty: bool = True) -> SimpleNamespace:
    stream = mock.Mock()
    stream.isatty.return_value = is_tty
    return SimpleNamespace(stdin=stream, stdout=stream)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("rover.cli.configure_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, argv: list[str], default_path: Path | None = None, is_tty: bool = True):
        with mock.patch.object(sys, "argv", ["rover", *argv]), mock.patch(
            "rover.cli.sys", _tty_sys(is_tty)
        ), mock.patch("rover.cli.run_browser") as run_browser:
            cli.main(default_path=default_path)
        return run_browser

    def test_main_defaults_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                run_browser = self._run([])
            finally:
                os.chdir(previous_cwd)

        run_browser.assert_called_once()
        state, settings = run_browser.call_args.args
        self.assertEqual(state.current_path, root)
        self.assertEqual(state.pivot, 0)
        self.assertTrue(settings.show_hidden)

    def test_explicit_path_and_flags(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "sub" / ".hidden").write_text("", encoding="utf-8")

            run_browser = self._run(
                [str(root / "sub"), "--no-hidden", "--no-color", "--log-level", "debug"],
                default_path=root,
            )

        state, settings = run_browser.call_args.args
        self.assertEqual(state.current_path, root / "sub")
        self.assertEqual(len(state.entries), 1)
        self.assertFalse(settings.show_hidden)
        self.assertFalse(settings.color)
        self.assertEqual(settings.log_level, "DEBUG")
        self.configure_logging.assert_called_once_with(settings.log_file, "DEBUG")

    def test_missing_start_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(SystemExit) as ctx:
                self._run([str(missing)])

        self.assertEqual(str(ctx.exception.code), f"rover: Path not found: {missing}")

    def test_file_start_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("", encoding="utf-8")
            with self.assertRaises(SystemExit) as ctx:
                self._run([str(target)])

        self.assertIn("Not a directory", str(ctx.exception.code))

    def test_non_terminal_exits_before_session(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.object(sys, "argv", ["rover", tmp]), mock.patch(
                "rover.cli.sys", _tty_sys(False)
            ), mock.patch("rover.cli.run_browser") as run_browser:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main()

        run_browser.assert_not_called()
        self.assertIn("terminal", str(ctx.exception.code))


if __name__ == "__main__":
    unittest.main()
