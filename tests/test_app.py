"""Tests for session wiring around the controller."""

from __future__ import annotations

import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from rover.app import load_start_state, run_browser
from rover.config import BrowserSettings
from rover.errors import NotFound
from rover.render import AnsiRenderSink


class _FakeTerminal:
    def __init__(self, *_args) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class AppWiringTests(unittest.TestCase):
    def test_load_start_state_honors_hidden_setting(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".env").write_text("", encoding="utf-8")

            shown = load_start_state(root, BrowserSettings(show_hidden=True))
            hidden = load_start_state(root, BrowserSettings(show_hidden=False))

        self.assertEqual(len(shown.entries), 2)
        self.assertEqual(len(hidden.entries), 1)

    def test_load_start_state_rejects_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(NotFound):
                load_start_state(Path(tmp) / "gone", BrowserSettings())

    def test_run_browser_runs_controller_inside_raw_mode(self) -> None:
        terminal = _FakeTerminal()
        state = mock.Mock(current_path=Path("/project"))
        streams = mock.Mock()
        streams.stdin.fileno.return_value = 0
        streams.stdout.fileno.return_value = 1

        def fake_run() -> None:
            self.assertEqual(terminal.entered, 1)
            self.assertEqual(terminal.exited, 0)

        with mock.patch("rover.app.sys", streams), mock.patch(
            "rover.app.terminal_size", return_value=(90, 30)
        ), mock.patch("rover.app.TerminalController", return_value=terminal), mock.patch(
            "rover.app.InputRouter"
        ) as router_cls, mock.patch("rover.app.Controller") as controller_cls:
            controller_cls.return_value.run.side_effect = fake_run
            run_browser(state, BrowserSettings(color=False, poll_ms=50))

        self.assertEqual(terminal.exited, 1)
        router_cls.assert_called_once_with(0, poll_ms=50)
        kwargs = controller_cls.call_args.kwargs
        self.assertIs(kwargs["state"], state)
        self.assertEqual(kwargs["viewport"].capacity, 28)
        self.assertIsInstance(kwargs["sink"], AnsiRenderSink)
        self.assertFalse(kwargs["sink"].color)
        self.assertEqual((kwargs["sink"].width, kwargs["sink"].height), (90, 30))


if __name__ == "__main__":
    unittest.main()
