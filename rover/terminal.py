"""Terminal control helpers for the browser session.

Owns raw-mode lifecycle, alternate-screen switching, line-wrap suppression,
and mouse-wheel reporting. Everything is undone on exit, including on errors.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

# Alternate screen, hide cursor, no autowrap, SGR mouse reporting.
ENTER_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?7l\x1b[?1000h\x1b[?1006h"
LEAVE_SEQUENCE = b"\x1b[?1000l\x1b[?1006l\x1b[?7h\x1b[?25h\x1b[?1049l"


def terminal_size() -> tuple[int, int]:
    """Return ``(columns, lines)`` with an 80x24 fallback."""
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


class TerminalController:
    """Manage terminal mode transitions around the browser loop."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SEQUENCE)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
