"""Wire navigation, viewport, sink, and input into one browser session."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .config import BrowserSettings
from .controller import Controller
from .keys import InputRouter
from .navigation import NavigationState
from .render import AnsiRenderSink
from .terminal import TerminalController, terminal_size
from .viewport import Viewport

logger = logging.getLogger(__name__)


def load_start_state(path: Path, settings: BrowserSettings) -> NavigationState:
    """Create navigation state at ``path``; raises ``PathError`` if unusable."""
    return NavigationState.load(path, show_hidden=settings.show_hidden)


def run_browser(state: NavigationState, settings: BrowserSettings) -> None:
    """Run the interactive loop on the real terminal until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    width, height = terminal_size()

    terminal = TerminalController(stdin_fd, stdout_fd)
    controller = Controller(
        state=state,
        viewport=Viewport(height),
        sink=AnsiRenderSink(width, height, color=settings.color, stdout_fd=stdout_fd),
        events=InputRouter(stdin_fd, poll_ms=settings.poll_ms),
    )

    logger.debug("session start at %s (%dx%d)", state.current_path, width, height)
    with terminal.raw_mode():
        controller.run()
    logger.debug("session end at %s", state.current_path)
