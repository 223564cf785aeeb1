"""Main interactive event loop for the browser.

One iteration is one command: block for input, apply it to the navigation
state (or the mode flag), re-derive the viewport, draw a full frame.
Recoverable errors become the status-row message; only QUIT ends the loop.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .errors import RoverError
from .keys import Command, InputEvent, Mode
from .navigation import Direction, NavigationState
from .render import FrameHeader, RenderSink
from .viewport import Viewport

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    def next_event(self, mode: Mode) -> InputEvent: ...


class Controller:
    def __init__(
        self,
        state: NavigationState,
        viewport: Viewport,
        sink: RenderSink,
        events: EventSource,
        mode: Mode = Mode.FLOW,
    ) -> None:
        self.state = state
        self.viewport = viewport
        self.sink = sink
        self.events = events
        self.mode = mode
        self.message = ""

    def run(self) -> None:
        """Draw, then process commands until QUIT arrives."""
        self.render()
        while True:
            event = self.events.next_event(self.mode)
            if event.command is Command.QUIT:
                logger.debug("quit requested")
                break
            self.apply(event)
            self.render()

    def apply(self, event: InputEvent) -> None:
        """Apply one non-quit command, reporting any ``RoverError``.

        A resize redraws without clearing the pending status message.
        """
        if event.command is not Command.RESIZE:
            self.message = ""
        previous_path = self.state.current_path
        try:
            self._dispatch(event)
        except RoverError as exc:
            logger.warning("%s failed: %s", event.command.value, exc)
            self.message = str(exc)
        if self.state.current_path != previous_path:
            self.viewport.reset()

    def _dispatch(self, event: InputEvent) -> None:
        command = event.command
        if command is Command.MOVE_UP:
            self.state.shift(Direction.UP)
        elif command is Command.MOVE_DOWN:
            self.state.shift(Direction.DOWN)
        elif command is Command.ACTIVATE:
            self.state.execute_selected()
        elif command is Command.ASCEND:
            self.state.ascend()
        elif command is Command.TOGGLE_MODE:
            self.mode = self.mode.toggled()
        elif command is Command.RESIZE:
            if event.size is not None:
                width, height = event.size
                logger.debug("resized to %dx%d", width, height)
                self.sink.resize(width, height)
                self.viewport.resize(height)
        else:
            raise AssertionError(f"unhandled command: {command!r}")

    def header(self) -> FrameHeader:
        total = len(self.state.entries)
        position = (self.state.pivot + 1, total) if self.state.pivot is not None else None
        return FrameHeader(
            path=self.state.current_path,
            mode=self.mode,
            message=self.message,
            position=position,
        )

    def render(self) -> None:
        entries = self.state.entries
        pivot = self.state.pivot
        self.viewport.follow(pivot, len(entries))
        rows = [(idx == pivot, entries[idx]) for idx in self.viewport.visible(len(entries))]
        self.sink.render(rows, self.header())
