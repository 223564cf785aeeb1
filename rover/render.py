"""Frame rendering for the directory list.

Defines the sink contract the controller draws through and the terminal
implementation, which composes a whole frame and writes it in one call
inside a synchronized-update bracket.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .ansi import clip_text, display_width, sanitize
from .catalog import Entry, EntryKind, entry_label
from .keys import Mode

BEGIN_SYNC = "\033[?2026h"
END_SYNC = "\033[?2026l"
HOME = "\033[H"
CLEAR_TO_EOL = "\033[K"
RESET = "\033[0m"
REVERSE = "\033[7m"
DIRECTORY_STYLE = "\033[1;34m"
PARENT_STYLE = "\033[2m"

SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "
KEY_HINT = "j/k move  Enter open  Esc up  ^T mode  ^Q quit"

Row = tuple[bool, Entry]


@dataclass(frozen=True)
class FrameHeader:
    path: Path | None
    mode: Mode
    message: str = ""
    # (1-based selected row, total rows), shown right-aligned in the header.
    position: tuple[int, int] | None = None


class RenderSink(Protocol):
    def resize(self, width: int, height: int) -> None: ...

    def render(self, rows: Sequence[Row], header: FrameHeader) -> None: ...


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return REVERSE + text.replace(RESET, RESET[:-1] + ";7m") + RESET


def _style_for(kind: EntryKind) -> str:
    if kind is EntryKind.DIRECTORY:
        return DIRECTORY_STYLE
    if kind is EntryKind.PARENT:
        return PARENT_STYLE
    return ""


def format_row(selected: bool, entry: Entry, width: int, color: bool = True) -> str:
    """Marker plus label, clipped to ``width`` cells, styled when ``color``."""
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    text = clip_text(marker + sanitize(entry_label(entry)), width)
    if not color:
        return text
    style = _style_for(entry.kind)
    if style:
        text = f"{style}{text}{RESET}"
    if selected:
        text = selected_with_ansi(text)
    return text


def build_bar(left_text: str, width: int, right_text: str = "") -> str:
    """Lay out ``left_text`` and ``right_text`` on one row of ``width`` cells.

    The left side is clipped first so the right side stays visible.
    """
    usable = max(1, width)
    right = clip_text(right_text, usable)
    right_cols = display_width(right)
    left_limit = usable - right_cols - 1 if right else usable
    left = clip_text(left_text, max(0, left_limit))
    gap = " " * max(0, usable - display_width(left) - right_cols)
    return f"{left}{gap}{right}"


def header_text(header: FrameHeader) -> tuple[str, str]:
    left = f" {sanitize(str(header.path))}" if header.path is not None else " "
    right = f"[{header.mode.value}] "
    if header.position is not None:
        selected, total = header.position
        right = f"{selected}/{total}  {right}"
    return left, right


def compose_frame(
    rows: Sequence[Row],
    header: FrameHeader,
    width: int,
    height: int,
    color: bool = True,
) -> str:
    """Return the complete frame for one redraw.

    Layout is one header row, ``height - 2`` list rows (blank-filled), and a
    status row carrying ``header.message`` or the key hint. Below three rows
    the status row goes first, then the header, so one list row always fits.
    """
    width = max(1, width)
    height = max(1, height)
    show_header = height >= 2
    show_status = height >= 3
    list_rows = height - int(show_header) - int(show_status)

    left, right = header_text(header)
    header_line = build_bar(left, width, right)
    status_line = clip_text(sanitize(header.message) if header.message else KEY_HINT, width)
    if color:
        header_line = f"{REVERSE}{header_line}{RESET}"
        if header.message:
            status_line = f"{REVERSE}{status_line}{RESET}"

    lines = [header_line] if show_header else []
    body = [format_row(selected, entry, width, color=color) for selected, entry in list(rows)[:list_rows]]
    body.extend("" for _ in range(list_rows - len(body)))
    lines.extend(body)
    if show_status:
        lines.append(status_line)

    out: list[str] = [BEGIN_SYNC, HOME]
    out.append("\r\n".join(line + CLEAR_TO_EOL for line in lines))
    out.append(END_SYNC)
    return "".join(out)


class AnsiRenderSink:
    """Terminal sink: one ``os.write`` per frame so no partial frame shows."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        color: bool = True,
        write: Callable[[str], None] | None = None,
        stdout_fd: int = 1,
    ) -> None:
        self.width = width
        self.height = height
        self.color = color
        self.stdout_fd = stdout_fd
        self._write = write if write is not None else self._write_fd

    def _write_fd(self, frame: str) -> None:
        os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def render(self, rows: Sequence[Row], header: FrameHeader) -> None:
        self._write(compose_frame(rows, header, self.width, self.height, color=self.color))


__all__ = [
    "FrameHeader",
    "RenderSink",
    "AnsiRenderSink",
    "selected_with_ansi",
    "format_row",
    "build_bar",
    "compose_frame",
]
