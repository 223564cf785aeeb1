"""Display-width measurement and clipping for plain row text.

Rows are clipped before any styling is applied, so these helpers never see
escape sequences. Wide characters take two cells; control characters in
file names are replaced so they cannot move the cursor.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8
REPLACEMENT = "?"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def sanitize(text: str) -> str:
    """Replace control characters (other than tab) with ``?``."""
    if text.isprintable():
        return text
    return "".join(
        ch if ch == "\t" or unicodedata.category(ch)[0] != "C" else REPLACEMENT
        for ch in text
    )


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns, never wrapping.

    Tabs are expanded into spaces so clipping aligns with rendered cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
    return "".join(out)
