"""Scroll window arithmetic for the entry list.

``compute_offset`` is pure and idempotent; ``Viewport`` only stores its last
result together with the row capacity derived from the terminal height.
"""

from __future__ import annotations

# Header row (path + mode) and status row.
CHROME_ROWS = 2


def compute_offset(offset: int, pivot: int | None, capacity: int, total: int) -> int:
    """Return the first visible index keeping ``pivot`` on screen.

    The previous ``offset`` is kept while the pivot is already visible, so
    the list only scrolls when the selection leaves the window. The result is
    clamped to ``[0, max(0, total - capacity)]``.
    """
    capacity = max(1, capacity)
    if total <= 0 or pivot is None:
        return 0
    pivot = max(0, min(pivot, total - 1))

    if pivot < offset:
        offset = pivot
    elif pivot >= offset + capacity:
        offset = pivot - capacity + 1
    return max(0, min(offset, max(0, total - capacity)))


def capacity_for_height(height: int) -> int:
    return max(1, height - CHROME_ROWS)


class Viewport:
    def __init__(self, height: int) -> None:
        self.offset = 0
        self.capacity = capacity_for_height(height)

    def resize(self, height: int) -> None:
        self.capacity = capacity_for_height(height)

    def reset(self) -> None:
        """Forget the scroll position, e.g. after the directory changed."""
        self.offset = 0

    def follow(self, pivot: int | None, total: int) -> int:
        self.offset = compute_offset(self.offset, pivot, self.capacity, total)
        return self.offset

    def visible(self, total: int) -> range:
        return range(self.offset, min(total, self.offset + self.capacity))


__all__ = [
    "CHROME_ROWS",
    "compute_offset",
    "capacity_for_height",
    "Viewport",
]
