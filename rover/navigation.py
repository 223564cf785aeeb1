"""Navigation state: current directory, its entries, and the selection pivot.

Directory changes are all-or-nothing: the catalog is queried first and state
is only touched once it returned. Pivots are pushed on descent and popped on
ascent so going back up lands on the row you came from.
"""

from __future__ import annotations

import enum
import functools
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from .catalog import Entry, EntryKind, list_entries, parent_of
from .errors import AtRoot, IndexOutOfRange, OpenError, RoverError
from .opener import open_with_default_app

logger = logging.getLogger(__name__)

Catalog = Callable[[Path], Sequence[Entry]]
Opener = Callable[[Path], None]


class Direction(enum.Enum):
    UP = -1
    DOWN = 1


def _normalize(path: Path) -> Path:
    """Absolute, lexically normalized path (``..`` folded, symlinks kept)."""
    return Path(os.path.abspath(os.fspath(path)))


class NavigationState:
    """Owns ``current_path``, ``entries``, ``pivot``, and ``pivot_history``.

    ``catalog`` lists a directory (raising ``PathError``) and ``opener``
    hands a file to the OS; both are injectable for tests.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        opener: Opener | None = None,
        show_hidden: bool = True,
    ) -> None:
        self.catalog: Catalog = (
            catalog if catalog is not None else functools.partial(list_entries, show_hidden=show_hidden)
        )
        self.opener: Opener = opener if opener is not None else open_with_default_app
        self.current_path: Path | None = None
        self.entries: tuple[Entry, ...] = ()
        self.pivot: int | None = None
        self.pivot_history: list[int] = []

    @classmethod
    def load(cls, path: Path, **kwargs) -> NavigationState:
        """Create state already positioned at ``path``; raises ``PathError``."""
        state = cls(**kwargs)
        state.goto(path)
        return state

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def selected(self) -> Entry | None:
        if self.pivot is None or not 0 <= self.pivot < len(self.entries):
            return None
        return self.entries[self.pivot]

    def reset(self, entries: Sequence[Entry]) -> None:
        """Replace the whole entry list and select the first row."""
        self.entries = tuple(entries)
        self.pivot = 0 if self.entries else None

    def set_selected(self, idx: int) -> None:
        if not 0 <= idx < len(self.entries):
            raise IndexOutOfRange(idx, len(self.entries))
        self.pivot = idx

    def shift(self, direction: Direction) -> None:
        """Move the pivot one row, wrapping around at both ends."""
        if not self.entries or self.pivot is None:
            return
        self.pivot = (self.pivot + direction.value) % len(self.entries)

    def goto(self, path: Path) -> None:
        """Show ``path`` with the pivot on its first row.

        Raises ``PathError`` and leaves every field untouched when ``path``
        cannot be listed.
        """
        self._change_directory(path)

    def _change_directory(self, path: Path) -> int | None:
        """Switch directories and return the pivot saved for an ascent, if any."""
        target = _normalize(path)
        entries = self.catalog(target)

        current = self.current_path
        restored: int | None = None
        if current is None or target == current:
            pass
        elif parent_of(target) == current:
            if self.pivot is not None:
                self.pivot_history.append(self.pivot)
        elif target == parent_of(current):
            if self.pivot_history:
                restored = self.pivot_history.pop()
        else:
            self.pivot_history.clear()

        self.current_path = target
        self.reset(entries)
        logger.debug("entered %s (%d entries)", target, len(self.entries))
        return restored

    def ascend(self) -> None:
        """Go to the parent directory, restoring the pivot saved on the way down."""
        if self.current_path is None:
            raise RoverError("No directory loaded")
        parent = parent_of(self.current_path)
        if parent is None:
            raise AtRoot(self.current_path)

        restored = self._change_directory(parent)
        if restored is not None and self.entries:
            self.set_selected(min(restored, len(self.entries) - 1))

    def execute_selected(self) -> None:
        """Enter the selected directory, go up for the parent row, or open a file."""
        entry = self.selected
        if entry is None:
            return

        if entry.kind is EntryKind.DIRECTORY:
            self.goto(entry.path)
        elif entry.kind is EntryKind.PARENT:
            # The parent row always targets parent_of(current_path); at the
            # root its path is None and ascend reports AtRoot.
            self.ascend()
        elif entry.kind is EntryKind.FILE:
            self._open(entry.path)
        else:
            raise AssertionError(f"unhandled entry kind: {entry.kind!r}")

    def _open(self, path: Path) -> None:
        try:
            self.opener(path)
        except OpenError:
            raise
        except OSError as exc:
            raise OpenError(path, exc.strerror or str(exc)) from exc
        logger.debug("opened %s", path)


__all__ = [
    "Direction",
    "NavigationState",
]
