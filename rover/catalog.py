"""Directory listing for the browser: one synthetic parent row plus children.

Each call re-scans the filesystem; nothing is cached between calls.
Children sort directories-first, then by case-folded name.
"""

from __future__ import annotations

import enum
import errno
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import NotADirectory, NotFound, UnreadableDirectory


class EntryKind(enum.Enum):
    PARENT = "parent"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class Entry:
    """One navigable row.

    ``path`` is ``None`` only for the parent row of the filesystem root,
    which has nowhere to go.
    """

    path: Path | None
    kind: EntryKind

    @classmethod
    def parent(cls, target: Path | None) -> Entry:
        return cls(path=target, kind=EntryKind.PARENT)


def parent_of(path: Path) -> Path | None:
    """Return the enclosing directory of ``path`` or ``None`` at the root."""
    parent = path.parent
    if parent == path:
        return None
    return parent


def entry_label(entry: Entry) -> str:
    """Return the row text that tells parent, directory, and file rows apart."""
    if entry.kind is EntryKind.PARENT:
        return "../"
    name = entry.path.name if entry.path is not None else ""
    if not name:
        name = "?"
    if entry.kind is EntryKind.DIRECTORY:
        return f"{name}/"
    return name


def _child_sort_key(entry: Entry) -> tuple[bool, str, str]:
    name = entry.path.name if entry.path is not None else ""
    return (entry.kind is not EntryKind.DIRECTORY, name.casefold(), name)


def list_entries(path: Path, show_hidden: bool = True) -> tuple[Entry, ...]:
    """List ``path`` as ``(parent_row, *children)``.

    Raises ``NotFound`` when ``path`` is missing, ``NotADirectory`` when it is
    something else, and ``UnreadableDirectory`` when the path cannot be
    checked or scanned (permissions, over-long names).
    Symlinks to directories are listed as directories.
    """
    try:
        is_dir = path.is_dir()
        exists = is_dir or path.exists()
    except OSError as exc:
        if exc.errno in (errno.ENOENT, errno.ENOTDIR):
            raise NotFound(path) from exc
        raise UnreadableDirectory(path, exc.strerror or str(exc)) from exc
    if not exists:
        raise NotFound(path)
    if not is_dir:
        raise NotADirectory(path)

    children: list[Entry] = []
    try:
        with os.scandir(path) as scanned:
            for child in scanned:
                if not show_hidden and child.name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
                children.append(Entry(path=Path(child.path), kind=kind))
    except OSError as exc:
        raise UnreadableDirectory(path, exc.strerror or str(exc)) from exc

    children.sort(key=_child_sort_key)
    return (Entry.parent(parent_of(path)), *children)


__all__ = [
    "EntryKind",
    "Entry",
    "parent_of",
    "entry_label",
    "list_entries",
]
