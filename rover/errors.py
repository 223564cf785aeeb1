"""Recoverable error kinds raised by navigation and file opening.

None of these terminate the browser: the controller catches ``RoverError``
at its boundary, logs it, and shows ``str(exc)`` in the status row.
"""

from __future__ import annotations

from pathlib import Path


class RoverError(Exception):
    """Base class for conditions the event loop reports and survives."""


class PathError(RoverError):
    """A navigation target could not be listed."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class NotFound(PathError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Path not found: {path}")


class NotADirectory(PathError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Not a directory: {path}")


class UnreadableDirectory(PathError):
    """Directory exists but scanning it failed (permissions, I/O)."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f"Cannot read {path}: {reason}")
        self.reason = reason


class AtRoot(RoverError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Already at filesystem root: {path}")
        self.path = path


class IndexOutOfRange(RoverError, IndexError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Selection {index} out of range for {length} entries")
        self.index = index
        self.length = length


class OpenError(RoverError):
    """The OS default-application launcher failed for a file."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot open {path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = [
    "RoverError",
    "PathError",
    "NotFound",
    "NotADirectory",
    "UnreadableDirectory",
    "AtRoot",
    "IndexOutOfRange",
    "OpenError",
]
