"""File-backed logging setup.

The terminal belongs to the frame renderer, so records never go to stderr
while the browser runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path, level: str) -> logging.Handler:
    """Attach one handler to the ``rover`` logger and return it.

    Falls back to a ``NullHandler`` when the log file cannot be opened.
    Calling again replaces the previously installed handler.
    """
    root = logging.getLogger("rover")
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return handler
