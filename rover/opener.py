"""Hand a file to the operating system's default application.

Uses ``open`` on macOS, ``os.startfile`` on Windows and ``xdg-open``
elsewhere. Launcher output is discarded so it cannot scribble over the
frame; failures come back as ``OpenError``.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

from .errors import OpenError


def default_launcher(platform: str | None = None) -> list[str] | None:
    """Return the launcher command prefix for ``platform``.

    ``None`` means the platform opens files in-process (Windows).
    """
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return ["open"]
    if platform.startswith("win"):
        return None
    return ["xdg-open"]


def open_with_default_app(path: Path) -> None:
    launcher = default_launcher()
    if launcher is None:
        try:
            os.startfile(str(path))  # type: ignore[attr-defined]
        except OSError as exc:
            raise OpenError(path, exc.strerror or str(exc)) from exc
        return

    if shutil.which(launcher[0]) is None:
        raise OpenError(path, f"{launcher[0]} not found on PATH")

    try:
        completed = subprocess.run(
            [*launcher, str(path)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise OpenError(path, exc.strerror or str(exc)) from exc

    if completed.returncode != 0:
        detail = completed.stderr.decode("utf-8", errors="replace").strip().splitlines()
        reason = detail[-1] if detail else f"{launcher[0]} exited with status {completed.returncode}"
        raise OpenError(path, reason)
