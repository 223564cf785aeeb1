"""Runtime settings resolved from defaults, environment, and CLI flags.

Nothing is persisted: settings live for one session. Environment values are
coerced defensively; anything malformed falls back to the default.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "rover"
LOG_FILENAME = "rover.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_POLL_MS = 120

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BrowserSettings:
    show_hidden: bool = True
    color: bool = True
    log_file: Path = DEFAULT_LOG_PATH
    log_level: str = DEFAULT_LOG_LEVEL
    poll_ms: int = DEFAULT_POLL_MS


def _env_flag(value: str | None) -> bool | None:
    """Parse a boolean environment value, ``None`` when unset or unrecognized."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def normalize_log_level(value: object) -> str | None:
    """Return the canonical level name for ``value`` or ``None`` if unknown."""
    if not isinstance(value, str):
        return None
    name = value.strip().upper()
    if not name:
        return None
    level = logging.getLevelName(name)
    return name if isinstance(level, int) else None


def settings_from_env(environ: Mapping[str, str] | None = None) -> BrowserSettings:
    """Apply ``ROVER_*`` variables (and ``NO_COLOR``) over the defaults."""
    env = os.environ if environ is None else environ
    settings = BrowserSettings()

    show_hidden = _env_flag(env.get("ROVER_SHOW_HIDDEN"))
    if show_hidden is not None:
        settings = replace(settings, show_hidden=show_hidden)

    # https://no-color.org: any non-empty value disables color.
    if env.get("NO_COLOR"):
        settings = replace(settings, color=False)

    log_file = env.get("ROVER_LOG_FILE", "").strip()
    if log_file:
        settings = replace(settings, log_file=Path(log_file).expanduser())

    log_level = normalize_log_level(env.get("ROVER_LOG_LEVEL"))
    if log_level is not None:
        settings = replace(settings, log_level=log_level)

    return settings


def resolve_settings(
    *,
    show_hidden: bool | None = None,
    no_color: bool = False,
    log_file: Path | None = None,
    log_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> BrowserSettings:
    """Layer explicit CLI choices over environment-derived settings."""
    settings = settings_from_env(environ)
    if show_hidden is not None:
        settings = replace(settings, show_hidden=show_hidden)
    if no_color:
        settings = replace(settings, color=False)
    if log_file is not None:
        settings = replace(settings, log_file=log_file.expanduser())
    normalized_level = normalize_log_level(log_level)
    if normalized_level is not None:
        settings = replace(settings, log_level=normalized_level)
    return settings


__all__ = [
    "APP_NAME",
    "DEFAULT_LOG_PATH",
    "DEFAULT_LOG_LEVEL",
    "BrowserSettings",
    "normalize_log_level",
    "settings_from_env",
    "resolve_settings",
]
