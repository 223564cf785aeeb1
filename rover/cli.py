"""Command-line front door for rover.

Parses CLI options, resolves settings, and validates the start directory.
Then dispatches into the interactive browser session.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .app import load_start_state, run_browser
from .config import resolve_settings
from .errors import PathError
from .log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rover",
        description="Browse directories in the terminal and open files with their default application.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    hidden = parser.add_mutually_exclusive_group()
    hidden.add_argument(
        "--show-hidden",
        dest="show_hidden",
        action="store_true",
        default=None,
        help="List dot-files (default).",
    )
    hidden.add_argument(
        "--no-hidden",
        dest="show_hidden",
        action="store_false",
        help="Hide dot-files.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write the session log to this file.")
    parser.add_argument("--log-level", default=None, help="Log level name (DEBUG, INFO, WARNING, ...).")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Startup problems exit with a message before the
    terminal is switched into raw mode.
    """
    args = build_parser().parse_args()
    settings = resolve_settings(
        show_hidden=args.show_hidden,
        no_color=args.no_color,
        log_file=args.log_file,
        log_level=args.log_level,
    )
    configure_logging(settings.log_file, settings.log_level)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path

    try:
        state = load_start_state(path, settings)
    except PathError as exc:
        raise SystemExit(f"rover: {exc}") from exc

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("rover: stdin and stdout must be a terminal.")

    run_browser(state, settings)


if __name__ == "__main__":
    main()
