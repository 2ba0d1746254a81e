"""Command-line front door for lazyjira.

Parses CLI options, sets up logging, loads the issue file, and then
dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app import run_app
from .config import default_issues_path, load_style_name
from .errors import IssueStoreError, TerminalIOError
from .highlight import DEFAULT_STYLE, available_styles
from .issues import IssueStore
from .logs import init_logging, shutdown_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyjira",
        description="Browse issues in the terminal and edit descriptions in $EDITOR.",
    )
    parser.add_argument(
        "issues",
        nargs="?",
        default=None,
        help=f"Path to issues JSON file. Defaults to {default_issues_path()}.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for descriptions.")
    parser.add_argument("--list-styles", action="store_true", help="Print available highlight styles and exit.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR). Overrides $LAZYJIRA_LOG.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and launch the viewer.

    Exits with a message when the issue file cannot be loaded or the standard
    streams are not attached to a terminal.
    """
    args = build_parser().parse_args(argv)
    if args.list_styles:
        print("\n".join(available_styles()))
        return

    path = Path(args.issues) if args.issues is not None else default_issues_path()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("lazyjira needs an interactive terminal.")

    init_logging(args.log_level)
    try:
        store = IssueStore.load(path)
    except IssueStoreError as exc:
        logger.error("%s", exc)
        shutdown_logging()
        raise SystemExit(str(exc)) from exc

    style = args.style or load_style_name() or DEFAULT_STYLE
    try:
        run_app(store, style, args.no_color)
    except TerminalIOError as exc:
        logger.error("Terminal setup failed: %s", exc)
        raise SystemExit(f"Terminal error: {exc}") from exc
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
