"""CLI entrypoint for Mahoraga."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import sys

from . import get_version
from .config import load_logging_config
from .logging_utils import configure_logging

PROG = "mahoraga"

USAGE = """
Mahoraga - Prompt Validation TUI

Usage:
  mahoraga summon    Launch the interactive prompt validator
  mahoraga --help    Show this help message
  mahoraga --version Show version

Commands (in app):
  /settings   Configure API settings
  /default    Reset settings to defaults
  /clear      Clear current analysis
  /exit       Exit the application
  Ctrl+C      Exit the application
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG, add_help=False, allow_abbrev=False, exit_on_error=False
    )
    parser.add_argument("command", nargs="?")
    flags = parser.add_mutually_exclusive_group()
    flags.add_argument("-h", "--help", action="store_true")
    flags.add_argument("-v", "--version", action="store_true")
    return parser


def _run_app() -> None:
    from .app import MahoragaApp

    configure_logging(load_logging_config())
    MahoragaApp().run()


def main(argv: Sequence[str] | None = None) -> int:
    """Dispatch on the first argument or launch the TUI; return the exit code.

    Anything after the first argument is ignored.
    """
    first = list(sys.argv[1:] if argv is None else argv)[:1]
    try:
        args, unknown = _build_parser().parse_known_args(first)
    except argparse.ArgumentError:
        args = argparse.Namespace(command=None, help=False, version=False)
        unknown = first

    if args.help:
        print(USAGE)
        return 0
    if args.version:
        print(f"{PROG} v{get_version()}")
        return 0

    stray = [args.command] if args.command not in (None, "", "summon") else []
    stray.extend(unknown)
    if not stray:
        _run_app()
        return 0

    print(f"Unknown command: {stray[0]}", file=sys.stderr)
    print(f'Run "{PROG} --help" for usage information.', file=sys.stderr)
    return 1


def run() -> None:
    """Console-script wrapper that exits with :func:`main`'s status."""
    sys.exit(main())


if __name__ == "__main__":
    run()
