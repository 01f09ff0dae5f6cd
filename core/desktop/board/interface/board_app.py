#!/usr/bin/env python3
"""
board.py: task-board entry point (CLI/TUI).

Projects, features and tasks are read from a single YAML board file.

This is a thin facade that delegates to specialized modules.
"""

import argparse
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError

from core.desktop.board.interface.cli_parser import build_parser as build_cli_parser
from .cli_tree import cmd_tree
from .tui_app import cmd_tui, BoardTUI
from .tui_themes import THEMES, DEFAULT_THEME


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=DEFAULT_THEME)
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("task-board"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if not getattr(args, "command", None):
        parser.print_help()
        return 1
    return args.func(args)


__all__ = ["BoardTUI", "build_parser", "cmd_tree", "cmd_tui", "main"]


if __name__ == "__main__":
    sys.exit(main())
