"""CLI parser construction for the task-board CLI/TUI."""

import argparse
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="task-board: browse projects, features and tasks in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    def add_data_arg(sp):
        sp.add_argument("--data", help="board YAML file (default: TASK_BOARD_DATA or ~/.task_board/board.yaml)")
        return sp

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", help="Start the interactive board")
    add_data_arg(tui_p)
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"colour palette (default: {default_theme})")
    tui_p.add_argument("--view", choices=["features", "status"], help="initial tree grouping")
    tui_p.set_defaults(func=commands.cmd_tui)

    # tree
    tree_p = sub.add_parser("tree", help="Print a project tree the way the board windows it")
    add_data_arg(tree_p)
    tree_p.add_argument("project_id")
    tree_p.add_argument("--view", choices=["features", "status"], default="features", help="tree grouping")
    tree_p.add_argument("--expand", action="append", default=[], metavar="GROUP_ID", help="expand a group (repeatable)")
    tree_p.add_argument("--expand-all", action="store_true", help="expand every group")
    tree_p.add_argument("--selected", type=int, default=0, metavar="N", help="index of the selected row")
    tree_p.add_argument("--height", type=int, default=0, metavar="N", help="rows available (default: terminal height)")
    tree_p.add_argument("--width", type=int, default=0, metavar="N", help="columns available (default: terminal width)")
    tree_p.set_defaults(func=commands.cmd_tree)

    return parser


__all__ = ["build_parser"]
