"""``tree`` command: print a flattened project tree and the visible window."""

import os
import sys
from pathlib import Path

from config import get_data_path
from core import AdapterError, BoardDataError
from core.desktop.board.application.tree_flattener import Grouping, all_group_ids, flatten
from core.desktop.board.application.tree_layout import INDENT_WIDTH, row_heights
from core.desktop.board.application.tree_rows import GroupRow, LeafRow, Row
from core.desktop.board.application.viewport import clamp_index, compute_window, scroll_indicators
from infrastructure.file_repository import YamlBoardRepository
from util.responsive import content_width


def _terminal_size():
    try:
        size = os.get_terminal_size()
        return size.columns, size.lines
    except (AttributeError, ValueError, OSError):
        return 100, 40


def format_row(row: Row, selected: bool = False) -> str:
    marker = "> " if selected else "  "
    indent = " " * (INDENT_WIDTH * row.depth)
    if isinstance(row, GroupRow):
        arrow = "▼" if row.expanded else ("▶" if row.expandable else "·")
        return f"{marker}{indent}{arrow} {row.label} ({row.child_count})  [{row.id}]"
    if isinstance(row, LeafRow):
        task = row.task
        connector = "└─" if row.is_last else "├─"
        return f"{marker}{indent}{connector} {task.status.glyph} {task.priority.dots} {task.title}  [{task.id}]"
    return f"{marker}{indent}── {row.label} ──"


def cmd_tree(args) -> int:
    data_path = Path(args.data).expanduser() if getattr(args, "data", None) else get_data_path()
    try:
        repo = YamlBoardRepository(data_path)
        project = repo.get_project(args.project_id)
        if project is None:
            print(f"Error: project {args.project_id} not found in {data_path}", file=sys.stderr)
            return 1
        tasks = repo.list_tasks(project.id)
        features = repo.list_features(project.id)
    except (AdapterError, BoardDataError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    grouping = Grouping.from_string(args.view)
    expanded = set(args.expand or [])
    if getattr(args, "expand_all", False):
        expanded |= all_group_ids(grouping, tasks, features)
    rows = flatten(grouping, tasks, features, expanded)

    term_width, term_height = _terminal_size()
    width = args.width if args.width and args.width > 0 else term_width
    height = args.height if args.height and args.height > 0 else term_height
    # Same geometry as the board's tree screen: padded content width, title and two indicator lines.
    selected = clamp_index(args.selected, len(rows))
    window = compute_window(rows, row_heights(rows, content_width(width)), selected, max(1, height - 3))

    print(f"{project.name} [{grouping.value}] rows={len(rows)} window={window.start}:{window.end}")
    above, below = scroll_indicators(window)
    if above:
        print(above)
    for idx in range(window.start, window.end):
        print(format_row(rows[idx], selected=idx == selected))
    if below:
        print(below)
    return 0


__all__ = ["format_row", "cmd_tree"]
