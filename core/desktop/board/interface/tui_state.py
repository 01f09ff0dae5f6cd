"""Tree state helpers to keep BoardTUI methods slim.

The TUI keeps the project tree as ``tree_rows`` + ``tree_index`` plus one
expansion set per grouping. Every change rebuilds the rows and re-points the
selection by row id so it survives rows appearing or disappearing above it.
"""

from typing import FrozenSet, Optional, Sequence

from core.desktop.board.application.selection import (
    Navigation,
    NavSignal,
    clamp_after_collapse,
    index_of,
    parent_index,
)
from core.desktop.board.application.tree_flattener import Grouping, all_group_ids, flatten
from core.desktop.board.application.tree_rows import GroupRow, Row
from core.desktop.board.application.viewport import clamp_index


def reselect_index(old_rows: Sequence[Row], new_rows: Sequence[Row], old_index: int) -> int:
    """Index in ``new_rows`` of the old selection, or of its nearest surviving ancestor."""
    if not new_rows:
        return 0
    if not old_rows:
        return clamp_index(old_index, len(new_rows))
    pos: Optional[int] = clamp_index(old_index, len(old_rows))
    while pos is not None:
        found = index_of(new_rows, old_rows[pos].id)
        if found is not None:
            return found
        pos = parent_index(old_rows, pos)
    return clamp_index(old_index, len(new_rows))


def current_expansion(tui) -> FrozenSet[str]:
    return tui.expanded_by_grouping.get(tui.grouping, frozenset())


def rebuild_tree(tui, expanded: Optional[FrozenSet[str]] = None, select_id: Optional[str] = None) -> None:
    """Re-flatten the current project and keep the selection on the same row."""
    if expanded is not None:
        tui.expanded_by_grouping[tui.grouping] = frozenset(expanded)
    old_rows = tui.tree_rows
    new_rows = flatten(tui.grouping, tui.tasks, tui.features, current_expansion(tui))
    target = index_of(new_rows, select_id) if select_id else None
    if target is None:
        target = reselect_index(old_rows, new_rows, tui.tree_index)
    tui.tree_rows = new_rows
    tui.tree_index = target


def apply_tree_navigation(tui, nav: Navigation) -> None:
    """Commit a Navigation result: expansion first, then selection, then signals."""
    old_rows = tui.tree_rows
    if nav.expanded != current_expansion(tui):
        keep_id = old_rows[nav.index].id if old_rows else None
        rebuild_tree(tui, nav.expanded, select_id=keep_id)
    else:
        tui.tree_index = clamp_index(nav.index, len(old_rows))
    if nav.signal is NavSignal.OPEN and nav.target_id:
        tui.open_entity(nav.target_id, nav.target_kind)
    elif nav.signal is NavSignal.BACK:
        tui.navigate_back()


def toggle_view_mode(tui) -> Grouping:
    tui.grouping = Grouping.FEATURE if tui.grouping is Grouping.STATUS else Grouping.STATUS
    tui.tree_rows = ()
    tui.tree_index = 0
    rebuild_tree(tui)
    return tui.grouping


def expand_all(tui) -> None:
    rebuild_tree(tui, all_group_ids(tui.grouping, tui.tasks, tui.features))


def collapse_all(tui) -> None:
    rebuild_tree(tui, frozenset())


def fold_branch(tui) -> None:
    """Collapse the nearest expanded group at or above the selection."""
    rows = tui.tree_rows
    if not rows:
        return
    pos: Optional[int] = clamp_index(tui.tree_index, len(rows))
    while pos is not None:
        row = rows[pos]
        if isinstance(row, GroupRow) and row.expanded:
            break
        pos = parent_index(rows, pos)
    if pos is None:
        return
    group = rows[pos]
    selected = clamp_after_collapse(rows, pos, tui.tree_index)
    keep_id = rows[selected].id
    rebuild_tree(tui, current_expansion(tui) - {group.id}, select_id=keep_id)


__all__ = [
    "reselect_index",
    "current_expansion",
    "rebuild_tree",
    "apply_tree_navigation",
    "toggle_view_mode",
    "expand_all",
    "collapse_all",
    "fold_branch",
]
