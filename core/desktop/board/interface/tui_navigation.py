"""Navigation helpers for BoardTUI, one entry point per key direction."""

from core.desktop.board.application.board_columns import wrap_index
from core.desktop.board.application.selection import Direction, activate, navigate
from core.desktop.board.interface.tui_models import Screen
from core.desktop.board.interface.tui_state import apply_tree_navigation, current_expansion


def _wrap(index: int, total: int, delta: int) -> int:
    if total <= 0:
        return 0
    return wrap_index(index, total, 1 if delta > 0 else -1)


def move_vertical_selection(tui, delta: int) -> None:
    """Move the selection of the current screen by one row (wrapping)."""
    screen = tui.screen
    if screen is Screen.DASHBOARD:
        tui.dashboard_index = _wrap(tui.dashboard_index, len(tui.projects), delta)
    elif screen is Screen.PROJECT:
        direction = Direction.DOWN if delta > 0 else Direction.UP
        apply_tree_navigation(tui, navigate(tui.tree_rows, tui.tree_index, direction, current_expansion(tui)))
    elif screen is Screen.BOARD:
        if tui.board_filter_mode:
            return
        card = tui.selected_board_card()
        if tui.expanded_feature_id and card is not None and card.id == tui.expanded_feature_id:
            tui.board_task_index = _wrap(tui.board_task_index, card.total, delta)
        else:
            column = tui.active_board_column()
            total = column.count if column else 0
            tui.board_card_index = _wrap(tui.board_card_index, total, delta)
    elif screen is Screen.SEARCH:
        tui.search_index = _wrap(tui.search_index, len(tui.search_items), delta)
    elif screen is Screen.FEATURE:
        tui.feature_task_index = _wrap(tui.feature_task_index, len(tui.feature_rows), delta)
    elif screen is Screen.TASK:
        tui.scroll_detail(delta)
    tui.force_render()


def move_horizontal_selection(tui, delta: int) -> None:
    """Left/right: spatial tree moves, kanban columns or filter chips."""
    screen = tui.screen
    if screen is Screen.PROJECT:
        direction = Direction.RIGHT if delta > 0 else Direction.LEFT
        apply_tree_navigation(tui, navigate(tui.tree_rows, tui.tree_index, direction, current_expansion(tui)))
    elif screen is Screen.BOARD:
        if tui.board_filter_mode:
            total = len(tui.board_columns_all)
            tui.board_filter_cursor = max(0, min(tui.board_filter_cursor + delta, total - 1)) if total else 0
        elif not tui.expanded_feature_id:
            total = len(tui.board_columns)
            if total:
                tui.board_column_index = max(0, min(tui.board_column_index + delta, total - 1))
                tui.board_card_index = 0
    elif screen is Screen.DASHBOARD and delta > 0:
        tui.activate_selection()
        return
    elif delta < 0:
        tui.navigate_back()
        return
    elif screen in (Screen.SEARCH, Screen.FEATURE):
        tui.activate_selection()
        return
    tui.force_render()


def activate_tree_selection(tui) -> None:
    apply_tree_navigation(tui, activate(tui.tree_rows, tui.tree_index, current_expansion(tui)))


__all__ = ["move_vertical_selection", "move_horizontal_selection", "activate_tree_selection"]
