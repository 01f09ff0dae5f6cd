"""Footer renderer for BoardTUI: key hints for the current screen."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core.desktop.board.interface.tui_models import Screen


def footer_hint_key(tui) -> str:
    screen = tui.screen
    if screen is Screen.PROJECT:
        return "HINT_TREE"
    if screen is Screen.BOARD:
        if tui.board_filter_mode:
            return "HINT_BOARD_FILTER"
        if tui.expanded_feature_id:
            return "HINT_BOARD_TASKS"
        return "HINT_BOARD"
    if screen is Screen.SEARCH:
        return "HINT_SEARCH"
    if screen is Screen.TASK:
        return "HINT_DETAIL"
    if screen is Screen.FEATURE:
        return "HINT_FEATURE_DETAIL"
    return "HINT_DASHBOARD"


def build_footer_text(tui) -> FormattedText:
    width = max(20, tui.get_terminal_width() - 1)
    hint = tui._trim_display(tui._t(footer_hint_key(tui)), width - 2)
    parts: List[Tuple[str, str]] = [
        ("class:border", "─" * width + "\n"),
        ("class:text.dim", " " + hint),
    ]
    return FormattedText(parts)


__all__ = ["footer_hint_key", "build_footer_text"]
