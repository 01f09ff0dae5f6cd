from core import Feature, Task
from core.desktop.board.application.board_columns import BoardFeature, feature_card_height
from core.desktop.board.application.search_items import ItemKind, SearchItem, card_inner_width, search_item_height
from core.desktop.board.application.tree_layout import row_height
from core.desktop.board.application.tree_rows import LeafRow
from core.desktop.board.interface.i18n import translate
from core.desktop.board.interface.tui_display import DisplayMixin
from core.desktop.board.interface import tui_render


class FakeTUI(DisplayMixin):
    def _t(self, key, **kwargs):
        return translate(key, **kwargs)


def _text(line):
    return "".join(text for _, text in line)


def test_fit_fragments_trims_and_pads():
    tui = FakeTUI()
    line = tui_render._fit_fragments(tui, [("a", "hello"), ("b", " world")], 8)
    assert _text(line) == "hello wo"
    line = tui_render._fit_fragments(tui, [("a", "hi")], 5)
    assert _text(line) == "hi   "


def test_card_lines_match_estimated_height():
    tui = FakeTUI()
    tasks = tuple(Task(f"T{i}", "A task title long enough to wrap at least once " * (i % 2 + 1)) for i in range(6))
    card = BoardFeature(Feature("F1", "A feature with a fairly long name that wraps"), tasks)
    for expanded in (False, True):
        for task_index in (0, 3, 5):
            lines = tui_render.feature_card_lines(tui, card, 30, True, expanded, task_index, 3)
            assert len(lines) == feature_card_height(card, expanded, 30, 3, task_index)
            assert all(tui._display_width(_text(line)) == 30 for line in lines)


def test_empty_expanded_card_says_no_tasks():
    tui = FakeTUI()
    card = BoardFeature(Feature("F1", "Empty"))
    lines = tui_render.feature_card_lines(tui, card, 24, False, True, 0, 5)
    assert len(lines) == feature_card_height(card, True, 24)
    assert "No tasks" in _text(lines[-2])


def test_search_card_lines_match_height():
    tui = FakeTUI()
    item = SearchItem(ItemKind.TASK, "T1", "x" * 90, "subtitle text")
    lines = tui_render.search_card_lines(tui, item, 40, False)
    assert len(lines) == search_item_height(item, card_inner_width(40))


def test_leaf_row_lines_match_row_height():
    tui = FakeTUI()
    row = LeafRow("T1", 1, Task("T1", "word " * 30), True)
    lines = tui_render.tree_row_lines(tui, row, 40, selected=True)
    assert len(lines) == row_height(row, 40)
    assert all(style == tui_render.SELECTED for line in lines for style, _ in line)
