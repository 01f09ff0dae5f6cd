from core import Feature, Project, SearchResults, Task
from core.desktop.board.application.search_items import (
    ItemKind,
    SearchItem,
    build_search_items,
    card_inner_width,
    card_width,
    results_window,
    search_item_height,
)


def test_items_are_grouped_by_kind():
    results = SearchResults(
        projects=(Project("P1", "Apollo", "portal"),),
        features=(Feature("F1", "Login"),),
        tasks=(Task("T1", "Add OAuth", summary="provider"),),
    )
    items = build_search_items(results)
    assert [item.kind for item in items] == [ItemKind.PROJECT, ItemKind.FEATURE, ItemKind.TASK]
    assert items[2] == SearchItem(ItemKind.TASK, "T1", "Add OAuth", "provider")
    assert ItemKind.FEATURE.label == "FEATURE"


def test_card_widths_have_floors():
    assert card_width(40) == 38
    assert card_inner_width(40) == 34
    assert card_width(5) == 16
    assert card_inner_width(5) == 12


def test_item_height_counts_each_section():
    short = SearchItem(ItemKind.TASK, "T1", "Short")
    assert search_item_height(short, 34) == 5
    long_title = SearchItem(ItemKind.TASK, "T2", "x" * 70, "subtitle")
    assert search_item_height(long_title, 34) == 7


def test_results_window_keeps_selection_visible():
    items = [SearchItem(ItemKind.TASK, f"T{i}", f"Task {i}") for i in range(10)]
    window = results_window(items, 9, 40, capacity=12)
    assert window.contains(9)
    assert (window.start, window.end) == (8, 10)
