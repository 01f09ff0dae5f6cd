from core.desktop.board.application.viewport import (
    EMPTY_WINDOW,
    Window,
    compute_window,
    page_window,
    scroll_indicators,
    window_slice,
)


def _rows(n):
    return list(range(n))


def test_empty_rows_give_empty_window():
    assert compute_window([], [], 3, 10) == EMPTY_WINDOW
    assert EMPTY_WINDOW.is_empty


def test_uniform_rows_center_on_selection():
    window = compute_window(_rows(20), [1] * 20, 9, 5)
    assert (window.start, window.end) == (7, 12)
    assert window.hidden_above == 7
    assert window.hidden_below == 8


def test_tall_rows_from_top():
    window = compute_window(_rows(15), [5] * 15, 0, 42)
    assert (window.start, window.end) == (0, 8)
    assert window.hidden_below == 7


def test_selection_at_end_grows_upward_only():
    window = compute_window(_rows(10), [1] * 10, 9, 3)
    assert (window.start, window.end) == (7, 10)


def test_growth_stops_when_neither_neighbour_fits():
    window = compute_window(_rows(5), [3, 1, 1, 1, 3], 2, 5)
    assert (window.start, window.end) == (1, 4)
    window = compute_window(_rows(5), [1, 1, 3, 1, 1], 2, 4)
    assert (window.start, window.end) == (1, 3)


def test_oversized_selected_row_is_shown_alone():
    window = compute_window(_rows(3), [1, 10, 1], 1, 5)
    assert (window.start, window.end) == (1, 2)


def test_out_of_range_selection_is_clamped():
    assert compute_window(_rows(5), [1] * 5, 99, 10) == Window(0, 5, 5)
    assert compute_window(_rows(5), [1] * 5, -3, 2) == Window(0, 2, 5)


def test_non_positive_capacity_shows_selection():
    assert compute_window(_rows(5), [1] * 5, 2, 0) == Window(2, 3, 5)


def test_window_always_holds_selection_and_fits():
    heights = [1, 2, 3, 1, 4, 2, 1, 1, 3, 2]
    for selected in range(len(heights)):
        window = compute_window(_rows(10), heights, selected, 6)
        assert window.contains(selected)
        assert sum(heights[window.start:window.end]) <= 6


def test_hidden_counts_and_size_cover_every_row():
    for heights in ([1] * 12, [2, 1, 5, 1, 1, 3, 1], [7], [1, 9, 1, 9, 1]):
        total = len(heights)
        for capacity in (1, 3, 8):
            for selected in range(-1, total + 1):
                window = compute_window(_rows(total), heights, selected, capacity)
                assert window.hidden_above + window.size + window.hidden_below == total


def test_page_window_and_slice():
    window = page_window(10, 0, 4)
    assert (window.start, window.end) == (0, 4)
    assert window_slice(list("abcdefghij"), window) == list("abcd")
    assert page_window(0, 0, 4) == EMPTY_WINDOW


def test_scroll_indicators():
    assert scroll_indicators(Window(2, 5, 9)) == ("↑ 2 more", "↓ 4 more")
    assert scroll_indicators(Window(0, 3, 3)) == (None, None)
