from util.responsive import (
    ColumnViewport,
    board_column_width,
    column_viewport,
    content_width,
    detail_content_width,
)


def test_column_viewport_centers_active_column():
    assert column_viewport(11, 0) == ColumnViewport(0, 3, 11)
    assert column_viewport(11, 5) == ColumnViewport(4, 7, 11)
    assert column_viewport(11, 10) == ColumnViewport(8, 11, 11)
    assert column_viewport(2, 1) == ColumnViewport(0, 2, 2)
    assert column_viewport(0, 3) == ColumnViewport(0, 0, 0)


def test_column_indicators():
    viewport = column_viewport(11, 5)
    assert viewport.left_indicator() == "← 4"
    assert viewport.right_indicator() == "4 →"
    assert column_viewport(3, 0).left_indicator() == ""


def test_board_column_width():
    assert board_column_width(100, 11) == 32
    assert board_column_width(20, 1) == 16
    assert board_column_width(5, 3) == 8


def test_content_widths():
    assert content_width(10) == 20
    assert content_width(100) == 96
    assert detail_content_width(50) == 46
    assert detail_content_width(100) == 94
    assert detail_content_width(200) == 160
