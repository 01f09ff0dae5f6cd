from dataclasses import dataclass

MAX_VISIBLE_COLUMNS = 3
# Board margin plus the hidden-column indicators.
BOARD_HORIZONTAL_CHROME = 4


@dataclass(frozen=True)
class ColumnViewport:
    """Horizontal window over kanban columns."""
    start: int
    end: int
    total: int

    @property
    def visible(self) -> int:
        return self.end - self.start

    @property
    def hidden_left(self) -> int:
        return self.start

    @property
    def hidden_right(self) -> int:
        return max(0, self.total - self.end)

    def left_indicator(self) -> str:
        return f"← {self.hidden_left}" if self.hidden_left > 0 else ""

    def right_indicator(self) -> str:
        return f"{self.hidden_right} →" if self.hidden_right > 0 else ""


def column_viewport(total: int, active_index: int, max_visible: int = MAX_VISIBLE_COLUMNS) -> ColumnViewport:
    """Up to ``max_visible`` columns, centered on the active one when there are more."""
    if total <= 0:
        return ColumnViewport(0, 0, 0)
    visible = min(max(1, max_visible), total)
    active = max(0, min(active_index, total - 1))
    start = 0
    if total > visible:
        start = max(0, active - visible // 2)
        start = min(start, total - visible)
    return ColumnViewport(start, start + visible, total)


def board_column_width(term_width: int, total_columns: int, max_visible: int = MAX_VISIBLE_COLUMNS) -> int:
    slots = min(max(1, max_visible), max(1, total_columns))
    return max(8, (term_width - BOARD_HORIZONTAL_CHROME) // slots)


def content_width(term_width: int) -> int:
    """Usable width for single-column screens (search, detail, tree)."""
    return max(20, term_width - 4)


def detail_content_width(term_width: int) -> int:
    """Adaptive content width for detail views."""
    tw = max(20, term_width)
    if tw < 80:
        base = tw - 4
    elif tw < 120:
        base = tw - 6
    else:
        base = int(tw * 0.9)
    return max(16, min(base, tw - 2, 160))
