"""Viewport windowing for lists of variable-height rows.

``compute_window`` picks the contiguous slice of rows to draw so that the
selected row is always visible and the slice fits the available terminal
rows. The window grows outward from the selection one row at a time,
alternating between the row above and the row below (above first), and stops
when neither neighbour fits. Every scrolling list in the board uses it, so
they all share one tie-break.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger("task_board.viewport")

T = TypeVar("T")

_UP = -1
_DOWN = 1


@dataclass(frozen=True)
class Window:
    """Half-open ``[start, end)`` slice of a row sequence of length ``total``."""
    start: int
    end: int
    total: int

    @property
    def hidden_above(self) -> int:
        return self.start

    @property
    def hidden_below(self) -> int:
        return max(0, self.total - self.end)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    @property
    def size(self) -> int:
        return self.end - self.start

    def contains(self, index: int) -> bool:
        return self.start <= index < self.end


EMPTY_WINDOW = Window(0, 0, 0)


def clamp_index(index: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(int(index), total - 1))


def _normalized_heights(heights: Sequence[int], total: int) -> List[int]:
    result = []
    for idx in range(total):
        value = heights[idx] if idx < len(heights) else 1
        result.append(max(1, int(value)))
    return result


def compute_window(rows: Sequence[object], heights: Sequence[int], selected_index: int, capacity: int) -> Window:
    """Largest contiguous window around ``selected_index`` fitting ``capacity`` rows.

    ``heights[i]`` is the terminal height of ``rows[i]``. Out-of-range
    selections and non-positive capacities are clamped; an empty row set yields
    an empty window. A selected row taller than ``capacity`` is shown alone.
    """
    total = len(rows)
    if total == 0:
        return EMPTY_WINDOW
    selected = clamp_index(selected_index, total)
    if selected != selected_index:
        logger.debug("selection %s clamped to %s (rows=%s)", selected_index, selected, total)
    capacity = max(1, int(capacity))
    sizes = _normalized_heights(heights, total)

    start, end = selected, selected + 1
    used = sizes[selected]
    if used > capacity:
        return Window(start, end, total)

    preferred = _UP
    while True:
        grown = None
        for direction in (preferred, -preferred):
            candidate = start - 1 if direction == _UP else end
            if candidate < 0 or candidate >= total:
                continue
            if used + sizes[candidate] > capacity:
                continue
            used += sizes[candidate]
            if direction == _UP:
                start = candidate
            else:
                end = candidate + 1
            grown = direction
            break
        if grown is None:
            break
        preferred = -grown
    return Window(start, end, total)


def page_window(total: int, selected_index: int, page_size: int) -> Window:
    """Uniform-height convenience: a page of ``page_size`` rows centered on the selection."""
    if total <= 0:
        return EMPTY_WINDOW
    placeholders = range(total)
    return compute_window(placeholders, [1] * total, selected_index, page_size)


def window_slice(rows: Sequence[T], window: Window) -> Sequence[T]:
    return rows[window.start:window.end]


def scroll_indicators(window: Window) -> Tuple[Optional[str], Optional[str]]:
    """``("↑ N more", "↓ M more")`` with ``None`` where nothing is hidden."""
    above = f"↑ {window.hidden_above} more" if window.hidden_above > 0 else None
    below = f"↓ {window.hidden_below} more" if window.hidden_below > 0 else None
    return above, below


__all__ = [
    "Window",
    "EMPTY_WINDOW",
    "clamp_index",
    "compute_window",
    "page_window",
    "window_slice",
    "scroll_indicators",
]
