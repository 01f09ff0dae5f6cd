"""Terminal geometry of tree rows.

Group and separator rows take one line. A leaf row is drawn as

    <indent><connector><glyph> <dots> <title…>

with the title wrapping under itself, so its height is the wrapped height of
the title at whatever width remains after the prefix.
"""

from typing import List, Sequence

from .height_estimator import estimate_height
from .tree_rows import LeafRow, Row

INDENT_WIDTH = 2
# "├─ " / "└─ "
CONNECTOR_WIDTH = 3
# status glyph and a space
GLYPH_WIDTH = 2
# "●●○" and a space
DOTS_WIDTH = 4


def leaf_prefix_width(depth: int) -> int:
    return INDENT_WIDTH * max(0, depth) + CONNECTOR_WIDTH + GLYPH_WIDTH + DOTS_WIDTH


def leaf_title_width(depth: int, content_width: int) -> int:
    return max(1, content_width - leaf_prefix_width(depth))


def row_height(row: Row, content_width: int) -> int:
    if isinstance(row, LeafRow):
        return estimate_height(row.task.title, leaf_title_width(row.depth, content_width))
    return 1


def row_heights(rows: Sequence[Row], content_width: int) -> List[int]:
    return [row_height(row, content_width) for row in rows]


__all__ = [
    "INDENT_WIDTH",
    "leaf_prefix_width",
    "leaf_title_width",
    "row_height",
    "row_heights",
]
