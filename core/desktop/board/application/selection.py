"""Keyboard navigation over a flattened tree.

Vertical moves wrap around. Horizontal moves are spatial: right expands a
collapsed group or descends into an expanded one, left collapses an expanded
group or climbs to the parent. Opening a leaf and leaving the screen are
reported as signals; the caller decides what they mean.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence

from .tree_rows import GroupRow, LeafRow, Row
from .viewport import clamp_index


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class NavSignal(Enum):
    OPEN = "open"
    BACK = "back"


class TargetKind(Enum):
    TASK = "task"
    FEATURE = "feature"


@dataclass(frozen=True)
class ExpansionDelta:
    added: FrozenSet[str] = frozenset()
    removed: FrozenSet[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


@dataclass(frozen=True)
class Navigation:
    index: int
    expanded: FrozenSet[str]
    signal: Optional[NavSignal] = None
    target_id: Optional[str] = None
    target_kind: Optional[TargetKind] = None


def apply_delta(expanded: Iterable[str], delta: ExpansionDelta) -> FrozenSet[str]:
    return (frozenset(expanded) - delta.removed) | delta.added


def first_child_index(rows: Sequence[Row], index: int) -> Optional[int]:
    """First row after ``index`` at depth+1, stopping at the next sibling or ancestor."""
    depth = rows[index].depth
    for pos in range(index + 1, len(rows)):
        row_depth = rows[pos].depth
        if row_depth <= depth:
            return None
        if row_depth == depth + 1:
            return pos
    return None


def parent_index(rows: Sequence[Row], index: int) -> Optional[int]:
    """Nearest row before ``index`` at depth-1."""
    depth = rows[index].depth
    if depth <= 0:
        return None
    for pos in range(index - 1, -1, -1):
        if rows[pos].depth == depth - 1:
            return pos
    return None


def move(rows: Sequence[Row], selected_index: int, direction: Direction) -> int:
    """Index-only movement; expansion changes and signals are left to ``navigate``."""
    total = len(rows)
    if total == 0:
        return 0
    current = clamp_index(selected_index, total)
    if direction is Direction.DOWN:
        return (current + 1) % total
    if direction is Direction.UP:
        return (current - 1 + total) % total
    row = rows[current]
    if direction is Direction.RIGHT:
        if isinstance(row, GroupRow) and row.expanded:
            child = first_child_index(rows, current)
            return current if child is None else child
        return current
    if isinstance(row, GroupRow) and row.expanded:
        return current
    parent = parent_index(rows, current)
    return current if parent is None else parent


def toggle(rows: Sequence[Row], index: int, expanded: Iterable[str]) -> ExpansionDelta:
    """Expansion change that toggles the group at ``index``; empty for anything else."""
    if not rows:
        return ExpansionDelta()
    row = rows[clamp_index(index, len(rows))]
    if not isinstance(row, GroupRow) or not row.expandable:
        return ExpansionDelta()
    if row.id in frozenset(expanded):
        return ExpansionDelta(removed=frozenset({row.id}))
    return ExpansionDelta(added=frozenset({row.id}))


def clamp_after_collapse(rows: Sequence[Row], group_index: int, selected_index: int) -> int:
    """Selection after collapsing ``rows[group_index]``.

    A selection strictly inside the collapsed subtree snaps to the group row;
    any other selection is returned unchanged (as an index into the old rows).
    """
    if not rows or selected_index <= group_index:
        return selected_index
    depth = rows[group_index].depth
    for pos in range(group_index + 1, len(rows)):
        if rows[pos].depth <= depth:
            return group_index if selected_index < pos else selected_index
    return group_index


def navigate(
    rows: Sequence[Row],
    selected_index: int,
    direction: Direction,
    expanded: Iterable[str],
) -> Navigation:
    """Full navigation step: new index, new expansion set and an optional signal."""
    expansion = frozenset(expanded)
    total = len(rows)
    if total == 0:
        return Navigation(0, expansion, NavSignal.BACK if direction is Direction.LEFT else None)
    current = clamp_index(selected_index, total)
    if direction in (Direction.UP, Direction.DOWN):
        return Navigation(move(rows, current, direction), expansion)

    row = rows[current]
    if direction is Direction.RIGHT:
        if isinstance(row, LeafRow):
            return Navigation(current, expansion, NavSignal.OPEN, row.task.id, TargetKind.TASK)
        if isinstance(row, GroupRow):
            if not row.expandable:
                if row.entity_id:
                    return Navigation(
                        current, expansion, NavSignal.OPEN, row.entity_id, TargetKind.FEATURE
                    )
                return Navigation(current, expansion)
            if not row.expanded:
                return Navigation(current, apply_delta(expansion, ExpansionDelta(added=frozenset({row.id}))))
            return Navigation(move(rows, current, direction), expansion)
        return Navigation(current, expansion)

    if isinstance(row, GroupRow) and row.expanded:
        return Navigation(current, apply_delta(expansion, ExpansionDelta(removed=frozenset({row.id}))))
    parent = parent_index(rows, current)
    if parent is None:
        return Navigation(current, expansion, NavSignal.BACK)
    return Navigation(parent, expansion)


def activate(rows: Sequence[Row], selected_index: int, expanded: Iterable[str]) -> Navigation:
    """Enter/space: toggle a group (snapping selection onto it) or open a leaf."""
    expansion = frozenset(expanded)
    if not rows:
        return Navigation(0, expansion)
    current = clamp_index(selected_index, len(rows))
    row = rows[current]
    if isinstance(row, LeafRow):
        return Navigation(current, expansion, NavSignal.OPEN, row.task.id, TargetKind.TASK)
    if isinstance(row, GroupRow) and not row.expandable and row.entity_id:
        return Navigation(current, expansion, NavSignal.OPEN, row.entity_id, TargetKind.FEATURE)
    delta = toggle(rows, current, expansion)
    return Navigation(current, apply_delta(expansion, delta))


def index_of(rows: Sequence[Row], row_id: Optional[str]) -> Optional[int]:
    if row_id is None:
        return None
    for idx, row in enumerate(rows):
        if row.id == row_id:
            return idx
    return None


__all__ = [
    "Direction",
    "NavSignal",
    "TargetKind",
    "ExpansionDelta",
    "Navigation",
    "apply_delta",
    "first_child_index",
    "parent_index",
    "move",
    "toggle",
    "clamp_after_collapse",
    "navigate",
    "activate",
    "index_of",
]
