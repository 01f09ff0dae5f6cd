"""Row types produced by the tree flattener.

A flattened tree is a tuple of rows. Every row has an ``id`` unique within the
sequence and a ``depth``; the kind is closed: group, leaf or separator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from core import Task


class RowKind(Enum):
    GROUP = "group"
    LEAF = "leaf"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class GroupRow:
    id: str
    depth: int
    label: str
    child_count: int
    expanded: bool
    expandable: bool
    status: str = ""
    entity_id: Optional[str] = None

    kind = RowKind.GROUP


@dataclass(frozen=True)
class LeafRow:
    id: str
    depth: int
    task: Task
    is_last: bool

    kind = RowKind.LEAF


@dataclass(frozen=True)
class SeparatorRow:
    id: str
    depth: int
    label: str

    kind = RowKind.SEPARATOR


Row = Union[GroupRow, LeafRow, SeparatorRow]


def is_group(row: Row) -> bool:
    return isinstance(row, GroupRow)


def is_leaf(row: Row) -> bool:
    return isinstance(row, LeafRow)


def is_separator(row: Row) -> bool:
    return isinstance(row, SeparatorRow)


def row_label(row: Row) -> str:
    if isinstance(row, LeafRow):
        return row.task.title
    return row.label


__all__ = [
    "RowKind",
    "GroupRow",
    "LeafRow",
    "SeparatorRow",
    "Row",
    "is_group",
    "is_leaf",
    "is_separator",
    "row_label",
]
