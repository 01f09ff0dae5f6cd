"""Feature kanban board: columns by feature status and card geometry.

A column lists feature cards of varying height. A collapsed card shows the
feature name and a status line; the expanded card (at most one per board)
also lists the feature's tasks through its own small window. Heights computed
here are the ones the renderer draws, so column windows line up with the
screen.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from core import Feature, FeatureStatus, Task

from .height_estimator import estimate_height
from .tree_flattener import sort_leaves
from .viewport import Window, clamp_index, compute_window, page_window

FEATURE_BOARD_STATUSES: Tuple[FeatureStatus, ...] = tuple(
    status for status in FeatureStatus if status is not FeatureStatus.UNKNOWN
)

CARD_BORDER_ROWS = 2
CARD_STATUS_ROWS = 1
# Border plus one column of padding on each side.
CARD_HORIZONTAL_CHROME = 4
# Tree connector in front of task titles inside an expanded card.
TASK_INDENT = 4
# Header, header rule and the two scroll-indicator lines.
COLUMN_CHROME_ROWS = 4
DEFAULT_MAX_TASK_ROWS = 5


@dataclass(frozen=True)
class BoardFeature:
    feature: Feature
    tasks: Tuple[Task, ...] = ()

    @property
    def id(self) -> str:
        return self.feature.id

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def completed(self) -> int:
        return sum(1 for task in self.tasks if task.is_completed)


@dataclass(frozen=True)
class FeatureColumn:
    status: FeatureStatus
    features: Tuple[BoardFeature, ...] = ()

    @property
    def title(self) -> str:
        return self.status.label

    @property
    def count(self) -> int:
        return len(self.features)


def build_feature_columns(features: Sequence[Feature], tasks: Sequence[Task]) -> Tuple[FeatureColumn, ...]:
    """One column per board status; features keep input order, tasks are priority-sorted."""
    tasks_by_feature: Dict[str, List[Task]] = {}
    for task in tasks:
        if task.feature_id:
            tasks_by_feature.setdefault(task.feature_id, []).append(task)
    columns = []
    for status in FEATURE_BOARD_STATUSES:
        cards = tuple(
            BoardFeature(feature, tuple(sort_leaves(tasks_by_feature.get(feature.id, []))))
            for feature in features
            if feature.status is status
        )
        columns.append(FeatureColumn(status, cards))
    return tuple(columns)


def default_active_statuses(columns: Sequence[FeatureColumn]) -> FrozenSet[str]:
    """Statuses of non-empty columns, or every status when the board is empty."""
    populated = frozenset(column.status.code for column in columns if column.features)
    if populated:
        return populated
    return frozenset(column.status.code for column in columns)


def toggle_active_status(active: Iterable[str], status_code: str) -> FrozenSet[str]:
    """Add or remove a status filter chip; the last active status cannot be removed."""
    current = frozenset(active)
    if status_code in current:
        if len(current) > 1:
            return current - {status_code}
        return current
    return current | {status_code}


def filter_columns(columns: Sequence[FeatureColumn], active: Iterable[str]) -> Tuple[FeatureColumn, ...]:
    active_codes = frozenset(active)
    if not active_codes:
        return tuple(columns)
    return tuple(column for column in columns if column.status.code in active_codes)


def card_content_width(column_width: int) -> int:
    return max(1, column_width - CARD_HORIZONTAL_CHROME)


def task_title_width(column_width: int) -> int:
    return max(1, card_content_width(column_width) - TASK_INDENT)


def card_task_window(card: BoardFeature, selected_task_index: int, max_task_rows: int) -> Window:
    """Tasks shown inside an expanded card; ``selected_task_index < 0`` means none selected."""
    return page_window(card.total, max(0, selected_task_index), max(1, max_task_rows))


def feature_card_height(
    card: BoardFeature,
    expanded: bool,
    column_width: int,
    max_task_rows: int = DEFAULT_MAX_TASK_ROWS,
    selected_task_index: int = -1,
) -> int:
    content_width = card_content_width(column_width)
    height = CARD_BORDER_ROWS + estimate_height(card.feature.name, content_width) + CARD_STATUS_ROWS
    if not expanded:
        return height
    # Separator line below the status line.
    height += 1
    if not card.tasks:
        return height + 1
    window = card_task_window(card, selected_task_index, max_task_rows)
    height += int(window.hidden_above > 0) + int(window.hidden_below > 0)
    title_width = task_title_width(column_width)
    for task in card.tasks[window.start:window.end]:
        height += estimate_height(task.title, title_width) + 1
    return height + max(0, window.size - 1)


def column_capacity(available_height: int) -> int:
    return max(1, available_height - COLUMN_CHROME_ROWS)


def column_card_heights(
    column: FeatureColumn,
    column_width: int,
    expanded_feature_id: Optional[str] = None,
    max_task_rows: int = DEFAULT_MAX_TASK_ROWS,
    selected_task_index: int = -1,
) -> List[int]:
    return [
        feature_card_height(
            card,
            card.id == expanded_feature_id,
            column_width,
            max_task_rows,
            selected_task_index if card.id == expanded_feature_id else -1,
        )
        for card in column.features
    ]


def column_window(
    column: FeatureColumn,
    selected_index: int,
    column_width: int,
    available_height: int,
    expanded_feature_id: Optional[str] = None,
    max_task_rows: int = DEFAULT_MAX_TASK_ROWS,
    selected_task_index: int = -1,
) -> Window:
    heights = column_card_heights(column, column_width, expanded_feature_id, max_task_rows, selected_task_index)
    return compute_window(column.features, heights, selected_index, column_capacity(available_height))


def neighbour_status(status: FeatureStatus, step: int) -> Optional[FeatureStatus]:
    """Board status ``step`` columns away from ``status`` (None past either end)."""
    try:
        idx = FEATURE_BOARD_STATUSES.index(status)
    except ValueError:
        return None
    target = idx + step
    if target < 0 or target >= len(FEATURE_BOARD_STATUSES):
        return None
    return FEATURE_BOARD_STATUSES[target]


def wrap_index(index: int, total: int, step: int) -> int:
    """Vertical card movement wraps like the tree list."""
    if total <= 0:
        return 0
    return (clamp_index(index, total) + step + total) % total


__all__ = [
    "FEATURE_BOARD_STATUSES",
    "COLUMN_CHROME_ROWS",
    "DEFAULT_MAX_TASK_ROWS",
    "TASK_INDENT",
    "BoardFeature",
    "FeatureColumn",
    "build_feature_columns",
    "default_active_statuses",
    "toggle_active_status",
    "filter_columns",
    "card_content_width",
    "task_title_width",
    "card_task_window",
    "feature_card_height",
    "column_capacity",
    "column_card_heights",
    "column_window",
    "neighbour_status",
    "wrap_index",
]
