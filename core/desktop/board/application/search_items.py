"""Search results as a flat list of typed cards."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from core import SearchResults

from .height_estimator import estimate_height
from .viewport import Window, compute_window

CARD_BORDER_ROWS = 2
MARKER_WIDTH = 2
MIN_CARD_WIDTH = 16
MIN_INNER_WIDTH = 8


class ItemKind(Enum):
    PROJECT = "project"
    FEATURE = "feature"
    TASK = "task"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class SearchItem:
    kind: ItemKind
    id: str
    title: str
    subtitle: str = ""


def build_search_items(results: SearchResults) -> Tuple[SearchItem, ...]:
    """Projects, then features, then tasks, each in adapter order."""
    items: List[SearchItem] = []
    items.extend(SearchItem(ItemKind.PROJECT, p.id, p.name, p.summary) for p in results.projects)
    items.extend(SearchItem(ItemKind.FEATURE, f.id, f.name, f.summary) for f in results.features)
    items.extend(SearchItem(ItemKind.TASK, t.id, t.title, t.summary) for t in results.tasks)
    return tuple(items)


def card_width(content_width: int) -> int:
    return max(MIN_CARD_WIDTH, content_width - MARKER_WIDTH)


def card_inner_width(content_width: int) -> int:
    return max(MIN_INNER_WIDTH, card_width(content_width) - 4)


def search_item_height(item: SearchItem, inner_width: int) -> int:
    return (
        CARD_BORDER_ROWS
        + estimate_height(item.kind.label, inner_width)
        + estimate_height(item.title, inner_width)
        + estimate_height(item.subtitle, inner_width)
    )


def results_window(items: Sequence[SearchItem], selected_index: int, content_width: int, capacity: int) -> Window:
    inner = card_inner_width(content_width)
    heights = [search_item_height(item, inner) for item in items]
    return compute_window(items, heights, selected_index, capacity)


__all__ = [
    "ItemKind",
    "SearchItem",
    "build_search_items",
    "card_width",
    "card_inner_width",
    "search_item_height",
    "results_window",
]
