"""Flatten a feature → task hierarchy into an ordered row sequence.

Two groupings are supported:

* ``Grouping.STATUS``: status groups (depth 0) → feature sub-groups and an
  "Unassigned" sub-group (depth 1) → tasks (depth 2).
* ``Grouping.FEATURE``: feature groups (depth 0) → tasks (depth 1), followed by
  an "Unassigned Tasks" separator and the tasks that belong to no feature.

Children of a group are only emitted while the group id is in the expansion
set. Identical inputs always produce equal output.
"""

from collections import defaultdict
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from core import STATUS_ORDER, Feature, Task, TaskStatus, feature_status_to_task_status

from .tree_rows import GroupRow, LeafRow, Row, SeparatorRow

UNASSIGNED_KEY = "unassigned"
UNASSIGNED_LABEL = "Unassigned"
UNASSIGNED_SEPARATOR_ID = "separator:unassigned"
UNASSIGNED_SEPARATOR_LABEL = "Unassigned Tasks"


class Grouping(Enum):
    STATUS = "status"
    FEATURE = "features"

    @classmethod
    def from_string(cls, value: str) -> "Grouping":
        token = (value or "").strip().lower()
        if token in ("status", "statuses"):
            return cls.STATUS
        return cls.FEATURE


def leaf_sort_key(task: Task) -> Tuple[int, str]:
    """Higher priority first, then title in code-point order."""
    return (-task.priority.rank, task.title)


def sort_leaves(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=leaf_sort_key)


def status_bucket(task: Task) -> TaskStatus:
    """Status group a task is listed under; unrecognised statuses fall back to PENDING."""
    if task.status in STATUS_ORDER:
        return task.status
    return TaskStatus.PENDING


def status_group_id(status: TaskStatus) -> str:
    return status.code


def status_feature_group_id(status: TaskStatus, feature_id: str) -> str:
    return f"{status.code}:{feature_id}"


def status_unassigned_group_id(status: TaskStatus) -> str:
    return f"{status.code}:{UNASSIGNED_KEY}"


def feature_group_id(feature_id: str) -> str:
    return f"feature:{feature_id}"


def task_row_id(task_id: str) -> str:
    """Leaf row id; prefixed so a task never shares an id with a group row."""
    return f"task:{task_id}"


def _leaf_rows(tasks: Sequence[Task], depth: int) -> List[LeafRow]:
    ordered = sort_leaves(tasks)
    last = len(ordered) - 1
    return [
        LeafRow(id=task_row_id(task.id), depth=depth, task=task, is_last=idx == last)
        for idx, task in enumerate(ordered)
    ]


def _ordered_features(features: Sequence[Feature]) -> List[Feature]:
    # Creation time first; features without one keep their input position.
    indexed = list(enumerate(features))
    indexed.sort(key=lambda pair: (pair[1].created_at or "", pair[0]))
    return [feature for _, feature in indexed]


def flatten_by_status(
    tasks: Sequence[Task],
    features: Sequence[Feature],
    expanded: FrozenSet[str],
) -> Tuple[Row, ...]:
    """Status-first flattening."""
    known_features = {feature.id: feature for feature in features}
    ordered_features = _ordered_features(features)
    feature_order = {feature.id: idx for idx, feature in enumerate(ordered_features)}
    by_status: Dict[TaskStatus, List[Task]] = defaultdict(list)
    for task in tasks:
        by_status[status_bucket(task)].append(task)

    tasks_per_feature: Dict[str, int] = defaultdict(int)
    for task in tasks:
        if task.feature_id in known_features:
            tasks_per_feature[task.feature_id] += 1
    empty_by_status: Dict[TaskStatus, List[Feature]] = defaultdict(list)
    for feature in ordered_features:
        if tasks_per_feature.get(feature.id, 0) == 0:
            empty_by_status[feature_status_to_task_status(feature.status)].append(feature)

    rows: List[Row] = []
    for status in STATUS_ORDER:
        status_tasks = by_status.get(status, [])
        empty_features = empty_by_status.get(status, [])
        if not status_tasks and not empty_features:
            continue
        group_id = status_group_id(status)
        is_expanded = group_id in expanded
        rows.append(
            GroupRow(
                id=group_id,
                depth=0,
                label=status.label,
                child_count=len(status_tasks),
                expanded=is_expanded,
                expandable=True,
                status=status.code,
            )
        )
        if not is_expanded:
            continue

        by_feature: Dict[str, List[Task]] = defaultdict(list)
        unassigned: List[Task] = []
        for task in status_tasks:
            if task.feature_id and task.feature_id in known_features:
                by_feature[task.feature_id].append(task)
            else:
                unassigned.append(task)

        sub_groups: List[Tuple[Feature, List[Task]]] = [
            (feature, by_feature[feature.id]) for feature in features if feature.id in by_feature
        ]
        sub_groups.extend((feature, []) for feature in empty_features)
        sub_groups.sort(key=lambda pair: feature_order[pair[0].id])

        for feature, feature_tasks in sub_groups:
            sub_id = status_feature_group_id(status, feature.id)
            sub_expanded = bool(feature_tasks) and sub_id in expanded
            rows.append(
                GroupRow(
                    id=sub_id,
                    depth=1,
                    label=feature.name,
                    child_count=len(feature_tasks),
                    expanded=sub_expanded,
                    expandable=bool(feature_tasks),
                    status=feature.status.code,
                    entity_id=feature.id,
                )
            )
            if sub_expanded:
                rows.extend(_leaf_rows(feature_tasks, depth=2))

        if unassigned:
            sub_id = status_unassigned_group_id(status)
            sub_expanded = sub_id in expanded
            rows.append(
                GroupRow(
                    id=sub_id,
                    depth=1,
                    label=UNASSIGNED_LABEL,
                    child_count=len(unassigned),
                    expanded=sub_expanded,
                    expandable=True,
                    status=status.code,
                )
            )
            if sub_expanded:
                rows.extend(_leaf_rows(unassigned, depth=2))
    return tuple(rows)


def flatten_by_feature(
    tasks: Sequence[Task],
    features: Sequence[Feature],
    expanded: FrozenSet[str],
) -> Tuple[Row, ...]:
    """Parent-first flattening."""
    known_ids = {feature.id for feature in features}
    by_feature: Dict[str, List[Task]] = defaultdict(list)
    unassigned: List[Task] = []
    for task in tasks:
        if task.feature_id and task.feature_id in known_ids:
            by_feature[task.feature_id].append(task)
        else:
            unassigned.append(task)

    rows: List[Row] = []
    for feature in features:
        feature_tasks = by_feature.get(feature.id, [])
        has_tasks = bool(feature_tasks)
        group_id = feature_group_id(feature.id)
        is_expanded = has_tasks and group_id in expanded
        rows.append(
            GroupRow(
                id=group_id,
                depth=0,
                label=feature.name,
                child_count=len(feature_tasks),
                expanded=is_expanded,
                expandable=has_tasks,
                status=feature.status.code,
                entity_id=feature.id,
            )
        )
        if is_expanded:
            rows.extend(_leaf_rows(feature_tasks, depth=1))

    if unassigned:
        rows.append(SeparatorRow(id=UNASSIGNED_SEPARATOR_ID, depth=0, label=UNASSIGNED_SEPARATOR_LABEL))
        rows.extend(_leaf_rows(unassigned, depth=1))
    return tuple(rows)


def flatten(
    grouping: Grouping,
    tasks: Sequence[Task],
    features: Sequence[Feature],
    expanded: Iterable[str] = (),
) -> Tuple[Row, ...]:
    expansion = frozenset(expanded)
    if grouping is Grouping.STATUS:
        return flatten_by_status(tasks, features, expansion)
    return flatten_by_feature(tasks, features, expansion)


def all_group_ids(
    grouping: Grouping,
    tasks: Sequence[Task],
    features: Sequence[Feature],
) -> FrozenSet[str]:
    """Every group id that can appear for this data: an "expand all" set."""
    ids = set()
    known_ids = {feature.id for feature in features}
    if grouping is Grouping.STATUS:
        for task in tasks:
            bucket = status_bucket(task)
            ids.add(status_group_id(bucket))
            if task.feature_id in known_ids:
                ids.add(status_feature_group_id(bucket, task.feature_id))
            else:
                ids.add(status_unassigned_group_id(bucket))
        for feature in features:
            ids.add(status_group_id(feature_status_to_task_status(feature.status)))
    else:
        for task in tasks:
            if task.feature_id in known_ids:
                ids.add(feature_group_id(task.feature_id))
    return frozenset(ids)


__all__ = [
    "Grouping",
    "UNASSIGNED_LABEL",
    "UNASSIGNED_SEPARATOR_ID",
    "UNASSIGNED_SEPARATOR_LABEL",
    "leaf_sort_key",
    "sort_leaves",
    "status_bucket",
    "status_group_id",
    "status_feature_group_id",
    "status_unassigned_group_id",
    "feature_group_id",
    "task_row_id",
    "flatten_by_status",
    "flatten_by_feature",
    "flatten",
    "all_group_ids",
]
