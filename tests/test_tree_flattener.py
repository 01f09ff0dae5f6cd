from core import Feature, FeatureStatus, Priority, Task, TaskStatus
from core.desktop.board.application.tree_flattener import (
    UNASSIGNED_SEPARATOR_ID,
    Grouping,
    all_group_ids,
    flatten,
    flatten_by_feature,
    flatten_by_status,
)
from core.desktop.board.application.tree_rows import GroupRow, LeafRow, SeparatorRow


FEATURES = [
    Feature("F1", "Login", status=FeatureStatus.IN_DEVELOPMENT, created_at="2024-01-02"),
    Feature("F2", "Billing", status=FeatureStatus.PLANNING, created_at="2024-01-01"),
    Feature("F3", "Docs", status=FeatureStatus.COMPLETED, created_at="2024-01-03"),
]

TASKS = [
    Task("T1", "b task", status=TaskStatus.IN_PROGRESS, priority=Priority.HIGH, feature_id="F1"),
    Task("T2", "a task", status=TaskStatus.PENDING, priority=Priority.LOW, feature_id="F1"),
    Task("T3", "invoice", status=TaskStatus.PENDING, priority=Priority.MEDIUM, feature_id="F2"),
    Task("T4", "Fix CI", status=TaskStatus.BLOCKED, priority=Priority.HIGH),
    Task("T5", "a high", status=TaskStatus.PENDING, priority=Priority.HIGH, feature_id="F1"),
]


def _ids(rows):
    return [row.id for row in rows]


class TestParentFirst:
    def test_collapsed_features_then_unassigned(self):
        rows = flatten_by_feature(TASKS, FEATURES, frozenset())
        assert _ids(rows) == ["feature:F1", "feature:F2", "feature:F3", UNASSIGNED_SEPARATOR_ID, "task:T4"]
        f1, _, f3, sep, t4 = rows
        assert isinstance(f1, GroupRow) and f1.child_count == 3 and f1.expandable and not f1.expanded
        assert not f3.expandable and f3.child_count == 0 and f3.entity_id == "F3"
        assert isinstance(sep, SeparatorRow) and sep.depth == 0
        assert isinstance(t4, LeafRow) and t4.depth == 1

    def test_expanded_feature_lists_sorted_leaves(self):
        rows = flatten_by_feature(TASKS, FEATURES, frozenset({"feature:F1"}))
        assert _ids(rows) == [
            "feature:F1",
            "task:T5",
            "task:T1",
            "task:T2",
            "feature:F2",
            "feature:F3",
            UNASSIGNED_SEPARATOR_ID,
            "task:T4",
        ]
        assert rows[0].expanded
        assert [row.depth for row in rows[1:4]] == [1, 1, 1]
        assert [row.is_last for row in rows[1:4]] == [False, False, True]

    def test_empty_feature_never_expands(self):
        rows = flatten_by_feature(TASKS, FEATURES, frozenset({"feature:F3"}))
        f3 = rows[2]
        assert f3.id == "feature:F3" and not f3.expanded

    def test_task_with_unknown_feature_is_unassigned(self):
        orphan = Task("T9", "orphan", feature_id="NOPE")
        rows = flatten_by_feature([orphan], FEATURES, frozenset())
        assert _ids(rows)[-2:] == [UNASSIGNED_SEPARATOR_ID, "task:T9"]


class TestStatusFirst:
    def test_collapsed_groups_follow_status_order(self):
        rows = flatten_by_status(TASKS, FEATURES, frozenset())
        assert _ids(rows) == ["PENDING", "IN_PROGRESS", "BLOCKED", "COMPLETED"]
        assert rows[0].child_count == 3
        assert rows[3].child_count == 0 and rows[3].expandable

    def test_feature_subgroups_ordered_by_creation(self):
        rows = flatten_by_status(TASKS, FEATURES, frozenset({"PENDING", "PENDING:F1"}))
        assert _ids(rows) == [
            "PENDING",
            "PENDING:F2",
            "PENDING:F1",
            "task:T5",
            "task:T2",
            "IN_PROGRESS",
            "BLOCKED",
            "COMPLETED",
        ]
        assert [row.depth for row in rows[:5]] == [0, 1, 1, 2, 2]
        assert rows[2].label == "Login" and rows[2].entity_id == "F1"

    def test_empty_feature_listed_under_mapped_status(self):
        rows = flatten_by_status(TASKS, FEATURES, frozenset({"COMPLETED"}))
        assert _ids(rows)[-2:] == ["COMPLETED", "COMPLETED:F3"]
        empty = rows[-1]
        assert not empty.expandable and empty.entity_id == "F3"

    def test_unassigned_subgroup(self):
        rows = flatten_by_status(TASKS, FEATURES, frozenset({"BLOCKED", "BLOCKED:unassigned"}))
        idx = _ids(rows).index("BLOCKED:unassigned")
        assert rows[idx].label == "Unassigned"
        assert rows[idx + 1].id == "task:T4" and rows[idx + 1].depth == 2

    def test_unknown_status_goes_to_pending(self):
        odd = Task("T8", "odd", status=TaskStatus.UNKNOWN)
        rows = flatten_by_status([odd], [], frozenset({"PENDING", "PENDING:unassigned"}))
        assert _ids(rows) == ["PENDING", "PENDING:unassigned", "task:T8"]


def test_flatten_is_deterministic_and_ids_unique():
    for grouping in Grouping:
        expanded = all_group_ids(grouping, TASKS, FEATURES)
        first = flatten(grouping, TASKS, FEATURES, expanded)
        second = flatten(grouping, TASKS, FEATURES, expanded)
        assert first == second
        assert len(set(_ids(first))) == len(first)


def test_feature_and_task_sharing_an_id_get_distinct_rows():
    features = [Feature("A", "Empty feature"), Feature("B", "Busy feature")]
    tasks = [Task("A", "Shares an id", feature_id="B")]
    rows = flatten(Grouping.FEATURE, tasks, features, all_group_ids(Grouping.FEATURE, tasks, features))
    assert _ids(rows) == ["feature:A", "feature:B", "task:A"]
    assert isinstance(rows[2], LeafRow) and rows[2].task.id == "A"


def test_collapse_then_expand_restores_children():
    for grouping in Grouping:
        expanded = all_group_ids(grouping, TASKS, FEATURES)
        before = flatten(grouping, TASKS, FEATURES, expanded)
        for group_id in expanded:
            collapsed = flatten(grouping, TASKS, FEATURES, expanded - {group_id})
            assert len(collapsed) < len(before)
            assert flatten(grouping, TASKS, FEATURES, (expanded - {group_id}) | {group_id}) == before


def test_all_group_ids():
    assert all_group_ids(Grouping.FEATURE, TASKS, FEATURES) == {"feature:F1", "feature:F2"}
    assert all_group_ids(Grouping.STATUS, TASKS, FEATURES) == {
        "PENDING",
        "IN_PROGRESS",
        "BLOCKED",
        "COMPLETED",
        "PENDING:F1",
        "PENDING:F2",
        "IN_PROGRESS:F1",
        "BLOCKED:unassigned",
    }


def test_grouping_from_string():
    assert Grouping.from_string("status") is Grouping.STATUS
    assert Grouping.from_string("features") is Grouping.FEATURE
    assert Grouping.from_string("") is Grouping.FEATURE
