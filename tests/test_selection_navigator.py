import pytest

from core import Feature, FeatureStatus, Priority, Task
from core.desktop.board.application.selection import (
    Direction,
    ExpansionDelta,
    NavSignal,
    TargetKind,
    activate,
    clamp_after_collapse,
    first_child_index,
    index_of,
    move,
    navigate,
    parent_index,
    toggle,
)
from core.desktop.board.application.tree_flattener import flatten_by_feature
from core.desktop.board.application.tree_rows import GroupRow, LeafRow

FEATURES = [
    Feature("F1", "Login", status=FeatureStatus.IN_DEVELOPMENT),
    Feature("F2", "Billing"),
    Feature("F3", "Docs", status=FeatureStatus.COMPLETED),
]
TASKS = [
    Task("T1", "b task", priority=Priority.HIGH, feature_id="F1"),
    Task("T2", "a task", priority=Priority.LOW, feature_id="F1"),
    Task("T3", "invoice", feature_id="F2"),
    Task("T4", "Fix CI"),
    Task("T5", "a high", priority=Priority.HIGH, feature_id="F1"),
]
EXPANDED = frozenset({"feature:F1"})


@pytest.fixture
def rows():
    # F1, T5, T1, T2, F2, F3, separator, T4
    return flatten_by_feature(TASKS, FEATURES, EXPANDED)


class TestVertical:
    def test_down_and_up_wrap(self, rows):
        assert navigate(rows, 7, Direction.DOWN, EXPANDED).index == 0
        assert navigate(rows, 0, Direction.UP, EXPANDED).index == 7
        assert move(rows, 3, Direction.DOWN) == 4

    def test_vertical_moves_keep_expansion(self, rows):
        nav = navigate(rows, 2, Direction.DOWN, EXPANDED)
        assert nav.expanded == EXPANDED and nav.signal is None


class TestRight:
    def test_expands_collapsed_group(self, rows):
        nav = navigate(rows, 4, Direction.RIGHT, EXPANDED)
        assert nav.index == 4
        assert nav.expanded == {"feature:F1", "feature:F2"}

    def test_descends_into_expanded_group(self, rows):
        nav = navigate(rows, 0, Direction.RIGHT, EXPANDED)
        assert nav.index == 1 and nav.expanded == EXPANDED

    def test_opens_leaf(self, rows):
        nav = navigate(rows, 1, Direction.RIGHT, EXPANDED)
        assert nav.signal is NavSignal.OPEN and nav.target_id == "T5"
        assert nav.target_kind is TargetKind.TASK

    def test_opens_empty_feature(self, rows):
        nav = navigate(rows, 5, Direction.RIGHT, EXPANDED)
        assert nav.signal is NavSignal.OPEN and nav.target_id == "F3"
        assert nav.target_kind is TargetKind.FEATURE

    def test_empty_feature_opens_as_feature_when_a_task_shares_its_id(self):
        features = [Feature("A", "Empty feature"), Feature("B", "Busy feature")]
        tasks = [Task("A", "Shares an id", feature_id="B")]
        rows = flatten_by_feature(tasks, features, frozenset({"feature:B"}))
        nav = navigate(rows, 0, Direction.RIGHT, frozenset({"feature:B"}))
        assert (nav.signal, nav.target_id, nav.target_kind) == (NavSignal.OPEN, "A", TargetKind.FEATURE)
        nav = navigate(rows, 2, Direction.RIGHT, frozenset({"feature:B"}))
        assert (nav.signal, nav.target_id, nav.target_kind) == (NavSignal.OPEN, "A", TargetKind.TASK)

    def test_expanded_group_without_visible_children_keeps_selection(self):
        rows = (
            GroupRow(id="g1", depth=0, label="Filtered", child_count=2, expanded=True, expandable=True),
            GroupRow(id="g2", depth=0, label="Next", child_count=1, expanded=True, expandable=True),
            LeafRow(id="task:T1", depth=1, task=TASKS[0], is_last=True),
        )
        expanded = frozenset({"g1", "g2"})
        nav = navigate(rows, 0, Direction.RIGHT, expanded)
        assert nav.index == 0 and nav.expanded == expanded and nav.signal is None
        assert navigate(rows, 1, Direction.RIGHT, expanded).index == 2

    def test_separator_is_inert(self, rows):
        nav = navigate(rows, 6, Direction.RIGHT, EXPANDED)
        assert nav.index == 6 and nav.signal is None


class TestLeft:
    def test_collapses_expanded_group(self, rows):
        nav = navigate(rows, 0, Direction.LEFT, EXPANDED)
        assert nav.index == 0 and nav.expanded == frozenset()

    def test_leaf_moves_to_parent_without_collapsing(self, rows):
        nav = navigate(rows, 2, Direction.LEFT, EXPANDED)
        assert nav.index == 0 and nav.expanded == EXPANDED and nav.signal is None

    def test_collapsed_root_signals_back(self, rows):
        nav = navigate(rows, 4, Direction.LEFT, EXPANDED)
        assert nav.signal is NavSignal.BACK and nav.index == 4

    def test_unassigned_leaf_climbs_to_separator(self, rows):
        assert navigate(rows, 7, Direction.LEFT, EXPANDED).index == 6
        assert navigate(rows, 6, Direction.LEFT, EXPANDED).signal is NavSignal.BACK

    def test_empty_rows(self):
        nav = navigate((), 3, Direction.LEFT, frozenset())
        assert nav.index == 0 and nav.signal is NavSignal.BACK
        assert navigate((), 3, Direction.DOWN, frozenset()).signal is None


class TestActivate:
    def test_toggles_groups(self, rows):
        assert activate(rows, 4, EXPANDED).expanded == {"feature:F1", "feature:F2"}
        assert activate(rows, 0, EXPANDED).expanded == frozenset()

    def test_opens_leaf_and_empty_feature(self, rows):
        assert activate(rows, 3, EXPANDED).target_id == "T2"
        assert activate(rows, 5, EXPANDED).target_id == "F3"

    def test_toggle_ignores_leaves(self, rows):
        assert toggle(rows, 1, EXPANDED) == ExpansionDelta()
        assert toggle(rows, 1, EXPANDED).is_empty


def test_clamp_after_collapse(rows):
    assert clamp_after_collapse(rows, 0, 2) == 0
    assert clamp_after_collapse(rows, 0, 5) == 5
    assert clamp_after_collapse(rows, 4, 2) == 2


def test_structure_helpers(rows):
    assert first_child_index(rows, 0) == 1
    assert first_child_index(rows, 4) is None
    assert parent_index(rows, 3) == 0
    assert parent_index(rows, 0) is None
    assert index_of(rows, "feature:F2") == 4
    assert index_of(rows, "missing") is None
