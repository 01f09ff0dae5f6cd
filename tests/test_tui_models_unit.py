from core.desktop.board.interface.tui_models import NavigationStack, Screen


def test_stack_starts_on_dashboard_and_never_empties():
    nav = NavigationStack()
    assert nav.current.screen is Screen.DASHBOARD
    assert nav.pop() is False
    assert nav.depth == 1


def test_push_replace_pop():
    nav = NavigationStack()
    nav.push(Screen.PROJECT, project_id="P1")
    nav.push(Screen.TASK, task_id="T1")
    assert nav.current.param("task_id") == "T1"
    nav.replace(Screen.FEATURE, feature_id="F1")
    assert [e.screen for e in nav.entries()] == [Screen.DASHBOARD, Screen.PROJECT, Screen.FEATURE]
    assert nav.pop() is True
    assert nav.current.param("project_id") == "P1"
    assert nav.current.param("missing") is None
    nav.reset()
    assert nav.depth == 1
