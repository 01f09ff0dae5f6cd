#!/usr/bin/env python3
"""TUI application - BoardTUI class and cmd_tui command."""

import logging
import os
import sys
import time
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style

from application.ports import DataAdapter
from config import get_data_path, get_user_theme, get_user_view_mode, set_user_view_mode
from core import AdapterError, BoardDataError, Feature, Project, Task
from core.desktop.board.application.board_columns import (
    DEFAULT_MAX_TASK_ROWS,
    BoardFeature,
    FeatureColumn,
    build_feature_columns,
    default_active_statuses,
    filter_columns,
    neighbour_status,
    toggle_active_status,
)
from core.desktop.board.application.search_items import ItemKind, SearchItem, build_search_items
from core.desktop.board.application.selection import TargetKind
from core.desktop.board.application.tree_flattener import Grouping, feature_group_id, flatten_by_feature
from core.desktop.board.application.tree_rows import LeafRow, Row
from core.desktop.board.application.viewport import clamp_index
from core.desktop.board.interface.i18n import translate
from core.desktop.board.interface.tui_display import DisplayMixin
from core.desktop.board.interface.tui_footer import build_footer_text
from core.desktop.board.interface.tui_models import NavigationStack, Screen
from core.desktop.board.interface.tui_navigation import (
    activate_tree_selection,
    move_horizontal_selection,
    move_vertical_selection,
)
from core.desktop.board.interface.tui_render import (
    render_board,
    render_dashboard,
    render_feature_detail,
    render_project_tree,
    render_search,
    render_task_detail,
    task_detail_lines,
)
from core.desktop.board.interface.tui_state import (
    collapse_all,
    expand_all,
    fold_branch,
    rebuild_tree,
    toggle_view_mode,
)
from core.desktop.board.interface.tui_status import build_status_text
from core.desktop.board.interface.tui_themes import DEFAULT_THEME, THEMES, build_style, get_theme_palette as _theme_palette
from infrastructure.file_repository import YamlBoardRepository
from util.responsive import detail_content_width

logger = logging.getLogger("task_board.tui")

STATUS_BAR_HEIGHT = 1
FOOTER_HEIGHT = 2


class BoardTUI(DisplayMixin):
    @staticmethod
    def get_theme_palette(theme: str) -> Dict[str, str]:
        return _theme_palette(theme)

    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(
        self,
        adapter: DataAdapter,
        theme: str = DEFAULT_THEME,
        grouping: Grouping = Grouping.FEATURE,
        max_task_rows: int = DEFAULT_MAX_TASK_ROWS,
        *,
        app_input=None,
        app_output=None,
    ):
        self.adapter = adapter
        self.theme_name = theme
        self.nav = NavigationStack()
        self.status_message = ""
        self.status_message_expires = 0.0
        self.status_is_error = False

        # Dashboard
        self.projects: List[Project] = []
        self.project_counts: Dict[str, Tuple[int, int]] = {}
        self.dashboard_index = 0

        # Project tree
        self.current_project: Optional[Project] = None
        self.features: List[Feature] = []
        self.tasks: List[Task] = []
        self.grouping = grouping
        self.expanded_by_grouping: Dict[Grouping, FrozenSet[str]] = {}
        self.tree_rows: Tuple[Row, ...] = ()
        self.tree_index = 0

        # Feature board
        self.board_columns_all: Tuple[FeatureColumn, ...] = ()
        self.board_columns: Tuple[FeatureColumn, ...] = ()
        self.board_active_statuses: FrozenSet[str] = frozenset()
        self.board_column_index = 0
        self.board_card_index = 0
        self.expanded_feature_id: Optional[str] = None
        self.board_task_index = 0
        self.board_filter_mode = False
        self.board_filter_cursor = 0
        self.max_task_rows = max(1, max_task_rows)

        # Search
        self.search_query = ""
        self.search_items: Tuple[SearchItem, ...] = ()
        self.search_index = 0

        # Detail screens
        self.detail_task: Optional[Task] = None
        self.detail_offset = 0
        self.detail_feature: Optional[Feature] = None
        self.feature_rows: Tuple[Row, ...] = ()
        self.feature_task_index = 0

        self.load_projects()

        self.style = self.build_style(theme)
        kb = self._build_key_bindings()
        self.status_bar = Window(
            content=FormattedTextControl(self.get_status_text),
            height=Dimension(min=STATUS_BAR_HEIGHT, max=STATUS_BAR_HEIGHT),
            always_hide_cursor=True,
        )
        self.main_window = Window(
            content=FormattedTextControl(self.get_body_text),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.footer = Window(
            content=FormattedTextControl(self.get_footer_text),
            height=Dimension(min=FOOTER_HEIGHT, max=FOOTER_HEIGHT),
            always_hide_cursor=True,
        )
        root = HSplit([self.status_bar, self.main_window, self.footer])
        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            input=app_input,
            output=app_output,
        )
        # Esc latency: prompt_toolkit waits this long to tell Escape from an escape sequence.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TASK_BOARD_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    # ------------------------------------------------------------ key bindings

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        search_typing = Condition(lambda: self.screen is Screen.SEARCH)
        not_typing = ~search_typing
        tree_active = Condition(lambda: self.screen is Screen.PROJECT)
        filter_active = Condition(lambda: self.screen is Screen.BOARD and self.board_filter_mode)
        board_active = Condition(lambda: self.screen is Screen.BOARD and not self.board_filter_mode)

        @kb.add("c-c")
        @kb.add("q", filter=not_typing)
        def _(event):
            event.app.exit()

        @kb.add("down")
        @kb.add("j", filter=not_typing)
        def _(event):
            move_vertical_selection(self, 1)

        @kb.add("up")
        @kb.add("k", filter=not_typing)
        def _(event):
            move_vertical_selection(self, -1)

        @kb.add("left")
        @kb.add("h", filter=not_typing)
        def _(event):
            move_horizontal_selection(self, -1)

        @kb.add("right")
        @kb.add("l", filter=not_typing)
        def _(event):
            move_horizontal_selection(self, 1)

        @kb.add("enter")
        @kb.add("tab", filter=tree_active)
        def _(event):
            self.activate_selection()

        @kb.add("space", filter=not_typing)
        def _(event):
            self.activate_selection()

        @kb.add("escape", eager=True)
        @kb.add("backspace", filter=not_typing)
        def _(event):
            self.navigate_back()

        @kb.add("/", filter=not_typing)
        def _(event):
            self.open_search()

        @kb.add("r", filter=not_typing)
        def _(event):
            self.reload()

        @kb.add("v", filter=tree_active)
        def _(event):
            grouping = toggle_view_mode(self)
            set_user_view_mode(grouping.value)
            self.force_render()

        @kb.add("b", filter=tree_active | board_active)
        def _(event):
            self.toggle_board()

        @kb.add("e", filter=tree_active)
        def _(event):
            expand_all(self)
            self.force_render()

        @kb.add("c", filter=tree_active)
        def _(event):
            collapse_all(self)
            self.force_render()

        @kb.add("z", filter=tree_active)
        def _(event):
            fold_branch(self)
            self.force_render()

        @kb.add("f", filter=board_active | filter_active)
        def _(event):
            self.toggle_filter_mode()

        @kb.add("<", filter=board_active)
        def _(event):
            self.move_selected_feature(-1)

        @kb.add(">", filter=board_active)
        def _(event):
            self.move_selected_feature(1)

        @kb.add("backspace", filter=search_typing)
        def _(event):
            self.set_search_query(self.search_query[:-1])

        @kb.add("c-u", filter=search_typing)
        def _(event):
            self.set_search_query("")

        @kb.add(Keys.Any, filter=search_typing)
        def _(event):
            text = event.data or ""
            if text and text.isprintable():
                self.set_search_query(self.search_query + text)

        return kb

    # ------------------------------------------------------------ geometry

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    def body_height(self) -> int:
        return max(3, self.get_terminal_height() - STATUS_BAR_HEIGHT - FOOTER_HEIGHT)

    # ------------------------------------------------------------ plumbing

    @property
    def screen(self) -> Screen:
        return self.nav.current.screen

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, **kwargs)

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def set_status_message(self, message: str, ttl: float = 4.0, error: bool = False) -> None:
        self.status_message = message
        self.status_message_expires = time.time() + ttl
        self.status_is_error = error

    def _report_error(self, exc: Exception) -> None:
        logger.warning("adapter call failed: %s", exc)
        self.set_status_message(self._t("STATUS_ERROR", error=exc), ttl=6, error=True)
        self.force_render()

    def get_status_text(self) -> FormattedText:
        return build_status_text(self)

    def get_footer_text(self) -> FormattedText:
        return build_footer_text(self)

    def get_body_text(self) -> FormattedText:
        screen = self.screen
        if screen is Screen.PROJECT:
            return render_project_tree(self)
        if screen is Screen.BOARD:
            return render_board(self)
        if screen is Screen.SEARCH:
            return render_search(self)
        if screen is Screen.TASK:
            return render_task_detail(self)
        if screen is Screen.FEATURE:
            return render_feature_detail(self)
        return render_dashboard(self)

    # ------------------------------------------------------------ data loading

    def load_projects(self) -> None:
        try:
            self.projects = self.adapter.list_projects()
            counts: Dict[str, Tuple[int, int]] = {}
            for project in self.projects:
                tasks = self.adapter.list_tasks(project.id)
                counts[project.id] = (sum(1 for t in tasks if t.is_completed), len(tasks))
            self.project_counts = counts
        except AdapterError as exc:
            self._report_error(exc)
        self.dashboard_index = clamp_index(self.dashboard_index, len(self.projects))

    def _load_project_data(self, project_id: str) -> bool:
        try:
            project = self.adapter.get_project(project_id)
            if project is None:
                self.set_status_message(self._t("STATUS_NOT_FOUND", id=project_id), error=True)
                return False
            features = self.adapter.list_features(project_id)
            tasks = self.adapter.list_tasks(project_id)
        except AdapterError as exc:
            self._report_error(exc)
            return False
        if self.current_project is None or self.current_project.id != project_id:
            self.expanded_by_grouping = {}
            self.board_active_statuses = frozenset()
            self.tree_rows = ()
            self.tree_index = 0
            self.board_column_index = 0
            self.board_card_index = 0
            self.expanded_feature_id = None
        self.current_project = project
        self.features = features
        self.tasks = tasks
        rebuild_tree(self)
        self.rebuild_board()
        return True

    def reload(self) -> None:
        reload_fn = getattr(self.adapter, "reload", None)
        try:
            if callable(reload_fn):
                reload_fn()
        except (AdapterError, BoardDataError) as exc:
            self._report_error(exc)
            return
        self.load_projects()
        self._restore_screen()
        self.set_status_message(self._t("STATUS_RELOADED"), ttl=2)
        self.force_render()

    # ------------------------------------------------------------ screens

    def open_project(self, project_id: str) -> None:
        if self._load_project_data(project_id):
            self.nav.push(Screen.PROJECT, project_id=project_id)
        self.force_render()

    def toggle_board(self) -> None:
        if self.current_project is None:
            return
        target = Screen.PROJECT if self.screen is Screen.BOARD else Screen.BOARD
        self.board_filter_mode = False
        self.expanded_feature_id = None
        self.nav.replace(target, project_id=self.current_project.id)
        self.force_render()

    def open_task(self, task_id: str) -> None:
        try:
            task = self.adapter.get_task(task_id)
        except AdapterError as exc:
            self._report_error(exc)
            return
        if task is None:
            self.set_status_message(self._t("STATUS_NOT_FOUND", id=task_id), error=True)
            return
        self.detail_task = task
        self.detail_offset = 0
        self.nav.push(Screen.TASK, task_id=task_id)
        self.force_render()

    def open_feature(self, feature_id: str) -> None:
        try:
            feature = self.adapter.get_feature(feature_id)
            tasks = self.adapter.list_tasks(feature.project_id) if feature and feature.project_id else []
        except AdapterError as exc:
            self._report_error(exc)
            return
        if feature is None:
            self.set_status_message(self._t("STATUS_NOT_FOUND", id=feature_id), error=True)
            return
        self._set_feature_detail(feature, tasks)
        self.nav.push(Screen.FEATURE, feature_id=feature_id)
        self.force_render()

    def _set_feature_detail(self, feature: Feature, tasks: List[Task]) -> None:
        own_tasks = [task for task in tasks if task.feature_id == feature.id]
        rows = flatten_by_feature(own_tasks, [feature], frozenset({feature_group_id(feature.id)}))
        self.detail_feature = feature
        self.feature_rows = rows[1:]
        self.feature_task_index = clamp_index(self.feature_task_index, len(self.feature_rows))

    def open_entity(self, entity_id: str, kind: Optional[TargetKind] = None) -> None:
        """Open a tree target: features by feature id, everything else as a task."""
        if kind is TargetKind.FEATURE:
            self.feature_task_index = 0
            self.open_feature(entity_id)
        else:
            self.open_task(entity_id)

    def open_search(self) -> None:
        if self.screen is not Screen.SEARCH:
            self.nav.push(Screen.SEARCH)
        self.force_render()

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        try:
            results = self.adapter.search(query)
        except AdapterError as exc:
            self._report_error(exc)
            return
        self.search_items = build_search_items(results)
        self.search_index = clamp_index(self.search_index, len(self.search_items))
        self.force_render()

    def navigate_back(self) -> None:
        if self.screen is Screen.BOARD:
            if self.board_filter_mode:
                self.board_filter_mode = False
                self.force_render()
                return
            if self.expanded_feature_id:
                self.expanded_feature_id = None
                self.board_task_index = 0
                self.force_render()
                return
        if self.nav.pop():
            self._restore_screen()
        self.force_render()

    def _restore_screen(self) -> None:
        """Re-sync screen state after going back or reloading."""
        entry = self.nav.current
        project_id = entry.param("project_id")
        if entry.screen in (Screen.PROJECT, Screen.BOARD) and project_id:
            self._load_project_data(project_id)
        elif entry.screen is Screen.FEATURE and entry.param("feature_id"):
            try:
                feature = self.adapter.get_feature(entry.param("feature_id") or "")
                tasks = self.adapter.list_tasks(feature.project_id) if feature and feature.project_id else []
            except AdapterError as exc:
                self._report_error(exc)
                return
            if feature is not None:
                self._set_feature_detail(feature, tasks)
        elif entry.screen is Screen.TASK and entry.param("task_id"):
            try:
                self.detail_task = self.adapter.get_task(entry.param("task_id") or "")
            except AdapterError as exc:
                self._report_error(exc)
        elif entry.screen is Screen.SEARCH:
            self.set_search_query(self.search_query)

    def activate_selection(self) -> None:
        screen = self.screen
        if screen is Screen.DASHBOARD:
            if self.projects:
                self.open_project(self.projects[clamp_index(self.dashboard_index, len(self.projects))].id)
        elif screen is Screen.PROJECT:
            activate_tree_selection(self)
            self.force_render()
        elif screen is Screen.BOARD:
            self.activate_board_selection()
        elif screen is Screen.SEARCH:
            if self.search_items:
                item = self.search_items[clamp_index(self.search_index, len(self.search_items))]
                if item.kind is ItemKind.PROJECT:
                    self.open_project(item.id)
                elif item.kind is ItemKind.FEATURE:
                    self.feature_task_index = 0
                    self.open_feature(item.id)
                else:
                    self.open_task(item.id)
        elif screen is Screen.FEATURE:
            if self.feature_rows:
                row = self.feature_rows[clamp_index(self.feature_task_index, len(self.feature_rows))]
                if isinstance(row, LeafRow):
                    self.open_task(row.task.id)

    def scroll_detail(self, delta: int) -> None:
        lines = task_detail_lines(self, detail_content_width(self.get_terminal_width()))
        page = max(1, self.body_height() - 2)
        self.detail_offset = max(0, min(self.detail_offset + delta, max(0, len(lines) - page)))

    # ------------------------------------------------------------ board

    def rebuild_board(self, select_feature_id: Optional[str] = None) -> None:
        self.board_columns_all = build_feature_columns(self.features, self.tasks)
        if not self.board_active_statuses:
            self.board_active_statuses = default_active_statuses(self.board_columns_all)
        self.board_columns = filter_columns(self.board_columns_all, self.board_active_statuses)
        if select_feature_id:
            for col_idx, column in enumerate(self.board_columns):
                for card_idx, card in enumerate(column.features):
                    if card.id == select_feature_id:
                        self.board_column_index = col_idx
                        self.board_card_index = card_idx
        self.board_column_index = clamp_index(self.board_column_index, len(self.board_columns))
        column = self.active_board_column()
        self.board_card_index = clamp_index(self.board_card_index, column.count if column else 0)
        if self.expanded_feature_id and (column is None or all(c.id != self.expanded_feature_id for c in column.features)):
            self.expanded_feature_id = None
            self.board_task_index = 0

    def active_board_column(self) -> Optional[FeatureColumn]:
        if not self.board_columns:
            return None
        return self.board_columns[clamp_index(self.board_column_index, len(self.board_columns))]

    def selected_board_card(self) -> Optional[BoardFeature]:
        column = self.active_board_column()
        if column is None or not column.features:
            return None
        return column.features[clamp_index(self.board_card_index, column.count)]

    def activate_board_selection(self) -> None:
        if self.board_filter_mode:
            if self.board_columns_all:
                column = self.board_columns_all[clamp_index(self.board_filter_cursor, len(self.board_columns_all))]
                self.board_active_statuses = toggle_active_status(self.board_active_statuses, column.status.code)
                self.rebuild_board()
            self.force_render()
            return
        card = self.selected_board_card()
        if card is None:
            return
        if self.expanded_feature_id == card.id:
            if card.tasks:
                self.open_task(card.tasks[clamp_index(self.board_task_index, card.total)].id)
                return
            self.expanded_feature_id = None
        else:
            self.expanded_feature_id = card.id
            self.board_task_index = 0
        self.force_render()

    def toggle_filter_mode(self) -> None:
        self.board_filter_mode = not self.board_filter_mode
        if self.board_filter_mode:
            self.expanded_feature_id = None
            self.board_filter_cursor = clamp_index(self.board_filter_cursor, len(self.board_columns_all))
        self.force_render()

    def move_selected_feature(self, step: int) -> None:
        card = self.selected_board_card()
        if card is None or self.current_project is None:
            return
        target = neighbour_status(card.feature.status, step)
        if target is None:
            self.set_status_message(self._t("STATUS_MOVE_EDGE"))
            self.force_render()
            return
        try:
            updated = self.adapter.set_feature_status(card.id, target)
        except AdapterError as exc:
            self._report_error(exc)
            return
        self.board_active_statuses = self.board_active_statuses | {target.code}
        self.expanded_feature_id = None
        self._load_project_data(self.current_project.id)
        self.rebuild_board(select_feature_id=updated.id)
        self.set_status_message(self._t("STATUS_MOVED", name=updated.name, status=target.label))
        self.force_render()

    def run(self):
        self.app.run()


def _configure_logging() -> None:
    """The terminal belongs to the full-screen app, so logs only go to TASK_BOARD_LOG_FILE."""
    log_file = os.getenv("TASK_BOARD_LOG_FILE")
    if not log_file:
        return
    handler = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("task_board")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if os.getenv("TASK_BOARD_DEBUG") else logging.INFO)


def cmd_tui(args) -> int:
    _configure_logging()
    data_path = Path(args.data).expanduser() if getattr(args, "data", None) else get_data_path()
    theme = getattr(args, "theme", None) or get_user_theme() or DEFAULT_THEME
    if theme not in THEMES:
        theme = DEFAULT_THEME
    view = getattr(args, "view", None) or get_user_view_mode() or Grouping.FEATURE.value
    try:
        adapter = YamlBoardRepository(data_path)
    except BoardDataError as exc:
        logger.error("cannot load board: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    tui = BoardTUI(adapter, theme=theme, grouping=Grouping.from_string(view))
    tui.run()
    return 0
