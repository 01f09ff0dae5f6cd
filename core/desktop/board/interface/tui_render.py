"""Screen renderers for BoardTUI.

Every list on screen goes through the windowing engine: the renderer asks for
row heights, gets back the visible slice and draws exactly that many lines per
row, padding or cutting wrapped text to the estimated height.
"""

from typing import List, Optional, Sequence, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import status_display_name
from core.desktop.board.application.board_columns import (
    BoardFeature,
    FeatureColumn,
    card_content_width,
    card_task_window,
    column_window,
    task_title_width,
)
from core.desktop.board.application.height_estimator import estimate_height
from core.desktop.board.application.search_items import SearchItem, card_inner_width, card_width, results_window
from core.desktop.board.application.tree_flattener import Grouping
from core.desktop.board.application.tree_layout import INDENT_WIDTH, leaf_prefix_width, leaf_title_width, row_height, row_heights
from core.desktop.board.application.tree_rows import GroupRow, LeafRow, Row
from core.desktop.board.application.viewport import Window, compute_window, page_window, scroll_indicators
from core.desktop.board.interface.tui_themes import priority_style, status_style
from util.responsive import board_column_width, column_viewport, content_width, detail_content_width

Fragment = Tuple[str, str]
Line = List[Fragment]

SELECTED = "class:selected"


def _fit_fragments(tui, fragments: Sequence[Fragment], width: int) -> Line:
    """Trim a styled line to ``width`` display columns and pad it out."""
    result: Line = []
    used = 0
    for style, text in fragments:
        if used >= width:
            break
        piece = tui._trim_display(text, width - used)
        if piece:
            result.append((style, piece))
            used += tui._display_width(piece)
    if used < width:
        result.append(("", " " * (width - used)))
    return result


def _highlight(line: Line) -> Line:
    return [(SELECTED, text) for _, text in line]


def _emit(parts: List[Fragment], line: Line) -> None:
    parts.extend(line)
    parts.append(("", "\n"))


def _indicator_line(text: Optional[str]) -> Line:
    return [("class:indicator", text or "")]


# ---------------------------------------------------------------- tree rows


def tree_row_lines(tui, row: Row, width: int, selected: bool) -> List[Line]:
    """Lines for one tree row; leaf rows take ``row_height`` lines."""
    indent = " " * (INDENT_WIDTH * row.depth)
    if isinstance(row, GroupRow):
        arrow = "▼ " if row.expanded else ("▶ " if row.expandable else "  ")
        label_style = status_style(row.status) if row.depth == 0 and not row.entity_id else "class:text"
        line: Line = [
            ("class:border", indent + arrow),
            (label_style, row.label),
            ("class:text.dim", f" ({row.child_count})"),
        ]
        if row.entity_id and row.status:
            line.append((status_style(row.status), f"  {status_display_name(row.status)}"))
        lines = [line]
    elif isinstance(row, LeafRow):
        task = row.task
        connector = "└─ " if row.is_last else "├─ "
        title_width = leaf_title_width(row.depth, width)
        titles = tui._wrap_to_height(task.title, title_width, row_height(row, width))
        lines = [
            [
                ("class:border", indent + connector),
                (status_style(task.status.code), task.status.glyph + " "),
                (priority_style(task.priority.code), task.priority.dots + " "),
                ("class:text", titles[0]),
            ]
        ]
        continuation = " " * leaf_prefix_width(row.depth)
        lines.extend([("", continuation), ("class:text", text)] for text in titles[1:])
    else:
        label = f"── {row.label} "
        lines = [[("class:text.dim", label + "─" * max(0, width - tui._display_width(label)))]]
    fitted = [_fit_fragments(tui, line, width) for line in lines]
    return [_highlight(line) for line in fitted] if selected else fitted


def _tree_window(rows: Sequence[Row], selected: int, width: int, capacity: int) -> Window:
    return compute_window(rows, row_heights(rows, width), selected, capacity)


def render_project_tree(tui) -> FormattedText:
    width = content_width(tui.get_terminal_width())
    height = tui.body_height()
    parts: List[Fragment] = []
    project = tui.current_project
    view = tui._t("VIEW_STATUS") if tui.grouping is Grouping.STATUS else tui._t("VIEW_FEATURES")
    title = project.name if project else ""
    _emit(parts, _fit_fragments(tui, [("class:header", title), ("class:text.dim", "  " + tui._t("VIEW_LABEL", view=view))], width))
    rows = tui.tree_rows
    if not rows:
        parts.append(("class:text.dim", tui._t("EMPTY_TREE")))
        return FormattedText(parts)
    window = _tree_window(rows, tui.tree_index, width, max(1, height - 3))
    above, below = scroll_indicators(window)
    _emit(parts, _indicator_line(above))
    for idx in range(window.start, window.end):
        for line in tree_row_lines(tui, rows[idx], width, idx == tui.tree_index):
            _emit(parts, line)
    parts.extend(_indicator_line(below))
    return FormattedText(parts)


# ---------------------------------------------------------------- dashboard


def render_dashboard(tui) -> FormattedText:
    width = content_width(tui.get_terminal_width())
    height = tui.body_height()
    parts: List[Fragment] = []
    projects = tui.projects
    _emit(parts, [("class:header", f"{tui._t('TITLE_DASHBOARD')} ({len(projects)})")])
    if not projects:
        parts.append(("class:text.dim", tui._t("EMPTY_PROJECTS")))
        return FormattedText(parts)
    window = page_window(len(projects), tui.dashboard_index, max(1, height - 3))
    above, below = scroll_indicators(window)
    _emit(parts, _indicator_line(above))
    for idx in range(window.start, window.end):
        project = projects[idx]
        completed, total = tui.project_counts.get(project.id, (0, 0))
        line = _fit_fragments(
            tui,
            [
                ("class:text", project.name),
                ("class:text.dim", "  "),
                (status_style(project.status), status_display_name(project.status)),
                ("class:text.dim", f"  {completed}/{total}"),
            ],
            width,
        )
        _emit(parts, _highlight(line) if idx == tui.dashboard_index else line)
    parts.extend(_indicator_line(below))
    return FormattedText(parts)


# ---------------------------------------------------------------- kanban board


def _box_chars(selected: bool) -> Tuple[str, str, str, str, str, str]:
    if selected:
        return "╔", "╗", "╚", "╝", "═", "║"
    return "┌", "┐", "└", "┘", "─", "│"


def feature_card_lines(
    tui,
    card: BoardFeature,
    column_width: int,
    selected: bool,
    expanded: bool,
    task_index: int,
    max_task_rows: int,
) -> List[Line]:
    """Card lines; the count always equals ``feature_card_height`` for the same arguments."""
    inner = card_content_width(column_width)
    tl, tr, bl, br, hz, vt = _box_chars(selected)
    border = "class:card.selected" if selected else "class:border"

    def boxed(fragments: Sequence[Fragment]) -> Line:
        return [(border, vt + " ")] + _fit_fragments(tui, fragments, inner) + [(border, " " + vt)]

    feature = card.feature
    lines: List[Line] = [[(border, tl + hz * max(0, column_width - 2) + tr)]]
    name_style = "class:header" if selected else "class:text"
    for text in tui._wrap_to_height(feature.name, inner, estimate_height(feature.name, inner)):
        lines.append(boxed([(name_style, text)]))
    lines.append(
        boxed(
            [
                (status_style(feature.status.code), "● " + feature.status.label),
                ("", "  "),
                (priority_style(feature.priority.code), feature.priority.dots),
                ("class:text.dim", f"  {card.completed}/{card.total}"),
            ]
        )
    )
    if expanded:
        lines.append(boxed([("class:border", "─" * inner)]))
        if not card.tasks:
            lines.append(boxed([("class:text.dim", tui._t("NO_TASKS"))]))
        else:
            window = card_task_window(card, task_index, max_task_rows)
            above, below = scroll_indicators(window)
            if above:
                lines.append(boxed([("class:indicator", "  " + above)]))
            title_width = task_title_width(column_width)
            for pos in range(window.start, window.end):
                task = card.tasks[pos]
                is_selected = pos == task_index
                marker = ("class:card.selected", "▎") if is_selected else ("", " ")
                connector = "└─ " if pos == card.total - 1 else "├─ "
                title_style = "class:header" if is_selected else "class:text"
                titles = tui._wrap_to_height(task.title, title_width, estimate_height(task.title, title_width))
                lines.append(boxed([marker, ("class:border", connector), (title_style, titles[0])]))
                for text in titles[1:]:
                    lines.append(boxed([("", "    "), (title_style, text)]))
                lines.append(
                    boxed(
                        [
                            ("", "    "),
                            (status_style(task.status.code), "● " + task.status.label),
                            ("", "  "),
                            (priority_style(task.priority.code), task.priority.dots),
                        ]
                    )
                )
                if pos < window.end - 1:
                    lines.append(boxed([]))
            if below:
                lines.append(boxed([("class:indicator", "  " + below)]))
    lines.append([(border, bl + hz * max(0, column_width - 2) + br)])
    return lines


def board_column_lines(tui, column: FeatureColumn, active: bool, column_width: int, available_height: int) -> List[Line]:
    header_style = "class:header" if active else status_style(column.status.code)
    lines: List[Line] = [
        _fit_fragments(tui, [(header_style, f"{column.title} ({column.count})")], column_width),
        [("class:border", "─" * column_width)],
    ]
    if not column.features:
        lines.append(_fit_fragments(tui, [], column_width))
        lines.append(_fit_fragments(tui, [("class:text.dim", tui._t("EMPTY_COLUMN"))], column_width))
        return lines
    selected = tui.board_card_index if active else 0
    expanded_id = tui.expanded_feature_id if active else None
    window = column_window(
        column,
        selected,
        column_width,
        available_height,
        expanded_id,
        tui.max_task_rows,
        tui.board_task_index,
    )
    above, below = scroll_indicators(window)
    lines.append(_fit_fragments(tui, _indicator_line(above), column_width))
    for pos in range(window.start, window.end):
        card = column.features[pos]
        lines.extend(
            feature_card_lines(
                tui,
                card,
                column_width,
                selected=active and pos == selected,
                expanded=card.id == expanded_id,
                task_index=tui.board_task_index,
                max_task_rows=tui.max_task_rows,
            )
        )
    lines.append(_fit_fragments(tui, _indicator_line(below), column_width))
    return lines


def _filter_chips_line(tui, width: int) -> Line:
    fragments: Line = [("class:text.dim", tui._t("FILTER_LABEL") + " ")]
    for idx, column in enumerate(tui.board_columns_all):
        on = column.status.code in tui.board_active_statuses
        style = "class:chip.on" if on else "class:chip.off"
        if tui.board_filter_mode and idx == tui.board_filter_cursor:
            style += " class:chip.cursor"
        fragments.append((style, f"[{'x' if on else ' '}] {column.title}"))
        fragments.append(("", " "))
    return _fit_fragments(tui, fragments, width)


def render_board(tui) -> FormattedText:
    term_width = tui.get_terminal_width()
    height = tui.body_height()
    parts: List[Fragment] = []
    columns = tui.board_columns
    project = tui.current_project
    title = f"{project.name if project else ''} · {tui._t('TITLE_BOARD')}"
    viewport = column_viewport(len(columns), tui.board_column_index)
    _emit(
        parts,
        _fit_fragments(
            tui,
            [
                ("class:indicator", viewport.left_indicator() + "  " if viewport.hidden_left else ""),
                ("class:header", title),
                ("class:indicator", "  " + viewport.right_indicator() if viewport.hidden_right else ""),
            ],
            max(1, term_width - 1),
        ),
    )
    _emit(parts, _filter_chips_line(tui, max(1, term_width - 1)))
    if not columns:
        parts.append(("class:text.dim", tui._t("EMPTY_BOARD")))
        return FormattedText(parts)
    column_width = board_column_width(term_width, len(columns))
    available = max(1, height - 2)
    blocks = [
        board_column_lines(tui, columns[idx], idx == tui.board_column_index, column_width, available)
        for idx in range(viewport.start, viewport.end)
    ]
    tallest = max(len(block) for block in blocks)
    blank = [("", " " * column_width)]
    for line_no in range(min(tallest, available)):
        for pos, block in enumerate(blocks):
            if pos:
                parts.append(("", " "))
            parts.extend(block[line_no] if line_no < len(block) else blank)
        parts.append(("", "\n"))
    return FormattedText(parts)


# ---------------------------------------------------------------- search


def search_card_lines(tui, item: SearchItem, width: int, selected: bool) -> List[Line]:
    outer = card_width(width)
    inner = card_inner_width(width)
    tl, tr, bl, br, hz, vt = _box_chars(selected)
    border = "class:card.selected" if selected else "class:border"
    marker = "▶ " if selected else "  "

    def boxed(style: str, text: str) -> Line:
        return [("", "  "), (border, vt + " ")] + _fit_fragments(tui, [(style, text)], inner) + [(border, " " + vt)]

    lines: List[Line] = [[("class:header" if selected else "", marker), (border, tl + hz * max(0, outer - 2) + tr)]]
    sections = (
        ("class:kind." + item.kind.value, item.kind.label),
        ("class:header" if selected else "class:text", item.title),
        ("class:text.dim", item.subtitle),
    )
    for style, text in sections:
        for piece in tui._wrap_to_height(text, inner, estimate_height(text, inner)):
            lines.append(boxed(style, piece))
    lines.append([("", "  "), (border, bl + hz * max(0, outer - 2) + br)])
    return lines


def render_search(tui) -> FormattedText:
    width = content_width(tui.get_terminal_width())
    height = tui.body_height()
    parts: List[Fragment] = []
    _emit(parts, [("class:header", tui._t("TITLE_SEARCH"))])
    _emit(parts, _fit_fragments(tui, [("class:text", tui._t("SEARCH_QUERY", query=tui.search_query) + "▏")], width))
    _emit(parts, _fit_fragments(tui, [("class:text.dim", tui._t("SEARCH_HINT"))], width))
    items = tui.search_items
    if not tui.search_query.strip():
        parts.append(("class:text.dim", tui._t("SEARCH_EMPTY_QUERY")))
        return FormattedText(parts)
    if not items:
        parts.append(("class:text.dim", tui._t("SEARCH_NO_RESULTS", query=tui.search_query)))
        return FormattedText(parts)
    window = results_window(items, tui.search_index, width, max(3, height - 5))
    above, below = scroll_indicators(window)
    _emit(parts, _indicator_line(above))
    for idx in range(window.start, window.end):
        for line in search_card_lines(tui, items[idx], width, idx == tui.search_index):
            _emit(parts, line)
    parts.extend(_indicator_line(below))
    return FormattedText(parts)


# ---------------------------------------------------------------- detail screens


def task_detail_lines(tui, width: int) -> List[Line]:
    task = tui.detail_task
    if task is None:
        return []
    lines: List[Line] = [[("class:header", text)] for text in tui._wrap_display(task.title, width)]
    lines.append(
        [
            ("class:text.dim", tui._t("DETAIL_STATUS") + ": "),
            (status_style(task.status.code), task.status.label),
            ("class:text.dim", "  " + tui._t("DETAIL_PRIORITY") + ": "),
            (priority_style(task.priority.code), f"{task.priority.dots} {task.priority.code.title()}"),
        ]
    )
    feature = tui.adapter.get_feature(task.feature_id) if task.feature_id else None
    if feature is not None:
        lines.append([("class:text.dim", tui._t("DETAIL_FEATURE") + ": "), ("class:text", feature.name)])
    for key, body in (("DETAIL_SUMMARY", task.summary), ("DETAIL_DESCRIPTION", task.description)):
        if not body:
            continue
        lines.append([])
        lines.append([("class:header", tui._t(key))])
        lines.extend([("class:text", text)] for text in tui._wrap_display(body, width))
    return lines


def render_task_detail(tui) -> FormattedText:
    width = detail_content_width(tui.get_terminal_width())
    lines = task_detail_lines(tui, width)
    page = max(1, tui.body_height() - 2)
    offset = max(0, min(tui.detail_offset, max(0, len(lines) - page)))
    window = Window(offset, min(len(lines), offset + page), len(lines))
    above, below = scroll_indicators(window)
    parts: List[Fragment] = []
    _emit(parts, _indicator_line(above))
    for line in lines[window.start:window.end]:
        _emit(parts, _fit_fragments(tui, line, width))
    parts.extend(_indicator_line(below))
    return FormattedText(parts)


def feature_header_lines(tui, width: int) -> List[Line]:
    feature = tui.detail_feature
    if feature is None:
        return []
    tasks = [row.task for row in tui.feature_rows if isinstance(row, LeafRow)]
    completed = sum(1 for task in tasks if task.is_completed)
    lines: List[Line] = [[("class:header", text)] for text in tui._wrap_display(feature.name, width)]
    lines.append(
        [
            (status_style(feature.status.code), "● " + feature.status.label),
            ("", "  "),
            (priority_style(feature.priority.code), feature.priority.dots),
            ("class:text.dim", "  " + tui._t("DETAIL_PROGRESS", completed=completed, total=len(tasks))),
        ]
    )
    if feature.summary:
        lines.extend([("class:text.dim", text)] for text in tui._wrap_display(feature.summary, width))
    lines.append([])
    lines.append([("class:header", tui._t("DETAIL_TASKS"))])
    return lines


def render_feature_detail(tui) -> FormattedText:
    width = detail_content_width(tui.get_terminal_width())
    parts: List[Fragment] = []
    header = feature_header_lines(tui, width)
    for line in header:
        _emit(parts, _fit_fragments(tui, line, width))
    rows = tui.feature_rows
    if not rows:
        parts.append(("class:text.dim", tui._t("NO_TASKS")))
        return FormattedText(parts)
    capacity = max(1, tui.body_height() - len(header) - 2)
    window = _tree_window(rows, tui.feature_task_index, width, capacity)
    above, below = scroll_indicators(window)
    _emit(parts, _indicator_line(above))
    for idx in range(window.start, window.end):
        for line in tree_row_lines(tui, rows[idx], width, idx == tui.feature_task_index):
            _emit(parts, line)
    parts.extend(_indicator_line(below))
    return FormattedText(parts)


__all__ = [
    "tree_row_lines",
    "render_project_tree",
    "render_dashboard",
    "feature_card_lines",
    "board_column_lines",
    "render_board",
    "search_card_lines",
    "render_search",
    "task_detail_lines",
    "render_task_detail",
    "render_feature_detail",
]
