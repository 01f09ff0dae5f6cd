"""Status bar builder for BoardTUI."""

import time
from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core.desktop.board.interface.constants import APP_NAME
from core.desktop.board.interface.tui_models import Screen


def breadcrumb(tui) -> List[str]:
    crumbs = [APP_NAME]
    for entry in tui.nav.entries()[1:]:
        if entry.screen in (Screen.PROJECT, Screen.BOARD):
            project = tui.adapter.get_project(entry.param("project_id") or "")
            label = project.name if project else entry.param("project_id") or "?"
            if entry.screen is Screen.BOARD:
                label = f"{label} · {tui._t('TITLE_BOARD')}"
            crumbs.append(label)
        elif entry.screen is Screen.SEARCH:
            crumbs.append(tui._t("TITLE_SEARCH"))
        elif entry.screen is Screen.FEATURE:
            feature = tui.adapter.get_feature(entry.param("feature_id") or "")
            crumbs.append(feature.name if feature else "?")
        elif entry.screen is Screen.TASK:
            crumbs.append(entry.param("task_id") or "?")
    return crumbs


def build_status_text(tui) -> FormattedText:
    parts: List[Tuple[str, str]] = []
    crumbs = breadcrumb(tui)
    for idx, crumb in enumerate(crumbs):
        if idx:
            parts.append(("class:border", " › "))
        parts.append(("class:header" if idx == len(crumbs) - 1 else "class:text.dim", crumb))
    message = tui.status_message if time.time() < tui.status_message_expires else ""
    if message:
        parts.append(("class:border", "  |  "))
        parts.append(("class:error" if tui.status_is_error else "class:text", message))
    return FormattedText(parts)


__all__ = ["breadcrumb", "build_status_text"]
