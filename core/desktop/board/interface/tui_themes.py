#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "indicator": "#6d717a italic",
        "error": "#e06c75 bold",
        "status.pending": "#97a0a9",
        "status.active": "#e5c07b bold",
        "status.review": "#61afef",
        "status.blocked": "#e06c75 bold",
        "status.hold": "#c678dd",
        "status.done": "#9ad974 bold",
        "status.cancelled": "#6d717a",
        "priority.high": "#e06c75",
        "priority.medium": "#e5c07b",
        "priority.low": "#7a7f85",
        "kind.project": "#ffb347 bold",
        "kind.feature": "#e5c07b bold",
        "kind.task": "#61afef bold",
        "card.selected": "#ffb347 bold",
        "chip.on": "#9ad974 bold",
        "chip.off": "#6d717a",
        "chip.cursor": "reverse",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "selected": "bg:#3d4047 #e8eaec bold",
        "indicator": "#8a9097 italic",
        "error": "#ff6b6b bold",
        "status.pending": "#a7b0ba",
        "status.active": "#f0c674 bold",
        "status.review": "#7cc4ff",
        "status.blocked": "#ff6b6b bold",
        "status.hold": "#d49bff",
        "status.done": "#b8f171 bold",
        "status.cancelled": "#6f757d",
        "priority.high": "#ff6b6b",
        "priority.medium": "#f0c674",
        "priority.low": "#8a9097",
        "kind.project": "#ffb347 bold",
        "kind.feature": "#f0c674 bold",
        "kind.task": "#7cc4ff bold",
        "card.selected": "#ffb347 bold",
        "chip.on": "#b8f171 bold",
        "chip.off": "#6f757d",
        "chip.cursor": "reverse",
    },
}

DEFAULT_THEME = "dark-olive"

# Status code -> palette class; codes missing here render as "status.pending".
STATUS_STYLE: Dict[str, str] = {
    "PENDING": "status.pending",
    "DRAFT": "status.pending",
    "PLANNING": "status.pending",
    "IN_PROGRESS": "status.active",
    "IN_DEVELOPMENT": "status.active",
    "TESTING": "status.active",
    "VALIDATING": "status.active",
    "IN_REVIEW": "status.review",
    "PENDING_REVIEW": "status.review",
    "BLOCKED": "status.blocked",
    "ON_HOLD": "status.hold",
    "COMPLETED": "status.done",
    "DEPLOYED": "status.done",
    "CANCELLED": "status.cancelled",
    "ARCHIVED": "status.cancelled",
}


def status_style(code: str) -> str:
    return "class:" + STATUS_STYLE.get((code or "").upper(), "status.pending")


def priority_style(code: str) -> str:
    return "class:priority." + ((code or "medium").lower())


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    return Style.from_dict(get_theme_palette(theme))
