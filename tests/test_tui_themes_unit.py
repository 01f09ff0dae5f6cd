from prompt_toolkit.styles import Style

from core.desktop.board.interface.tui_themes import (
    DEFAULT_THEME,
    STATUS_STYLE,
    THEMES,
    build_style,
    get_theme_palette,
    priority_style,
    status_style,
)


def test_themes_share_keys():
    keys = set(THEMES[DEFAULT_THEME])
    for palette in THEMES.values():
        assert set(palette) == keys


def test_status_and_priority_classes_exist_in_palette():
    palette = THEMES[DEFAULT_THEME]
    for cls in set(STATUS_STYLE.values()):
        assert cls in palette
    for code in ("HIGH", "MEDIUM", "LOW"):
        assert priority_style(code).split(":", 1)[1] in palette


def test_status_style_lookup():
    assert status_style("IN_DEVELOPMENT") == "class:status.active"
    assert status_style("in_review") == "class:status.review"
    assert status_style("WHATEVER") == "class:status.pending"
    assert priority_style("HIGH") == "class:priority.high"


def test_unknown_theme_falls_back():
    assert get_theme_palette("nope") == THEMES[DEFAULT_THEME]
    assert isinstance(build_style("dark-contrast"), Style)
