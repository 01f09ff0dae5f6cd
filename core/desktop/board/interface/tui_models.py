#!/usr/bin/env python3
"""TUI screen models: which screen is showing and how we got there."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Screen(Enum):
    DASHBOARD = "dashboard"
    PROJECT = "project"
    BOARD = "board"
    SEARCH = "search"
    TASK = "task"
    FEATURE = "feature"


@dataclass(frozen=True)
class ScreenEntry:
    screen: Screen
    params: Dict[str, str] = field(default_factory=dict)

    def param(self, key: str) -> Optional[str]:
        return self.params.get(key)


class NavigationStack:
    """Screen history; the dashboard is always at the bottom."""

    def __init__(self) -> None:
        self._stack: List[ScreenEntry] = [ScreenEntry(Screen.DASHBOARD)]

    @property
    def current(self) -> ScreenEntry:
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self, screen: Screen, **params: str) -> ScreenEntry:
        entry = ScreenEntry(screen, dict(params))
        self._stack.append(entry)
        return entry

    def replace(self, screen: Screen, **params: str) -> ScreenEntry:
        entry = ScreenEntry(screen, dict(params))
        self._stack[-1] = entry
        return entry

    def pop(self) -> bool:
        """Go back one screen; False when already on the dashboard."""
        if len(self._stack) <= 1:
            return False
        self._stack.pop()
        return True

    def reset(self) -> None:
        self._stack = [ScreenEntry(Screen.DASHBOARD)]

    def entries(self) -> List[ScreenEntry]:
        return list(self._stack)


__all__ = ["Screen", "ScreenEntry", "NavigationStack"]
