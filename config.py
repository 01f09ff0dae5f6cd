from __future__ import annotations

import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".task_board_config.yaml"
DEFAULT_DATA_PATH = Path.home() / ".task_board" / "board.yaml"

logger = logging.getLogger("task_board.config")


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("ignoring unreadable config %s: %s", USER_CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _get(key: str) -> str:
    return str(_load_config().get(key, "") or "").strip()


def _set(key: str, value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data[key] = value
    else:
        data.pop(key, None)
    _save_config(data)


def get_user_lang() -> str:
    return _get("lang")


def set_user_lang(value: str) -> None:
    _set("lang", value)


def get_user_theme() -> str:
    return _get("theme")


def set_user_theme(value: str) -> None:
    _set("theme", value)


def get_user_view_mode() -> str:
    return _get("view_mode")


def set_user_view_mode(value: str) -> None:
    _set("view_mode", value)


def get_data_path() -> Path:
    """Board file: TASK_BOARD_DATA, then the config file, then ~/.task_board/board.yaml."""
    env_path = os.getenv("TASK_BOARD_DATA")
    if env_path:
        return Path(env_path).expanduser()
    configured = _get("data_path")
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_DATA_PATH


def set_data_path(value: str) -> None:
    _set("data_path", value)
