import logging
from pathlib import Path

import config


def test_round_trip_settings():
    config.set_user_view_mode("status")
    config.set_user_theme("dark-contrast")
    assert config.get_user_view_mode() == "status"
    assert config.get_user_theme() == "dark-contrast"
    assert config.get_user_lang() == ""


def test_clearing_last_key_removes_file():
    config.set_user_lang("ru")
    assert config.USER_CONFIG_PATH.exists()
    config.set_user_lang("")
    assert not config.USER_CONFIG_PATH.exists()


def test_data_path_resolution(tmp_path, monkeypatch):
    assert config.get_data_path() == config.DEFAULT_DATA_PATH
    config.set_data_path(str(tmp_path / "from-config.yaml"))
    assert config.get_data_path() == tmp_path / "from-config.yaml"
    monkeypatch.setenv("TASK_BOARD_DATA", str(tmp_path / "from-env.yaml"))
    assert config.get_data_path() == tmp_path / "from-env.yaml"


def test_unreadable_config_is_ignored(caplog):
    Path(config.USER_CONFIG_PATH).write_text("lang: [broken", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="task_board.config"):
        assert config.get_user_lang() == ""
    assert "ignoring unreadable config" in caplog.text
