import shutil
from pathlib import Path

import pytest
from prompt_toolkit.input import DummyInput
from prompt_toolkit.output import DummyOutput

import config
from infrastructure.file_repository import YamlBoardRepository

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config writes (view mode, theme) inside the test's tmp dir."""
    monkeypatch.setattr(config, "USER_CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.delenv("TASK_BOARD_DATA", raising=False)
    monkeypatch.delenv("TASK_BOARD_LANG", raising=False)


@pytest.fixture
def board_path(tmp_path) -> Path:
    target = tmp_path / "board.yaml"
    shutil.copy(FIXTURES / "board.yaml", target)
    return target


@pytest.fixture
def repo(board_path) -> YamlBoardRepository:
    return YamlBoardRepository(board_path)


@pytest.fixture
def tui(repo):
    from board import BoardTUI

    app = BoardTUI(repo, app_input=DummyInput(), app_output=DummyOutput())
    app.get_terminal_width = lambda: 100
    app.get_terminal_height = lambda: 40
    return app
