from core.desktop.board.interface.constants import LANG_PACK
from core.desktop.board.interface.i18n import effective_lang, translate


def test_translate_formats_and_falls_back():
    assert translate("STATUS_NOT_FOUND", id="T9") == "Not found: T9"
    assert translate("NO_SUCH_KEY") == "NO_SUCH_KEY"
    assert translate("STATUS_NOT_FOUND") == "Not found: {id}"


def test_language_from_env(monkeypatch):
    monkeypatch.setenv("TASK_BOARD_LANG", "ru")
    assert effective_lang() == "ru"
    assert translate("TITLE_DASHBOARD") == "Проекты"


def test_tests_default_to_english():
    assert effective_lang("ru") == "en"


def test_partial_packs_are_backfilled():
    for key in LANG_PACK["en"]:
        assert key in LANG_PACK["ru"]
