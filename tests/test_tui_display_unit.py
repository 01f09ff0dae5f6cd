from core.desktop.board.interface.tui_display import DisplayMixin as D


def test_display_width_counts_wide_chars():
    assert D._display_width("abc") == 3
    assert D._display_width("界") == 2
    assert D._display_width("é") == 1


def test_trim_and_pad():
    assert D._trim_display("界界界", 5) == "界界"
    assert D._pad_display("ab", 4) == "ab  "
    assert D._pad_display("abcdef", 4) == "abcd"


def test_ellipsize():
    assert D._ellipsize("hello world", 5) == "hell…"
    assert D._ellipsize("short", 10) == "short"


def test_wrap_display():
    assert D._wrap_display("abcdef", 4) == ["abcd", "ef"]
    assert D._wrap_display("a\nb", 10) == ["a", "b"]
    assert D._wrap_display("界界界", 4) == ["界界", "界"]
    assert D._wrap_display("", 4) == [""]


def test_fit_lines_pads_or_cuts():
    assert D._fit_lines(["a"], 3, 5) == ["a", "", ""]
    assert D._fit_lines(["a", "b", "c"], 2, 5) == ["a", "b…"]
    assert D._wrap_to_height("abcdefghij", 4, 2) == ["abcd", "efg…"]
