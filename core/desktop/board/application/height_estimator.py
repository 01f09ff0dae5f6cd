"""Terminal row estimates for wrapped text.

Counts are made in extended grapheme clusters, so an accented letter or a
ZWJ emoji sequence is one character however many code points it takes. Results are pure and memoized per ``(text, width)``.
"""

import math
from functools import lru_cache
from typing import Iterable

import regex

_GRAPHEME_RE = regex.compile(r"\X")


def visible_length(text: str) -> int:
    """Number of grapheme clusters in ``text``."""
    return len(_GRAPHEME_RE.findall(text))


@lru_cache(maxsize=4096)
def estimate_height(text: str, width: int) -> int:
    """Rows ``text`` occupies when wrapped at ``width`` characters; always >= 1."""
    width = max(1, int(width))
    total = 0
    for line in (text or "").split("\n"):
        total += max(1, math.ceil(visible_length(line) / width))
    return total


def estimate_composite_height(sections: Iterable[str], width: int, chrome: int = 0) -> int:
    """Fixed ``chrome`` rows plus the wrapped height of each section."""
    return max(0, chrome) + sum(estimate_height(section, width) for section in sections)


def clear_height_cache() -> None:
    estimate_height.cache_clear()


__all__ = [
    "visible_length",
    "estimate_height",
    "estimate_composite_height",
    "clear_height_cache",
]
