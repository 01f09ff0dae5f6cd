"""Display utilities mixin for TUI - text width, trimming, padding, wrapping."""

from typing import List

from wcwidth import wcwidth


def _char_width(ch: str) -> int:
    w = wcwidth(ch)
    if w is None or w < 0:
        return 0
    return w


class DisplayMixin:
    """Mixin providing text display utilities with proper Unicode width handling."""

    @staticmethod
    def _display_width(text: str) -> int:
        """Return visual width of text accounting for wide/narrow characters."""
        return sum(_char_width(ch) for ch in text)

    @staticmethod
    def _trim_display(text: str, width: int) -> str:
        """Trim text so visible width doesn't exceed specified width."""
        acc = []
        used = 0
        for ch in text:
            w = _char_width(ch)
            if used + w > width:
                break
            acc.append(ch)
            used += w
        return "".join(acc)

    @classmethod
    def _pad_display(cls, text: str, width: int) -> str:
        """Trim and pad with spaces to exact visible width."""
        trimmed = cls._trim_display(text, width)
        return trimmed + " " * max(0, width - cls._display_width(trimmed))

    @classmethod
    def _ellipsize(cls, text: str, width: int) -> str:
        if cls._display_width(text) <= width:
            return text
        if width <= 1:
            return cls._trim_display("…", width)
        return cls._trim_display(text, width - 1) + "…"

    @staticmethod
    def _wrap_display(text: str, width: int) -> List[str]:
        """Wrap text at ``width`` display columns; explicit newlines start new lines."""
        width = max(1, width)
        lines: List[str] = []
        for paragraph in (text or "").split("\n"):
            current = ""
            used = 0
            for ch in paragraph:
                w = _char_width(ch)
                if used + w > width and current:
                    lines.append(current)
                    current = ch
                    used = w
                else:
                    current += ch
                    used += w
            lines.append(current)
        return lines

    @classmethod
    def _fit_lines(cls, lines: List[str], height: int, width: int) -> List[str]:
        """Exactly ``height`` lines: blank-padded, or cut with an ellipsis on the last one."""
        height = max(1, height)
        if len(lines) <= height:
            return list(lines) + [""] * (height - len(lines))
        fitted = list(lines[:height])
        fitted[-1] = cls._ellipsize(fitted[-1] + "…", width)
        return fitted

    @classmethod
    def _wrap_to_height(cls, text: str, width: int, height: int) -> List[str]:
        return cls._fit_lines(cls._wrap_display(text, width), height, width)


__all__ = ["DisplayMixin"]
