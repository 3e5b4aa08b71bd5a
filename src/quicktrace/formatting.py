"""Text helpers shared by the renderers."""

from __future__ import annotations

import unicodedata

_BAR_FULL = "█"
_BAR_EMPTY = "░"
_EMOJI_PRESENTATION = "\ufe0f"


def format_duration(ms: float) -> str:
    """Format milliseconds as seconds, milliseconds, or microseconds with two decimals."""

    if ms >= 1000:
        return f"{ms / 1000:.2f}s"
    if ms >= 1:
        return f"{ms:.2f}ms"
    return f"{ms * 1000:.2f}μs"


def char_width(char: str) -> int:
    """Terminal columns taken by ``char``: 2 for wide glyphs, 0 for combining marks."""

    if char == _EMOJI_PRESENTATION:
        return 1
    if unicodedata.combining(char) or unicodedata.category(char) in {"Mn", "Me", "Cf"}:
        return 0
    return 2 if unicodedata.east_asian_width(char) in {"W", "F"} else 1


def display_width(text: str) -> int:
    return sum(char_width(char) for char in text)


def pad(text: str, width: int) -> str:
    """Left-align ``text`` in ``width`` terminal columns."""

    return text + " " * max(0, width - display_width(text))


def truncate(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` columns, ending with an ellipsis when cut."""

    if display_width(text) <= width:
        return text
    limit = width - 3 if width > 3 else width
    kept: list[str] = []
    used = 0
    for char in text:
        size = char_width(char)
        if used + size > limit:
            break
        kept.append(char)
        used += size
    cut = "".join(kept)
    return cut + "..." if width > 3 else cut


def center(text: str, width: int) -> str:
    """Center ``text`` in ``width`` columns, keeping at least one space on each side."""

    size = display_width(text)
    left = max(1, (width - size) // 2)
    right = max(1, width - size - left)
    return f"{' ' * left}{text}{' ' * right}"


def progress_bar(percentage: float, cells: int = 11, *, step: float = 8.0) -> str:
    """Draw one full cell per ``step`` percent, padded with empty cells to ``cells``."""

    filled = min(cells, max(0, int(percentage / step)))
    return _BAR_FULL * filled + _BAR_EMPTY * (cells - filled)


def percent_of(duration_ms: float, base_ms: float) -> float:
    if base_ms <= 0:
        return 0.0
    return duration_ms / base_ms * 100
