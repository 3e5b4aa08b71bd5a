"""Duration/percentage classification rules and the palettes that paint them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import typer


@dataclass(frozen=True)
class Tone:
    """Terminal color descriptor understood by ``typer.style``."""

    fg: str | None = None
    bold: bool = False


@dataclass(frozen=True)
class DurationRule:
    """Bucket applied to spans lasting at least ``threshold_ms``."""

    threshold_ms: float
    label: str
    tone: Tone

    @property
    def color_class(self) -> str:
        return self.label.lower().replace("-", "_").replace(" ", "_")


@dataclass(frozen=True)
class PercentageRule:
    """Bucket applied to entries taking at least ``threshold`` percent of the trace."""

    threshold: float
    label: str
    tone: Tone


# Ordered by descending threshold; the first matching rule wins.
DEFAULT_DURATION_RULES: tuple[DurationRule, ...] = (
    DurationRule(3000, "Very Slow", Tone("red", bold=True)),
    DurationRule(1000, "Slow", Tone("red")),
    DurationRule(500, "Medium-Slow", Tone("yellow")),
    DurationRule(200, "Medium", Tone("bright_blue")),
    DurationRule(100, "Normal", Tone("cyan")),
    DurationRule(50, "Fast", Tone("green")),
    DurationRule(10, "Very Fast", Tone("bright_green")),
    DurationRule(0, "Ultra Fast", Tone("bright_black")),
)

DEFAULT_PROGRESS_RULES: tuple[PercentageRule, ...] = (
    PercentageRule(75, "Critical", Tone("red", bold=True)),
    PercentageRule(50, "High", Tone("red")),
    PercentageRule(25, "Medium", Tone("magenta")),
    PercentageRule(10, "Low", Tone("blue")),
    PercentageRule(5, "Very Low", Tone("green")),
    PercentageRule(0, "Minimal", Tone("cyan")),
)

FRAME = Tone("blue", bold=True)
ACCENT = Tone("cyan", bold=True)
TITLE = Tone("magenta", bold=True)
HEADER = Tone("magenta", bold=True)
TOTAL = Tone("green", bold=True)
MUTED = Tone("bright_black")
ALERT = Tone("red", bold=True)


def classify_duration(duration_ms: float, rules: Sequence[DurationRule] = DEFAULT_DURATION_RULES) -> DurationRule:
    """Return the first rule whose threshold ``duration_ms`` reaches."""

    for rule in rules:
        if duration_ms >= rule.threshold_ms:
            return rule
    return rules[-1]


def classify_percentage(
    percentage: float,
    rules: Sequence[PercentageRule] = DEFAULT_PROGRESS_RULES,
) -> PercentageRule:
    for rule in rules:
        if percentage >= rule.threshold:
            return rule
    return rules[-1]


class Palette(Protocol):
    """Strategy used by renderers to paint text."""

    def paint(self, text: str, tone: Tone) -> str: ...


class PlainPalette:
    """Palette for plain-text and machine-readable targets."""

    def paint(self, text: str, tone: Tone) -> str:
        return text


class AnsiPalette:
    """Palette emitting ANSI escape sequences via ``typer.style``."""

    def paint(self, text: str, tone: Tone) -> str:
        if tone.fg is None and not tone.bold:
            return text
        return typer.style(text, fg=tone.fg, bold=tone.bold or None)


def palette_for(color: bool) -> Palette:
    return AnsiPalette() if color else PlainPalette()
