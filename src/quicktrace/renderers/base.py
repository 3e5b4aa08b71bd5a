"""Render contract shared by every output style."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..colors import (
    DEFAULT_DURATION_RULES,
    DEFAULT_PROGRESS_RULES,
    DurationRule,
    Palette,
    PercentageRule,
    PlainPalette,
    Tone,
    classify_duration,
    classify_percentage,
)
from ..errors import TraceConfigError
from ..filtering import apply_smart_filter, describe_filters
from ..formatting import percent_of
from ..schemas import CallerInfo, FilterConfig, GroupedMeasurement, Measurement, TraceEntry, entry_duration

NO_SPANS_MESSAGE = "No spans recorded"


class OutputStyle(str, Enum):
    """Layouts a tracer can render its summary with."""

    DEFAULT = "default"
    COLORFUL = "colorful"
    MINIMAL = "minimal"
    DETAILED = "detailed"
    TABLE = "table"
    STRUCTURED = "structured"

    @classmethod
    def parse(cls, value: OutputStyle | str) -> OutputStyle:
        if isinstance(value, OutputStyle):
            return value
        normalized = str(value).strip().lower()
        if normalized == "json":
            return cls.STRUCTURED
        try:
            return cls(normalized)
        except ValueError as exc:
            choices = ", ".join(style.value for style in cls)
            raise TraceConfigError(f"Unknown output style {value!r}; expected one of: {choices}.") from exc


@dataclass(frozen=True)
class RenderRow:
    """Display-ready view of one filtered entry."""

    index: int
    entry: TraceEntry
    duration_ms: float
    percent: float
    bucket: DurationRule
    progress: PercentageRule

    @property
    def label(self) -> str:
        return self.entry.label

    @property
    def grouped(self) -> bool:
        return isinstance(self.entry, GroupedMeasurement)


@dataclass(frozen=True)
class RenderContext:
    """Everything a renderer needs: filtered entries, totals, and metadata."""

    name: str
    measurements: Sequence[Measurement]
    entries: Sequence[TraceEntry]
    total_ms: float
    filters: FilterConfig = field(default_factory=FilterConfig)
    caller: CallerInfo | None = None
    palette: Palette = field(default_factory=PlainPalette)
    duration_rules: Sequence[DurationRule] = DEFAULT_DURATION_RULES
    progress_rules: Sequence[PercentageRule] = DEFAULT_PROGRESS_RULES

    @property
    def empty(self) -> bool:
        return not self.measurements

    @property
    def rows(self) -> list[RenderRow]:
        rows: list[RenderRow] = []
        for index, entry in enumerate(self.entries, start=1):
            duration = entry_duration(entry)
            percent = percent_of(duration, self.total_ms)
            rows.append(
                RenderRow(
                    index=index,
                    entry=entry,
                    duration_ms=duration,
                    percent=percent,
                    bucket=classify_duration(duration, self.duration_rules),
                    progress=classify_percentage(percent, self.progress_rules),
                )
            )
        return rows

    @property
    def slowest(self) -> RenderRow | None:
        rows = self.rows
        if not rows:
            return None
        return max(rows, key=lambda row: row.duration_ms)

    @property
    def filter_summary(self) -> str:
        return describe_filters(self.filters)

    def paint(self, text: str, tone: Tone) -> str:
        return self.palette.paint(text, tone)


Renderer = Callable[[RenderContext], str]

_RENDERERS: dict[OutputStyle, Renderer] = {}


def register_renderer(style: OutputStyle) -> Callable[[Renderer], Renderer]:
    """Decorator binding a renderer function to ``style``."""

    def decorator(func: Renderer) -> Renderer:
        _RENDERERS[style] = func
        return func

    return decorator


def get_renderer(style: OutputStyle | str) -> Renderer:
    resolved = OutputStyle.parse(style)
    try:
        return _RENDERERS[resolved]
    except KeyError as exc:  # pragma: no cover - every style registers at import
        raise TraceConfigError(f"No renderer registered for style {resolved.value!r}.") from exc


def registered_styles() -> list[OutputStyle]:
    return [style for style in OutputStyle if style in _RENDERERS]


def build_context(
    measurements: Sequence[Measurement],
    *,
    name: str,
    total_ms: float,
    filters: FilterConfig | None = None,
    caller: CallerInfo | None = None,
    palette: Palette | None = None,
    duration_rules: Sequence[DurationRule] = DEFAULT_DURATION_RULES,
    progress_rules: Sequence[PercentageRule] = DEFAULT_PROGRESS_RULES,
) -> RenderContext:
    """Filter ``measurements`` and bundle the result with render metadata."""

    active = filters or FilterConfig()
    real = tuple(measurements)
    return RenderContext(
        name=name,
        measurements=real,
        entries=tuple(apply_smart_filter(real, active)),
        total_ms=total_ms,
        filters=active,
        caller=caller,
        palette=palette or PlainPalette(),
        duration_rules=duration_rules,
        progress_rules=progress_rules,
    )
