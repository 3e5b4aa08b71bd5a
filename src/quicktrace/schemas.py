"""Pydantic data models shared across the tracer, renderers, and CLI."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class Measurement(BaseModel):
    """Elapsed time recorded for one checkpoint interval."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["span"] = "span"
    label: str = Field(..., description="Free-form checkpoint label.")
    duration_ms: float = Field(..., ge=0, description="Time since the previous checkpoint (ms).")


class GroupedMeasurement(BaseModel):
    """Aggregate of measurements whose durations sit close to a seed entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    label: str = Field(..., description="Seed label, suffixed when similar entries were folded in.")
    member_count: int = Field(..., ge=1)
    total_ms: float = Field(..., ge=0)
    min_ms: float = Field(..., ge=0)
    max_ms: float = Field(..., ge=0)
    members: tuple[str, ...] = Field(default=(), description="Labels of the folded-in entries.")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_ms(self) -> float:
        return self.total_ms / self.member_count

    @model_validator(mode="after")
    def _check_bounds(self) -> GroupedMeasurement:
        if self.min_ms > self.max_ms:
            raise ValueError("min_ms must not exceed max_ms.")
        return self


TraceEntry = Annotated[Measurement | GroupedMeasurement, Field(discriminator="kind")]
"""Filter output element: either a raw span or a grouped span."""


def entry_duration(entry: TraceEntry) -> float:
    """Return the duration a renderer displays for ``entry`` (average for groups)."""

    if isinstance(entry, GroupedMeasurement):
        return entry.average_ms
    return entry.duration_ms


class FilterConfig(BaseModel):
    """Optional thresholds (ms) for the three smart-filter stages."""

    model_config = ConfigDict(frozen=True)

    slow_only_ms: float | None = Field(default=None, ge=0, description="Keep spans at or above this.")
    hide_ultra_fast_ms: float | None = Field(default=None, ge=0, description="Drop spans below this.")
    group_similar_ms: float | None = Field(default=None, ge=0, description="Max distance to a group seed.")

    @classmethod
    def smart(
        cls,
        slow_ms: float | None = None,
        ultra_fast_ms: float | None = None,
        similar_ms: float | None = None,
    ) -> FilterConfig:
        """Build a config where zero or missing thresholds leave the stage disabled."""

        return cls(
            slow_only_ms=slow_ms or None,
            hide_ultra_fast_ms=ultra_fast_ms or None,
            group_similar_ms=similar_ms or None,
        )

    @property
    def active(self) -> bool:
        return any(
            value is not None
            for value in (self.slow_only_ms, self.hide_ultra_fast_ms, self.group_similar_ms)
        )


class CallerInfo(BaseModel):
    """Source location supplied by the code that created a tracer."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int | None = None

    @property
    def file_name(self) -> str:
        return self.file.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def short_path(self) -> str:
        if self.line is None:
            return self.file_name
        return f"{self.file_name}:{self.line}"

    @property
    def relative_path(self) -> str:
        parts = [part for part in self.file.replace("\\", "/").split("/") if part]
        tail = "/".join(parts[-3:]) or self.file
        return tail if self.line is None else f"{tail}:{self.line}"


class SpanReport(BaseModel):
    """One row of the structured-data output."""

    name: str
    kind: Literal["span", "group"]
    duration: str
    ms: float
    percent: float
    bucket: str
    color_class: str
    count: int | None = None
    total_ms: float | None = None
    min_ms: float | None = None
    max_ms: float | None = None
    members: list[str] | None = None


class SlowestReport(BaseModel):
    """Slowest displayed entry."""

    name: str
    duration: str
    ms: float


class FilterReport(BaseModel):
    """Active filter thresholds echoed into the structured output."""

    slow_only_ms: float | None = None
    hide_ultra_fast_ms: float | None = None
    group_similar_ms: float | None = None
    summary: str = ""


class CallerReport(BaseModel):
    short_path: str
    relative_path: str
    full_path: str
    file_name: str
    line: int | None = None


class TraceReport(BaseModel):
    """Machine-readable summary of a finished trace session."""

    tracer_name: str
    total_duration: str
    total_ms: float
    caller_info: CallerReport | None = None
    filters: FilterReport
    span_count: int
    raw_span_count: int
    slowest: SlowestReport | None = None
    spans: list[SpanReport]
