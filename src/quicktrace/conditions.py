"""Print-gating predicates deciding whether a finished trace is rendered."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tracer import Tracer

PrintCondition = Callable[["Tracer"], bool]

DEFAULT_MIN_TOTAL_MS = 100.0


def min_total_duration(threshold_ms: float = DEFAULT_MIN_TOTAL_MS) -> PrintCondition:
    """Render when the whole session took at least ``threshold_ms``."""

    def condition(tracer: Tracer) -> bool:
        return tracer.total_duration_ms >= threshold_ms

    return condition


def min_span_duration(threshold_ms: float) -> PrintCondition:
    """Render when any recorded span took at least ``threshold_ms``."""

    def condition(tracer: Tracer) -> bool:
        return any(m.duration_ms >= threshold_ms for m in tracer.measurements)

    return condition


def always() -> PrintCondition:
    return lambda tracer: True


def never() -> PrintCondition:
    return lambda tracer: False
