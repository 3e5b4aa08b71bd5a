"""Smart filtering that narrows and groups recorded spans before rendering."""

from __future__ import annotations

from collections.abc import Sequence

from .formatting import format_duration
from .schemas import FilterConfig, GroupedMeasurement, Measurement, TraceEntry

_FEW_SIMILAR = 2


def filter_slow_only(measurements: Sequence[Measurement], threshold_ms: float | None) -> list[Measurement]:
    """Keep spans whose duration is at least ``threshold_ms``."""

    if threshold_ms is None:
        return list(measurements)
    return [m for m in measurements if m.duration_ms >= threshold_ms]


def hide_ultra_fast(measurements: Sequence[Measurement], threshold_ms: float | None) -> list[Measurement]:
    """Drop spans faster than ``threshold_ms``."""

    if threshold_ms is None:
        return list(measurements)
    return [m for m in measurements if m.duration_ms >= threshold_ms]


def group_similar(measurements: Sequence[Measurement], threshold_ms: float) -> list[GroupedMeasurement]:
    """Greedily cluster spans whose duration is within ``threshold_ms`` of a group seed.

    Each unconsumed span seeds a group and absorbs every later unconsumed span
    close to the seed itself. Similarity is not chained through members, so the
    output depends on input order. Groups are emitted in seed order.
    """

    consumed = [False] * len(measurements)
    groups: list[GroupedMeasurement] = []

    for i, seed in enumerate(measurements):
        if consumed[i]:
            continue
        consumed[i] = True

        total = lowest = highest = seed.duration_ms
        similar: list[str] = []

        for j in range(i + 1, len(measurements)):
            if consumed[j]:
                continue
            candidate = measurements[j]
            if abs(seed.duration_ms - candidate.duration_ms) > threshold_ms:
                continue
            consumed[j] = True
            total += candidate.duration_ms
            lowest = min(lowest, candidate.duration_ms)
            highest = max(highest, candidate.duration_ms)
            similar.append(candidate.label)

        groups.append(
            GroupedMeasurement(
                label=_group_label(seed.label, len(similar)),
                member_count=1 + len(similar),
                total_ms=total,
                min_ms=lowest,
                max_ms=highest,
                members=tuple(similar),
            )
        )

    return groups


def apply_smart_filter(
    measurements: Sequence[Measurement],
    filters: FilterConfig,
) -> list[TraceEntry]:
    """Run slow-only, hide-ultra-fast, then group-similar, each on the previous stage's output."""

    filtered = filter_slow_only(measurements, filters.slow_only_ms)
    filtered = hide_ultra_fast(filtered, filters.hide_ultra_fast_ms)

    if filters.group_similar_ms is not None and filtered:
        return list(group_similar(filtered, filters.group_similar_ms))
    return list(filtered)


def describe_filters(filters: FilterConfig) -> str:
    """Return a compact ``slow>…, hide<…, group±…`` summary of the active stages."""

    parts: list[str] = []
    if filters.slow_only_ms is not None:
        parts.append(f"slow>{format_duration(filters.slow_only_ms)}")
    if filters.hide_ultra_fast_ms is not None:
        parts.append(f"hide<{format_duration(filters.hide_ultra_fast_ms)}")
    if filters.group_similar_ms is not None:
        parts.append(f"group±{format_duration(filters.group_similar_ms)}")
    return ", ".join(parts)


def _group_label(label: str, similar_count: int) -> str:
    if similar_count == 0:
        return label
    if similar_count <= _FEW_SIMILAR:
        return f"{label} + {similar_count} similar"
    return f"{label} + {similar_count} others"
