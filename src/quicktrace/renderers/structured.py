"""Machine-readable JSON style."""

from __future__ import annotations

from ..formatting import format_duration
from ..schemas import (
    CallerReport,
    FilterReport,
    GroupedMeasurement,
    SlowestReport,
    SpanReport,
    TraceReport,
)
from .base import OutputStyle, RenderContext, RenderRow, register_renderer


def build_report(ctx: RenderContext) -> TraceReport:
    """Assemble the structured summary for ``ctx``."""

    rows = ctx.rows
    slowest = ctx.slowest
    caller = None
    if ctx.caller is not None:
        caller = CallerReport(
            short_path=ctx.caller.short_path,
            relative_path=ctx.caller.relative_path,
            full_path=ctx.caller.file,
            file_name=ctx.caller.file_name,
            line=ctx.caller.line,
        )

    return TraceReport(
        tracer_name=ctx.name,
        total_duration=format_duration(ctx.total_ms),
        total_ms=ctx.total_ms,
        caller_info=caller,
        filters=FilterReport(
            slow_only_ms=ctx.filters.slow_only_ms,
            hide_ultra_fast_ms=ctx.filters.hide_ultra_fast_ms,
            group_similar_ms=ctx.filters.group_similar_ms,
            summary=ctx.filter_summary,
        ),
        span_count=len(rows),
        raw_span_count=len(ctx.measurements),
        slowest=(
            SlowestReport(
                name=slowest.label,
                duration=format_duration(slowest.duration_ms),
                ms=slowest.duration_ms,
            )
            if slowest is not None
            else None
        ),
        spans=[_span_report(row) for row in rows],
    )


def _span_report(row: RenderRow) -> SpanReport:
    report = SpanReport(
        name=row.label,
        kind=row.entry.kind,
        duration=format_duration(row.duration_ms),
        ms=row.duration_ms,
        percent=row.percent,
        bucket=row.bucket.label,
        color_class=row.bucket.color_class,
    )
    if isinstance(row.entry, GroupedMeasurement):
        report.count = row.entry.member_count
        report.total_ms = row.entry.total_ms
        report.min_ms = row.entry.min_ms
        report.max_ms = row.entry.max_ms
        report.members = list(row.entry.members)
    return report


@register_renderer(OutputStyle.STRUCTURED)
def render_structured(ctx: RenderContext) -> str:
    """Pretty-printed JSON; never colorized so the output stays parseable."""

    return build_report(ctx).model_dump_json(indent=2) + "\n"
