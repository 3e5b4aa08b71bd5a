"""Ruled and compact text styles."""

from __future__ import annotations

from ..colors import ACCENT, HEADER, MUTED, TITLE, TOTAL
from ..formatting import display_width, format_duration, pad, truncate
from .base import NO_SPANS_MESSAGE, OutputStyle, RenderContext, register_renderer

_RULE_WIDTH = 70
_NAME_WIDTH = 45
_DURATION_WIDTH = 20


@register_renderer(OutputStyle.DEFAULT)
def render_default(ctx: RenderContext) -> str:
    """Plain ruled table: name, total time, then one row per span."""

    heavy = ctx.paint("=" * _RULE_WIDTH, ACCENT)
    light = ctx.paint("-" * _RULE_WIDTH, ACCENT)
    inner = _RULE_WIDTH - 4

    lines = [
        heavy,
        "| " + ctx.paint(pad(truncate(ctx.name, inner), inner), TITLE) + " |",
        heavy,
        "| "
        + ctx.paint(f"{'Total time':<{_NAME_WIDTH}}", TOTAL)
        + " | "
        + ctx.paint(f"{format_duration(ctx.total_ms):<{_DURATION_WIDTH - 1}}", TOTAL)
        + "|",
        light,
        "| "
        + ctx.paint(f"{'Span':<{_NAME_WIDTH}}", HEADER)
        + " | "
        + ctx.paint(f"{'Execution time':<{_DURATION_WIDTH - 1}}", HEADER)
        + "|",
        light,
    ]

    if ctx.empty:
        lines.append("| " + ctx.paint(f"{NO_SPANS_MESSAGE:<{inner}}", MUTED) + " |")

    for row in ctx.rows:
        name = pad(truncate(row.label, _NAME_WIDTH), _NAME_WIDTH)
        duration = f"{format_duration(row.duration_ms):<{_DURATION_WIDTH - 1}}"
        lines.append(
            "| "
            + ctx.paint(name, row.bucket.tone)
            + " | "
            + ctx.paint(duration, row.bucket.tone)
            + "|"
        )

    if ctx.filters.active:
        summary = f"Filtered: {len(ctx.entries)}/{len(ctx.measurements)} spans | Active: {ctx.filter_summary}"
        lines.append(light)
        lines.append("| " + ctx.paint(pad(truncate(summary, inner), inner), MUTED) + " |")

    lines.append(heavy)
    return "\n".join(lines) + "\n"


@register_renderer(OutputStyle.MINIMAL)
def render_minimal(ctx: RenderContext) -> str:
    """One summary line followed by a compact tree of spans."""

    lines = [
        "⚡ "
        + ctx.paint(ctx.name, ACCENT)
        + ": "
        + ctx.paint(format_duration(ctx.total_ms), TOTAL)
        + f" ({len(ctx.entries)} spans)"
    ]
    if ctx.caller is not None:
        lines.append("   📍 " + ctx.paint(ctx.caller.short_path, MUTED))

    if ctx.empty:
        lines.append("  └─ " + ctx.paint(NO_SPANS_MESSAGE, MUTED))
        return "\n".join(lines) + "\n"

    rows = ctx.rows
    width = max((display_width(row.label) for row in rows), default=0)
    width = min(width, _NAME_WIDTH)
    for position, row in enumerate(rows):
        branch = "└─" if position == len(rows) - 1 else "├─"
        name = pad(truncate(row.label, width), width)
        lines.append(
            f"  {branch} "
            + ctx.paint(name, row.bucket.tone)
            + "  "
            + ctx.paint(format_duration(row.duration_ms), row.bucket.tone)
        )
    return "\n".join(lines) + "\n"
