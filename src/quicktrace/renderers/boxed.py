"""Box-drawing styles: colorful frame, detailed breakdown, and grid table."""

from __future__ import annotations

from ..colors import ACCENT, ALERT, FRAME, HEADER, MUTED, TITLE, TOTAL, Tone
from ..formatting import center, display_width, format_duration, pad, progress_bar, truncate
from .base import NO_SPANS_MESSAGE, OutputStyle, RenderContext, register_renderer

_GROUP_MARKER = "📦 "


def _boxed(plain: str, painted: str | None, inner: int, edge: str = "│") -> str:
    padding = " " * max(0, inner - display_width(plain))
    return f"{edge} {painted if painted is not None else plain}{padding} {edge}"


def _banner(ctx: RenderContext, text: str, span: int, tone: Tone, edge: str = "│") -> str:
    return edge + ctx.paint(center(truncate(text, span - 2), span), tone) + edge


# -- colorful ---------------------------------------------------------------

_CF_NAME = 35
_CF_DURATION = 22
_CF_INNER = _CF_NAME + _CF_DURATION + 3


@register_renderer(OutputStyle.COLORFUL)
def render_colorful(ctx: RenderContext) -> str:
    span = _CF_INNER + 2
    top = ctx.paint("┌" + "─" * span + "┐", FRAME)
    separator = ctx.paint("├" + "─" * span + "┤", FRAME)
    bottom = ctx.paint("└" + "─" * span + "┘", FRAME)

    lines = [top, _banner(ctx, f"🚀 {ctx.name}", span, TITLE)]
    if ctx.caller is not None:
        lines.append(_banner(ctx, f"📍 File: {ctx.caller.relative_path}", span, MUTED))
    lines.append(separator)
    lines.append(_colorful_row(ctx, "⏱️  Total Time", format_duration(ctx.total_ms), TOTAL, TOTAL))
    lines.append(separator)
    lines.append(_colorful_row(ctx, "📋 Span", "⏰ Duration", HEADER, HEADER))
    lines.append(separator)

    if ctx.empty:
        lines.append(_boxed(NO_SPANS_MESSAGE, ctx.paint(NO_SPANS_MESSAGE, MUTED), _CF_INNER))

    for row in ctx.rows:
        label = (_GROUP_MARKER if row.grouped else "") + row.label
        lines.append(
            _colorful_row(ctx, truncate(label, _CF_NAME), format_duration(row.duration_ms), row.bucket.tone, row.bucket.tone)
        )

    lines.append(bottom)
    return "\n".join(lines) + "\n"


def _colorful_row(ctx: RenderContext, left: str, right: str, left_tone: Tone, right_tone: Tone) -> str:
    return (
        "│ "
        + ctx.paint(pad(left, _CF_NAME), left_tone)
        + " │ "
        + ctx.paint(pad(right, _CF_DURATION), right_tone)
        + " │"
    )


# -- detailed ---------------------------------------------------------------

_DT_INDEX = 3
_DT_NAME = 30
_DT_DURATION = 13
_DT_PERCENT = 7
_DT_BAR = 11
_DT_INNER = _DT_INDEX + _DT_NAME + _DT_DURATION + _DT_PERCENT + _DT_BAR + 12


@register_renderer(OutputStyle.DETAILED)
def render_detailed(ctx: RenderContext) -> str:
    """Summary block plus per-entry breakdown with percentages and progress bars."""

    span = _DT_INNER + 2
    top = ctx.paint("╔" + "═" * span + "╗", FRAME)
    separator = ctx.paint("╠" + "═" * span + "╣", FRAME)
    thin = ctx.paint("╟" + "─" * span + "╢", FRAME)
    bottom = ctx.paint("╚" + "═" * span + "╝", FRAME)

    def line(plain: str, painted: str | None = None) -> str:
        return _boxed(plain, painted, _DT_INNER, edge="║")

    def stat(prefix: str, value: str, tone: Tone) -> str:
        return line(prefix + value, prefix + ctx.paint(value, tone))

    slowest = ctx.slowest
    lines = [
        top,
        _banner(ctx, f"🎯 TRACE: {ctx.name}", span, TITLE, edge="║"),
        separator,
        line("📊 SUMMARY", ctx.paint("📊 SUMMARY", TOTAL)),
        stat("• Total Execution Time: ", format_duration(ctx.total_ms), TOTAL),
        stat("• Number of Spans: ", str(len(ctx.entries)), FRAME),
        stat("• Slowest Operation: ", truncate(slowest.label, 40) if slowest else "None", ALERT),
        stat("• Slowest Duration: ", format_duration(slowest.duration_ms) if slowest else "-", ALERT),
    ]
    if ctx.caller is not None:
        lines.append(stat("• File: ", truncate(ctx.caller.relative_path, _DT_INNER - 8), MUTED))

    header = (
        f"{'#':>{_DT_INDEX}} │ {'Operation':<{_DT_NAME}} │ {'Duration':>{_DT_DURATION}} │ "
        f"{'Percent':>{_DT_PERCENT}} │ {'Progress':<{_DT_BAR}}"
    )
    lines.extend(
        [
            separator,
            line("🔍 DETAILED BREAKDOWN", ctx.paint("🔍 DETAILED BREAKDOWN", TITLE)),
            thin,
            line(header, ctx.paint(header, HEADER)),
            thin,
        ]
    )

    if ctx.empty:
        lines.append(line(NO_SPANS_MESSAGE, ctx.paint(NO_SPANS_MESSAGE, MUTED)))

    for row in ctx.rows:
        label = truncate((_GROUP_MARKER if row.grouped else "") + row.label, _DT_NAME)
        cells = [
            f"{row.index:>{_DT_INDEX}}",
            ctx.paint(pad(label, _DT_NAME), row.bucket.tone),
            ctx.paint(f"{format_duration(row.duration_ms):>{_DT_DURATION}}", row.bucket.tone),
            ctx.paint(f"{row.percent:.1f}%".rjust(_DT_PERCENT), row.bucket.tone),
            ctx.paint(progress_bar(row.percent, _DT_BAR), row.progress.tone),
        ]
        lines.append("║ " + " │ ".join(cells) + " ║")

    if ctx.filters.active:
        summary = f"🔍 Filtered: {len(ctx.entries)}/{len(ctx.measurements)} spans | Active: {ctx.filter_summary}"
        summary = truncate(summary, _DT_INNER)
        lines.append(thin)
        lines.append(line(summary, ctx.paint(summary, MUTED)))

    lines.append(bottom)
    return "\n".join(lines) + "\n"


# -- table ------------------------------------------------------------------

_TB_INDEX = 4
_TB_NAME = 45
_TB_DURATION = 20


@register_renderer(OutputStyle.TABLE)
def render_table(ctx: RenderContext) -> str:
    """Three-column grid with a total row and a one-line summary footer."""

    span = _TB_INDEX + _TB_NAME + _TB_DURATION + 2
    top = ctx.paint("┌" + "─" * span + "┐", FRAME)
    split = ctx.paint("├" + "─" * _TB_INDEX + "┬" + "─" * _TB_NAME + "┬" + "─" * _TB_DURATION + "┤", FRAME)
    grid = ctx.paint("├" + "─" * _TB_INDEX + "┼" + "─" * _TB_NAME + "┼" + "─" * _TB_DURATION + "┤", ACCENT)
    bottom = ctx.paint("└" + "─" * _TB_INDEX + "┴" + "─" * _TB_NAME + "┴" + "─" * _TB_DURATION + "┘", FRAME)

    def row_line(index: str, name: str, duration: str, tone: Tone) -> str:
        return (
            "│"
            + f" {index:>{_TB_INDEX - 2}} "
            + "│ "
            + ctx.paint(pad(truncate(name, _TB_NAME - 2), _TB_NAME - 1), tone)
            + "│ "
            + ctx.paint(pad(duration, _TB_DURATION - 1), tone)
            + "│"
        )

    lines = [top, _banner(ctx, f"🚀 {ctx.name}", span, TITLE)]
    if ctx.caller is not None:
        lines.append(_banner(ctx, f"📍 File: {ctx.caller.relative_path}", span, MUTED))
    lines.extend(
        [
            split,
            row_line("No", "Span Name", "Duration", HEADER),
            grid,
            row_line("", "📊 TOTAL EXECUTION TIME", format_duration(ctx.total_ms), TOTAL),
            grid,
        ]
    )

    if ctx.empty:
        lines.append(row_line("", NO_SPANS_MESSAGE, "-", MUTED))

    for row in ctx.rows:
        label = (_GROUP_MARKER if row.grouped else "") + row.label
        lines.append(row_line(str(row.index), label, format_duration(row.duration_ms), row.bucket.tone))

    lines.append(bottom)

    slowest = ctx.slowest
    footer = f"📈 Spans: {len(ctx.entries)} | "
    if slowest is None:
        footer += "🐌 Slowest: None"
    else:
        footer += f"🐌 Slowest: {slowest.label} ({format_duration(slowest.duration_ms)})"
    if ctx.filters.active:
        footer += f" | Active: {ctx.filter_summary}"
    lines.extend(["", ctx.paint(footer, MUTED)])
    return "\n".join(lines) + "\n"
