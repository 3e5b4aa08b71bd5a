"""Renderers turning filtered trace data into text, one function per output style."""

from __future__ import annotations

from collections.abc import Sequence

from ..colors import DEFAULT_DURATION_RULES, DEFAULT_PROGRESS_RULES, DurationRule, Palette, PercentageRule
from ..schemas import CallerInfo, FilterConfig, Measurement
from . import boxed, structured, text  # noqa: F401  (registers the built-in styles)
from .base import (
    NO_SPANS_MESSAGE,
    OutputStyle,
    RenderContext,
    Renderer,
    RenderRow,
    build_context,
    get_renderer,
    register_renderer,
    registered_styles,
)
from .structured import build_report


def render_trace(
    measurements: Sequence[Measurement],
    *,
    name: str,
    total_ms: float,
    style: OutputStyle | str = OutputStyle.DEFAULT,
    filters: FilterConfig | None = None,
    caller: CallerInfo | None = None,
    palette: Palette | None = None,
    duration_rules: Sequence[DurationRule] = DEFAULT_DURATION_RULES,
    progress_rules: Sequence[PercentageRule] = DEFAULT_PROGRESS_RULES,
) -> str:
    """Filter ``measurements`` and render them with ``style``.

    ``measurements`` must already exclude the synthetic tail entry appended by
    ``Tracer.end``.
    """

    renderer = get_renderer(style)
    ctx = build_context(
        measurements,
        name=name,
        total_ms=total_ms,
        filters=filters,
        caller=caller,
        palette=palette,
        duration_rules=duration_rules,
        progress_rules=progress_rules,
    )
    return renderer(ctx)


__all__ = [
    "NO_SPANS_MESSAGE",
    "OutputStyle",
    "RenderContext",
    "RenderRow",
    "Renderer",
    "build_context",
    "build_report",
    "get_renderer",
    "register_renderer",
    "registered_styles",
    "render_trace",
]
