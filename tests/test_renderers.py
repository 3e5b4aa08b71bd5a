from __future__ import annotations

import json

import pytest
import typer

from quicktrace.colors import AnsiPalette, DurationRule, PlainPalette, Tone
from quicktrace.contracts import validate_report
from quicktrace.formatting import display_width
from quicktrace.renderers import (
    NO_SPANS_MESSAGE,
    OutputStyle,
    build_context,
    build_report,
    get_renderer,
    register_renderer,
    registered_styles,
    render_trace,
)
from quicktrace.schemas import CallerInfo, FilterConfig, Measurement

TEXT_STYLES = [style for style in OutputStyle if style is not OutputStyle.STRUCTURED]


def test_every_style_is_registered() -> None:
    assert registered_styles() == list(OutputStyle)


@pytest.mark.parametrize("style", list(OutputStyle))
def test_styles_render_every_span(style: OutputStyle, sample_measurements) -> None:
    output = render_trace(sample_measurements, name="checkout", total_ms=100, style=style)

    assert output.endswith("\n")
    assert "checkout" in output
    for measurement in sample_measurements:
        assert measurement.label in output


@pytest.mark.parametrize("style", TEXT_STYLES)
def test_empty_session_renders_placeholder(style: OutputStyle) -> None:
    output = render_trace([], name="idle", total_ms=0.4, style=style)

    assert NO_SPANS_MESSAGE in output
    assert "idle" in output


def test_empty_session_structured_output() -> None:
    payload = json.loads(render_trace([], name="idle", total_ms=0, style=OutputStyle.STRUCTURED))

    assert payload["spans"] == []
    assert payload["span_count"] == 0
    assert payload["slowest"] is None
    validate_report(payload)


def test_default_style_layout(sample_measurements) -> None:
    lines = render_trace(sample_measurements, name="checkout", total_ms=100).splitlines()

    assert lines[0] == "=" * 70
    assert lines[1].startswith("| checkout")
    assert "Total time" in lines[3] and "100.00ms" in lines[3]
    assert "Execution time" in lines[5]
    assert "Initialize database" in lines[7] and "30.00ms" in lines[7]
    assert lines[-1] == "=" * 70
    assert all(len(line) == 70 for line in lines)


def test_default_style_shows_filter_footer(sample_measurements) -> None:
    output = render_trace(
        sample_measurements,
        name="checkout",
        total_ms=100,
        filters=FilterConfig(slow_only_ms=25),
    )

    assert "Filtered: 2/3 spans | Active: slow>25.00ms" in output
    assert "Process data" not in output


def test_minimal_style_tree(sample_measurements) -> None:
    output = render_trace(
        sample_measurements,
        name="checkout",
        total_ms=100,
        style="minimal",
        caller=CallerInfo(file="/srv/app/orders.py", line=42),
    )
    lines = output.splitlines()

    assert lines[0] == "⚡ checkout: 100.00ms (3 spans)"
    assert lines[1].strip() == "📍 orders.py:42"
    assert lines[2].lstrip().startswith("├─ Initialize database")
    assert lines[-1].lstrip().startswith("└─ Process data")


def test_colorful_style_marks_groups(make_spans) -> None:
    output = render_trace(
        make_spans(40, 44, 100),
        name="batch",
        total_ms=184,
        style="colorful",
        filters=FilterConfig(group_similar_ms=5),
    )

    assert "📦 step 1 + 1 similar" in output
    assert "42.00ms" in output
    assert "📦 step 3 " in output


def test_detailed_style_summary_and_bars(sample_measurements) -> None:
    output = render_trace(
        sample_measurements,
        name="checkout",
        total_ms=100,
        style="detailed",
        caller=CallerInfo(file="/srv/app/handlers/orders.py", line=7),
    )

    assert "📊 SUMMARY" in output
    assert "• Number of Spans: 3" in output
    assert "• Slowest Operation: Load user data" in output
    assert "• Slowest Duration: 50.00ms" in output
    assert "• File: app/handlers/orders.py:7" in output
    assert "50.0%" in output
    assert "██████░░░░░" in output


def test_detailed_style_empty_summary() -> None:
    output = render_trace([], name="idle", total_ms=0, style="detailed")

    assert "• Slowest Operation: None" in output
    assert "• Number of Spans: 0" in output


def test_table_style_footer(sample_measurements) -> None:
    output = render_trace(
        sample_measurements,
        name="checkout",
        total_ms=100,
        style="table",
        filters=FilterConfig(hide_ultra_fast_ms=1),
    )

    assert "📊 TOTAL EXECUTION TIME" in output
    assert output.splitlines()[-1] == (
        "📈 Spans: 3 | 🐌 Slowest: Load user data (50.00ms) | Active: hide<1.00ms"
    )


def test_percentages_sum_to_one_hundred_without_filters(make_spans) -> None:
    spans = make_spans(12.5, 0.3, 310, 44, 7.2)
    ctx = build_context(spans, name="mix", total_ms=sum(m.duration_ms for m in spans) + 1e-6)

    assert sum(row.percent for row in ctx.rows) == pytest.approx(100)


def test_percentages_use_session_total(sample_measurements) -> None:
    ctx = build_context(sample_measurements, name="checkout", total_ms=200, filters=FilterConfig(slow_only_ms=25))

    assert [row.percent for row in ctx.rows] == [pytest.approx(15), pytest.approx(25)]


def test_percentages_with_zero_total_are_zero(sample_measurements) -> None:
    ctx = build_context(sample_measurements, name="checkout", total_ms=0)

    assert [row.percent for row in ctx.rows] == [0, 0, 0]


def test_grouped_entries_use_average_duration(make_spans) -> None:
    ctx = build_context(make_spans(40, 44, 116), name="batch", total_ms=200, filters=FilterConfig(group_similar_ms=5))

    first, second = ctx.rows
    assert first.grouped
    assert first.duration_ms == pytest.approx(42)
    assert first.percent == pytest.approx(21)
    assert second.grouped
    assert second.entry.member_count == 1
    assert ctx.slowest is second


def test_structured_output_is_stable(sample_measurements) -> None:
    first = render_trace(sample_measurements, name="checkout", total_ms=100, style="structured")
    second = render_trace(sample_measurements, name="checkout", total_ms=100, style="json")

    assert first == second
    payload = json.loads(first)
    validate_report(payload)
    assert payload["tracer_name"] == "checkout"
    assert payload["total_duration"] == "100.00ms"
    assert payload["slowest"] == {"name": "Load user data", "duration": "50.00ms", "ms": 50.0}
    assert [span["color_class"] for span in payload["spans"]] == ["very_fast", "fast", "very_fast"]


def test_structured_report_carries_group_details(make_spans) -> None:
    ctx = build_context(make_spans(40, 44, 100), name="batch", total_ms=184, filters=FilterConfig(group_similar_ms=5))

    report = build_report(ctx)

    group = report.spans[0]
    assert group.kind == "group"
    assert group.count == 2
    assert (group.min_ms, group.max_ms) == (40, 44)
    assert group.members == ["step 2"]
    assert report.spans[1].count == 1
    assert report.spans[1].members == []
    assert report.filters.summary == "group±5.00ms"
    assert report.span_count == 2
    assert report.raw_span_count == 3


def test_custom_duration_rules(sample_measurements) -> None:
    rules = (
        DurationRule(40, "Too Slow", Tone("red")),
        DurationRule(0, "Fine", Tone("green")),
    )

    report = build_report(build_context(sample_measurements, name="checkout", total_ms=100, duration_rules=rules))

    assert [span.bucket for span in report.spans] == ["Fine", "Too Slow", "Fine"]
    assert report.spans[1].color_class == "too_slow"


@pytest.mark.parametrize("style", TEXT_STYLES)
def test_ansi_palette_only_adds_escape_codes(style: OutputStyle, sample_measurements) -> None:
    kwargs = {"name": "checkout", "total_ms": 100, "style": style, "filters": FilterConfig(hide_ultra_fast_ms=1)}

    plain = render_trace(sample_measurements, palette=PlainPalette(), **kwargs)
    painted = render_trace(sample_measurements, palette=AnsiPalette(), **kwargs)

    assert "\x1b[" not in plain
    assert "\x1b[" in painted
    assert typer.unstyle(painted) == plain


def test_long_labels_are_truncated() -> None:
    label = "x" * 120
    output = render_trace([Measurement(label=label, duration_ms=5)], name="long", total_ms=5)

    assert label not in output
    assert "x" * 42 + "..." in output


def test_unknown_style_raises() -> None:
    with pytest.raises(ValueError, match="Unknown output style"):
        get_renderer("sparkly")


def test_register_renderer_replaces_style(sample_measurements) -> None:
    previous = get_renderer(OutputStyle.MINIMAL)
    try:
        register_renderer(OutputStyle.MINIMAL)(lambda ctx: f"{ctx.name}:{len(ctx.entries)}\n")
        assert render_trace(sample_measurements, name="custom", total_ms=1, style="minimal") == "custom:3\n"
    finally:
        register_renderer(OutputStyle.MINIMAL)(previous)


@pytest.mark.parametrize("style", [OutputStyle.COLORFUL, OutputStyle.DETAILED, OutputStyle.TABLE])
def test_framed_styles_keep_right_edge_aligned(style: OutputStyle, make_spans) -> None:
    output = render_trace(
        make_spans(40, 44, 100, prefix="🔁 batch step"),
        name="日本 batch",
        total_ms=200,
        style=style,
        filters=FilterConfig(group_similar_ms=5),
        caller=CallerInfo(file="/srv/app/jobs/batch.py", line=9),
    )
    framed = [line for line in output.splitlines() if line[:1] in set("┌│├└╔║╠╟╚")]

    assert "📦" in output
    assert len({display_width(line) for line in framed}) == 1
