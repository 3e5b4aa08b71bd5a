from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from quicktrace.filtering import (
    apply_smart_filter,
    describe_filters,
    filter_slow_only,
    group_similar,
    hide_ultra_fast,
)
from quicktrace.schemas import FilterConfig, GroupedMeasurement, Measurement, TraceEntry


def _durations(entries: list) -> list[float]:
    return [entry.duration_ms for entry in entries]


def test_no_filters_pass_everything_through(make_spans) -> None:
    measurements = make_spans(5, 15, 50)

    result = apply_smart_filter(measurements, FilterConfig())

    assert result == measurements
    assert all(isinstance(entry, Measurement) for entry in result)


def test_slow_only_keeps_spans_at_or_above_threshold(make_spans) -> None:
    measurements = make_spans(5, 10, 50)

    assert _durations(filter_slow_only(measurements, 10)) == [10, 50]


def test_hide_ultra_fast_drops_spans_below_threshold(make_spans) -> None:
    measurements = make_spans(0.5, 1, 3)

    assert _durations(hide_ultra_fast(measurements, 1)) == [1, 3]


def test_stages_compose_in_fixed_order(make_spans) -> None:
    measurements = make_spans(5, 15, 50)

    result = apply_smart_filter(measurements, FilterConfig(slow_only_ms=10, hide_ultra_fast_ms=20))

    assert _durations(result) == [50]


def test_grouping_folds_entries_close_to_the_seed(make_spans) -> None:
    measurements = make_spans(40, 44, 100)

    groups = apply_smart_filter(measurements, FilterConfig(group_similar_ms=5))

    assert len(groups) == 2
    first, second = groups
    assert isinstance(first, GroupedMeasurement)
    assert first.member_count == 2
    assert first.average_ms == pytest.approx(42)
    assert first.min_ms == 40
    assert first.max_ms == 44
    assert first.label == "step 1 + 1 similar"
    assert first.members == ("step 2",)
    assert second.member_count == 1
    assert second.label == "step 3"
    assert second.average_ms == 100


def test_grouping_compares_only_against_the_seed(make_spans) -> None:
    measurements = make_spans(10, 15, 20)

    groups = group_similar(measurements, 5)

    assert [group.member_count for group in groups] == [2, 1]
    assert groups[0].total_ms == 25
    assert groups[1].label == "step 3"


def test_grouping_label_switches_to_others_after_two_members(make_spans) -> None:
    few = group_similar(make_spans(10, 11, 12), 5)
    many = group_similar(make_spans(10, 11, 12, 13), 5)

    assert few[0].label == "step 1 + 2 similar"
    assert many[0].label == "step 1 + 3 others"


def test_groups_follow_seed_order(make_spans) -> None:
    measurements = make_spans(100, 10, 102, 12)

    groups = group_similar(measurements, 5)

    assert [group.label for group in groups] == ["step 1 + 1 similar", "step 2 + 1 similar"]
    assert [group.average_ms for group in groups] == [101, 11]


def test_grouping_keeps_invariants(make_spans) -> None:
    groups = group_similar(make_spans(7, 3, 9, 30, 28, 31, 55), 4)

    for group in groups:
        assert group.min_ms <= group.average_ms <= group.max_ms
        assert group.average_ms == pytest.approx(group.total_ms / group.member_count)
    assert sum(group.member_count for group in groups) == 7


def test_grouping_runs_after_filters(make_spans) -> None:
    measurements = make_spans(0.2, 40, 44, 100)

    result = apply_smart_filter(measurements, FilterConfig(hide_ultra_fast_ms=1, group_similar_ms=5))

    assert [entry.label for entry in result] == ["step 2 + 1 similar", "step 4"]


def test_grouping_skipped_when_filters_leave_nothing(make_spans) -> None:
    result = apply_smart_filter(make_spans(1, 2), FilterConfig(slow_only_ms=10, group_similar_ms=5))

    assert result == []


def test_smart_config_treats_zero_as_disabled() -> None:
    filters = FilterConfig.smart(slow_ms=0, ultra_fast_ms=1, similar_ms=None)

    assert filters.slow_only_ms is None
    assert filters.hide_ultra_fast_ms == 1
    assert filters.group_similar_ms is None
    assert filters.active


def test_describe_filters_lists_active_stages() -> None:
    summary = describe_filters(FilterConfig(slow_only_ms=50, hide_ultra_fast_ms=2, group_similar_ms=10))

    assert summary == "slow>50.00ms, hide<2.00ms, group±10.00ms"
    assert describe_filters(FilterConfig()) == ""


def test_filter_output_round_trips_through_tagged_union(make_spans) -> None:
    entries = apply_smart_filter(make_spans(40, 44, 100), FilterConfig(group_similar_ms=5))
    adapter = TypeAdapter(list[TraceEntry])

    restored = adapter.validate_python(adapter.dump_python(entries))

    assert restored == entries
    assert [entry.kind for entry in restored] == ["group", "group"]
    assert adapter.validate_python([{"kind": "span", "label": "x", "duration_ms": 1}]) == [
        Measurement(label="x", duration_ms=1)
    ]
