from datetime import date

import pytest

from chartprep.domain.models import UsageRecord
from chartprep.domain.services import (
    HourBucketAggregator,
    expand_hourly,
    group_by,
    hours_in_period,
    shichen_index,
)


def make_record(app: str, date_str: str, hourly: dict[int, float]) -> UsageRecord:
    minutes = [0.0] * 24
    for hour, value in hourly.items():
        minutes[hour] = value
    day = date.fromisoformat(date_str)
    return UsageRecord(
        date_str=date_str,
        app_name=app,
        minutes=tuple(minutes),
        day=day,
        weekday=day.strftime("%a"),
    )


def test_midnight_wraps_into_first_period():
    assert shichen_index(23) == shichen_index(0) == 0
    assert hours_in_period(0) == (0, 23)


def test_every_other_period_covers_two_consecutive_hours():
    for index in range(1, 12):
        first, second = hours_in_period(index)
        assert second == first + 1
        assert first == 2 * index - 1


def test_period_mapping_is_shifted_by_one_hour():
    assert [shichen_index(h) for h in (1, 2, 3, 12, 13, 22)] == [1, 1, 2, 6, 7, 11]
    assert shichen_index(24) == 0
    assert shichen_index(-1) == 0


def test_wrap_example_builds_single_peak_cell():
    record = make_record("X", "2025-01-01", {0: 30, 23: 45})

    grid = HourBucketAggregator().aggregate([record], "X")

    assert grid.dates == ("2025-01-01",)
    assert grid.cell(0, "2025-01-01").minutes == 75
    assert grid.max_minutes == 75
    peak = grid.peak()
    assert peak is not None
    assert (peak.period_index, peak.date_str, peak.minutes) == (0, "2025-01-01", 75)
    assert peak.period_label == "子"
    assert peak.weekday == "Wed"


def test_grid_is_dense_and_period_major():
    records = [
        make_record("X", "2025-01-02", {10: 5}),
        make_record("X", "2025-01-01", {10: 7}),
    ]

    grid = HourBucketAggregator().aggregate(records, "X")

    assert grid.dates == ("2025-01-01", "2025-01-02")
    assert len(grid.cells) == 24
    assert [(c.period_index, c.date_index) for c in grid.cells[:4]] == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert grid.cell(5, "2025-01-01").minutes == 7
    assert grid.cell(5, "2025-01-02").minutes == 5
    assert len(list(grid.drawable_cells())) == 2


def test_conservation_of_minutes():
    records = [
        make_record("X", "2025-01-01", {h: h + 0.5 for h in range(24)}),
        make_record("X", "2025-01-02", {3: 12, 17: 4}),
        make_record("Y", "2025-01-01", {3: 99}),
    ]
    raw_total = sum(sum(r.minutes) for r in records if r.app_name == "X")

    grid = HourBucketAggregator().aggregate(records, "X")

    assert grid.total_minutes == pytest.approx(raw_total)


def test_non_positive_and_non_finite_minutes_are_excluded():
    record = make_record("X", "2025-01-01", {1: -5, 2: 0, 3: float("nan"), 4: float("inf"), 5: 6})

    grid = HourBucketAggregator().aggregate([record], "X")

    assert grid.total_minutes == 6
    assert [c.period_index for c in grid.drawable_cells()] == [3]


def test_peak_ties_go_to_first_cell_in_grid_order():
    records = [
        make_record("X", "2025-01-02", {3: 10}),
        make_record("X", "2025-01-01", {5: 10}),
    ]

    peak = HourBucketAggregator().aggregate(records, "X").peak()

    assert (peak.period_index, peak.date_str) == (2, "2025-01-02")


def test_empty_input_gives_empty_grid():
    grid = HourBucketAggregator().aggregate([], "X")

    assert grid.is_empty()
    assert grid.max_minutes == 0
    assert grid.peak() is None


def test_all_zero_day_gets_no_band():
    grid = HourBucketAggregator().aggregate([make_record("X", "2025-01-01", {})], "X")

    assert grid.num_dates == 0
    assert grid.is_empty()
    assert grid.peak() is None


def test_days_without_usage_are_left_out_of_the_dates():
    records = [make_record("X", "2025-01-01", {10: 5}), make_record("X", "2025-01-02", {3: 0, 4: -2})]

    grid = HourBucketAggregator().aggregate(records, "X")

    assert grid.dates == ("2025-01-01",)
    assert len(grid.cells) == 12
    assert grid.total_minutes == 5


def test_aggregate_many_keeps_request_order():
    records = [make_record("A", "2025-01-01", {8: 1}), make_record("B", "2025-01-01", {8: 2})]

    grids = HourBucketAggregator().aggregate_many(records, ["B", "A", "missing"])

    assert list(grids) == ["B", "A", "missing"]
    assert grids["B"].max_minutes == 2
    assert grids["missing"].is_empty()


def test_expand_hourly_and_group_by():
    records = [
        make_record("A", "2025-01-01", {0: 3, 23: 4}),
        make_record("B", "2025-01-02", {12: 5}),
    ]

    hourly = [item for record in records for item in expand_hourly(record)]
    by_app = group_by(hourly, lambda item: item.app_name)

    assert [item.hour for item in by_app["A"]] == [0, 23]
    assert by_app["A"][1].hour_label == "23:00-23:59"
    assert by_app["B"][0].shichen_name == "午"
    assert list(group_by(hourly, lambda item: item.date_str)) == ["2025-01-01", "2025-01-02"]
