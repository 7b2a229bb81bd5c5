"""
Tests for number-at-risk lookup and risk-table layout.
"""

import pytest

from kmcurves.inference import ColumnMapping
from kmcurves.survival import (
    NO_DATA,
    build_series,
    format_at_risk,
    get_at_risk_at_time,
    risk_table,
    risk_table_ticks,
)

STANDARD_MAPPING = ColumnMapping(time="time", event="status", group="group")


@pytest.fixture
def reference_series(event_rows):
    # at_risk == {0: 4, 5: 3, 10: 1}
    return build_series(event_rows, STANDARD_MAPPING)[0]


def series_spanning(max_time):
    rows = [{"time": 0.5, "status": 1}, {"time": max_time, "status": 0}]
    return build_series(rows, ColumnMapping(time="time", event="status"))[0]


class TestGetAtRiskAtTime:

    def test_exact_time(self, reference_series):
        assert get_at_risk_at_time(reference_series, 5) == 3
        assert get_at_risk_at_time(reference_series, 10.0) == 1

    def test_between_recorded_times_looks_back(self, reference_series):
        assert get_at_risk_at_time(reference_series, 7) == 3
        assert get_at_risk_at_time(reference_series, 9.99) == 3

    def test_after_last_time(self, reference_series):
        assert get_at_risk_at_time(reference_series, 100) == 1

    def test_before_first_time_uses_initial_count(self, reference_series):
        assert get_at_risk_at_time(reference_series, -1) == 4

    def test_no_at_risk_map(self, percent_rows):
        mapping = ColumnMapping(time="month", survival="pct", group="arm")
        series = build_series(percent_rows, mapping)[0]
        assert get_at_risk_at_time(series, 6) is NO_DATA

    def test_format(self):
        assert format_at_risk(12) == "12"
        assert format_at_risk(0) == "0"
        assert format_at_risk(NO_DATA) == "-"


class TestTicks:

    def test_short_range_unit_interval(self, reference_series):
        assert risk_table_ticks([reference_series]) == [float(t) for t in range(11)]

    @pytest.mark.parametrize("max_time, interval", [
        (15, 2), (30, 5), (60, 10), (150, 20),
    ])
    def test_interval_grows_with_range(self, max_time, interval):
        ticks = risk_table_ticks([series_spanning(max_time)])
        assert ticks[0] == 0.0
        assert ticks[1] - ticks[0] == interval
        assert ticks[-1] <= max_time

    def test_fractional_max_rounds_up(self):
        ticks = risk_table_ticks([series_spanning(7.5)])
        assert ticks[-1] == 8.0

    def test_spans_all_series(self, reference_series):
        ticks = risk_table_ticks([reference_series, series_spanning(40)])
        assert ticks[-1] == 40.0

    def test_no_series(self):
        assert risk_table_ticks([]) == []


class TestRiskTable:

    def test_counts_per_group(self, two_arm_rows):
        mapping = ColumnMapping(time="Time (months)", event="Death", group="Arm")
        series = build_series(two_arm_rows, mapping)
        table = risk_table(series, [0, 3, 5, 9])
        assert table == {"Drug": [3, 3, 3, 1], "Placebo": [3, 3, 2, 1]}

    def test_default_ticks(self, reference_series):
        table = risk_table([reference_series])
        assert table["A"][:6] == [4, 4, 4, 4, 4, 3]

    def test_precomputed_curve_row(self, percent_rows):
        mapping = ColumnMapping(time="month", survival="pct", group="arm")
        series = build_series(percent_rows, mapping)
        assert risk_table(series, [0, 6]) == {"X": [NO_DATA, NO_DATA]}
