"""
Tests for curves built from precomputed survival values.
"""

import pytest

from kmcurves.inference import ColumnMapping
from kmcurves.survival import build_series, get_at_risk_at_time
from kmcurves.survival.design import PercentDesign

PERCENT_MAPPING = ColumnMapping(time="month", survival="pct", group="arm")


def points(series):
    return [(s.time, pytest.approx(s.survival)) for s in series.steps]


class TestPercentSeries:

    def test_proportions_normalized(self, percent_rows):
        result = build_series(percent_rows, PERCENT_MAPPING)
        assert len(result) == 1
        series = result[0]
        assert series.group == "X"
        assert points(series) == [(0.0, 100.0), (6.0, 80.0), (12.0, 55.0)]

    def test_no_at_risk_information(self, percent_rows):
        series = build_series(percent_rows, PERCENT_MAPPING)[0]
        assert dict(series.at_risk) == {}
        assert all(step.at_risk is None for step in series.steps)
        assert get_at_risk_at_time(series, 6) is None

    def test_origin_prepended(self):
        rows = [{"month": 3, "pct": 90}, {"month": 9, "pct": 70}]
        series = build_series(rows, ColumnMapping(time="month", survival="pct"))[0]
        assert points(series) == [(0.0, 100.0), (3.0, 90.0), (9.0, 70.0)]

    def test_origin_forced_to_100(self):
        rows = [{"month": 0, "pct": 97}, {"month": 9, "pct": 70}]
        series = build_series(rows, ColumnMapping(time="month", survival="pct"))[0]
        assert points(series) == [(0.0, 100.0), (9.0, 70.0)]

    def test_points_sorted_by_time(self):
        rows = [{"month": 12, "pct": 40}, {"month": 6, "pct": 60}, {"month": 0, "pct": 100}]
        series = build_series(rows, ColumnMapping(time="month", survival="pct"))[0]
        assert series.times == [0.0, 6.0, 12.0]

    def test_rows_missing_survival_dropped(self):
        rows = [{"month": 3, "pct": None}, {"month": 6, "pct": "80%"}, {"month": "x", "pct": 50}]
        design = PercentDesign.from_rows(rows, ColumnMapping(time="month", survival="pct"))
        assert design.n == 1
        assert design.n_dropped == 2
        assert design.survival.tolist() == [80.0]


class TestLabelsAndMarks:

    def test_label_from_survival_column(self):
        rows = [{"month": 6, "os_prob": 0.8}]
        series = build_series(rows, ColumnMapping(time="month", survival="os_prob"))[0]
        assert series.group == "Os Prob"

    def test_groups_first_seen(self):
        rows = [
            {"month": 6, "pct": 80, "arm": "Y"},
            {"month": 6, "pct": 70, "arm": "X"},
        ]
        assert [s.group for s in build_series(rows, PERCENT_MAPPING)] == ["Y", "X"]

    def test_mapped_censor_marks(self):
        rows = [
            {"month": 6, "pct": 80, "tick": "yes"},
            {"month": 9, "pct": 75, "tick": "no"},
        ]
        mapping = ColumnMapping(time="month", survival="pct", censored="tick")
        series = build_series(rows, mapping)[0]
        assert [(c.time, c.survival) for c in series.censored] == [(6.0, 80.0)]

    def test_unmapped_censored_column(self):
        rows = [
            {"month": 6, "pct": 80, "censored": True},
            {"month": 9, "pct": 0.75, "censored": 1},
        ]
        series = build_series(rows, ColumnMapping(time="month", survival="pct"))[0]
        assert [c.time for c in series.censored] == [6.0, 9.0]
        assert series.censored[1].survival == pytest.approx(75.0)

    def test_event_column_takes_precedence(self, percent_rows):
        rows = [dict(r, status=1) for r in percent_rows]
        mapping = ColumnMapping(time="month", event="status", survival="pct", group="arm")
        series = build_series(rows, mapping)[0]
        assert series.n_at_start == 3
