"""
Tests for kaplan_meier_curves() and the CurveSolution wrapper.
"""

import pytest

from kmcurves.inference import ColumnMapping
from kmcurves.survival import CurveSolution, kaplan_meier_curves

TWO_ARM_MAPPING = ColumnMapping(time="Time (months)", event="Death", group="Arm")


class TestKaplanMeierCurves:

    def test_event_mode(self, two_arm_rows):
        result = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING)

        assert isinstance(result, CurveSolution)
        assert result.groups == ["Drug", "Placebo"]
        assert result.mode == "event"
        assert result.backend_name == "cpu_km"
        assert result.info["method"] == "Kaplan-Meier"
        assert result.info["n_groups"] == 2
        assert result.n_rows == 6
        assert result.n_used == 6
        assert result.n_dropped == 0
        assert result.warnings == ()
        assert not result.is_empty

    def test_timing_sections(self, two_arm_rows):
        result = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING)
        assert set(result.timing) >= {"total_seconds", "parse_rows", "build_curves"}
        assert result.timing["build_curves_calls"] == 2

    def test_median_survival(self, two_arm_rows):
        result = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING)
        assert result.median_survival == {"Drug": 9.0, "Placebo": 4.0}

    def test_survival_mode(self, percent_rows):
        mapping = ColumnMapping(time="month", survival="pct", group="arm")
        result = kaplan_meier_curves(percent_rows, mapping)
        assert result.mode == "survival"
        assert result.backend_name == "cpu_percent"
        assert result.info["method"] == "Precomputed survival"

    def test_dropped_rows_warned(self, two_arm_rows):
        rows = two_arm_rows + [{"Time (months)": "unknown", "Death": "dead", "Arm": "Drug"}]
        result = kaplan_meier_curves(rows, TWO_ARM_MAPPING)
        assert result.n_dropped == 1
        assert result.info["n_dropped"] == 1
        assert any("1 of 7 rows dropped" in w for w in result.warnings)

    def test_matches_build_series(self, two_arm_rows):
        from kmcurves.survival import build_series

        result = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING)
        assert result.series == build_series(two_arm_rows, TWO_ARM_MAPPING)


class TestEmpty:

    @pytest.mark.parametrize("rows, mapping", [
        ([], TWO_ARM_MAPPING),
        ([{"Time (months)": 1}], None),
        ([{"Time (months)": "?"}], TWO_ARM_MAPPING),
    ])
    def test_no_data(self, rows, mapping):
        result = kaplan_meier_curves(rows, mapping)
        assert result.is_empty
        assert result.groups == []
        assert any(w.startswith("No data available") for w in result.warnings)
        assert "No data available" in result.summary()

    def test_all_dropped_warns_once(self):
        result = kaplan_meier_curves([{"Time (months)": "?"}], TWO_ARM_MAPPING)
        assert len(result.warnings) == 1


class TestPresentation:

    def test_summary(self, two_arm_rows):
        text = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING).summary()
        assert "Call: kaplan_meier_curves()" in text
        assert "rows=6, used=6, dropped=0, mode=event" in text
        assert "Drug" in text and "Placebo" in text
        assert "Number at risk" in text

    def test_summary_precomputed_risk_rows_show_dash(self, percent_rows):
        mapping = ColumnMapping(time="month", survival="pct", group="arm")
        text = kaplan_meier_curves(percent_rows, mapping).summary()
        risk_rows = text.split("Number at risk")[1]
        assert "-" in risk_rows

    def test_risk_table_method(self, two_arm_rows):
        result = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING)
        assert result.risk_table([0, 9]) == {"Drug": [3, 1], "Placebo": [3, 1]}

    def test_repr(self, two_arm_rows):
        result = kaplan_meier_curves(two_arm_rows, TWO_ARM_MAPPING)
        assert repr(result) == "CurveSolution(groups=2, mode=event, dropped=0)"
