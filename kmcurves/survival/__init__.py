"""
Survival curve construction.

Public API:
    build_series(rows, mapping) -> list[Series]
    kaplan_meier_curves(rows, mapping) -> CurveSolution
    get_at_risk_at_time(series, time) -> int | None
    risk_table_ticks(series_list) -> list[float]
    risk_table(series_list, ticks) -> dict[str, list[int | None]]
"""

from kmcurves.survival._common import CensoredPoint, Series, SurvivalStep
from kmcurves.survival._risk import (
    NO_DATA,
    format_at_risk,
    risk_table,
    risk_table_ticks,
)
from kmcurves.survival.solution import CurveSolution
from kmcurves.survival.solvers import (
    build_series,
    get_at_risk_at_time,
    kaplan_meier_curves,
)

__all__ = [
    "build_series",
    "kaplan_meier_curves",
    "get_at_risk_at_time",
    "risk_table_ticks",
    "risk_table",
    "format_at_risk",
    "NO_DATA",
    "Series",
    "SurvivalStep",
    "CensoredPoint",
    "CurveSolution",
]
