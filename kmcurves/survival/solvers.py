"""
Public API for survival curve construction.

    build_series(rows, mapping) -> list[Series]
    kaplan_meier_curves(rows, mapping) -> CurveSolution
    get_at_risk_at_time(series, time) -> int | None

build_series() dispatches on the mapping shape:
    no time column        -> []
    event column          -> product-limit curves from subject records
    survival column       -> curves from precomputed survival values
    neither               -> product-limit curves, every subject an event

An empty list is the uniform "cannot render" signal; malformed cells
never raise.
"""

from __future__ import annotations

from kmcurves.core.compute.timing import Timer
from kmcurves.core.result import Result
from kmcurves.core.validation import check_rows
from kmcurves.inference.design import ColumnMapping
from kmcurves.survival._common import CurveParams, Series
from kmcurves.survival._km import product_limit_series
from kmcurves.survival._percent import percent_series
from kmcurves.survival._risk import get_at_risk_at_time
from kmcurves.survival.design import EventDesign, PercentDesign
from kmcurves.survival.solution import CurveSolution

__all__ = ["build_series", "kaplan_meier_curves", "get_at_risk_at_time"]


def _construct(rows, mapping, timer: Timer) -> CurveParams:
    rows = check_rows(rows)
    mapping = ColumnMapping.coerce(mapping)

    if mapping is None or not mapping.time:
        return CurveParams(series=(), mode="event", n_rows=len(rows),
                           n_used=0, n_dropped=0)

    if mapping.event is None and mapping.survival is not None:
        with timer.section('parse_rows'):
            design = PercentDesign.from_rows(rows, mapping)
        series = []
        for label, time, survival, censored in design.iter_groups():
            with timer.section('build_curves'):
                series.append(percent_series(label, time, survival, censored))
        mode = "survival"
    else:
        with timer.section('parse_rows'):
            design = EventDesign.from_rows(rows, mapping)
        series = []
        for label, time, event in design.iter_groups():
            with timer.section('build_curves'):
                series.append(product_limit_series(label, time, event))
        mode = "event"

    return CurveParams(
        series=tuple(series),
        mode=mode,
        n_rows=design.n_rows,
        n_used=design.n,
        n_dropped=design.n_dropped,
    )


def build_series(rows, mapping) -> list[Series]:
    """Build one survival curve per group.

    Parameters
    ----------
    rows : sequence of mappings or pandas.DataFrame
        Tabular rows.
    mapping : ColumnMapping, dict or None
        Resolved column roles (see resolve_mapping()).

    Returns
    -------
    list of Series
        Groups in first-seen order. Empty when the mapping has no time
        column or no row yields a parseable time.
    """
    return list(_construct(rows, mapping, Timer()).series)


def kaplan_meier_curves(rows, mapping) -> CurveSolution:
    """Build curves and wrap them with timing, counts and warnings.

    Same construction as build_series(); additionally records how many
    rows were dropped and whether the result is empty.

    Returns
    -------
    CurveSolution
    """
    with Timer() as timer:
        params = _construct(rows, mapping, timer)

    warnings_list = []
    if params.n_dropped > 0 and params.n_used > 0:
        warnings_list.append(
            f"{params.n_dropped} of {params.n_rows} rows dropped: "
            f"unparseable time or survival value"
        )
    if not params.series:
        warnings_list.append("No data available: no row produced a curve point")

    result = Result(
        params=params,
        info={
            "method": "Kaplan-Meier" if params.mode == "event" else "Precomputed survival",
            "n_groups": len(params.series),
            "n_rows": params.n_rows,
            "n_dropped": params.n_dropped,
        },
        timing=timer.result(),
        backend_name="cpu_km" if params.mode == "event" else "cpu_percent",
        warnings=tuple(warnings_list),
    )

    return CurveSolution(_result=result)
