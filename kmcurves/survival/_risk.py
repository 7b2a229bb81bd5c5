"""
Number-at-risk lookup and risk-table layout.

Risk tables are read like the curve itself: the count shown under a tick
is the count recorded at the latest time at or before the tick, never an
interpolation.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from kmcurves.survival._common import Series

# Sentinel for "no at-risk data" (distinct from a count of zero)
NO_DATA = None

# (exclusive lower bound on the time range, tick interval), widest first
_TICK_INTERVALS = ((100, 20), (50, 10), (20, 5), (10, 2))


def get_at_risk_at_time(series: Series, time: float) -> int | None:
    """Number at risk at `time` using step-function look-back.

    Exact recorded time wins; otherwise the largest recorded time not
    after `time`; otherwise the initial step's count. Returns NO_DATA
    when the series has no at-risk map at all.
    """
    if not series.at_risk:
        return NO_DATA

    if time in series.at_risk:
        return series.at_risk[time]

    earlier = [t for t in series.at_risk if t <= time]
    if earlier:
        return series.at_risk[max(earlier)]

    return series.n_at_start


def format_at_risk(value: int | None) -> str:
    """Display form: the count, or '-' when unknown."""
    return "-" if value is NO_DATA else str(value)


def risk_table_ticks(series_list: Sequence[Series]) -> list[float]:
    """Tick times for the x axis and the risk table.

    The interval grows with the time range (1, 2, 5, 10 or 20) to keep
    roughly 5-10 ticks. Ticks start at 0 and run to ceil(max time),
    keeping only those at or after the earliest step.
    """
    all_times = [step.time for series in series_list for step in series.steps]
    if not all_times:
        return []

    min_time = min(all_times)
    max_time = max(all_times)
    time_range = max_time - min_time

    interval = 1
    for lower, step in _TICK_INTERVALS:
        if time_range > lower:
            interval = step
            break

    return [
        float(t)
        for t in range(0, math.ceil(max_time) + 1, interval)
        if t >= min_time
    ]


def risk_table(
    series_list: Sequence[Series],
    ticks: Sequence[float] | None = None,
) -> dict[str, list[int | None]]:
    """At-risk counts per group at each tick.

    Parameters
    ----------
    series_list : sequence of Series
    ticks : sequence of float or None
        Defaults to risk_table_ticks(series_list).

    Returns
    -------
    dict
        group label -> counts aligned with `ticks` (NO_DATA where unknown).
    """
    if ticks is None:
        ticks = risk_table_ticks(series_list)
    return {
        series.group: [get_at_risk_at_time(series, t) for t in ticks]
        for series in series_list
    }
