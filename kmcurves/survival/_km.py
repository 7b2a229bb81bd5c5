"""
Kaplan-Meier product-limit curve for one group.

    S(t) = 100 * prod_{t_j <= t} (n_j - d_j) / n_j

where n_j is the number at risk just before t_j and d_j the number of
events at t_j. Censoring at t_j does not move S(t_j); censored subjects
leave the risk set after t_j, and their tick marks sit at the
post-event height S(t_j).

References:
    Kaplan, E. L., & Meier, P. (1958). Nonparametric estimation from
        incomplete observations. JASA, 53(282), 457-481.
"""

from __future__ import annotations

from types import MappingProxyType

import numpy as np
from numpy.typing import NDArray

from kmcurves.core.defaults import INITIAL_SURVIVAL
from kmcurves.survival._common import CensoredPoint, Series, SurvivalStep


def product_limit_series(group: str, time: NDArray, event: NDArray) -> Series:
    """Build one group's step function, censor marks and at-risk map.

    Parameters
    ----------
    group : str
        Group label.
    time : NDArray
        (n,) times of event or censoring.
    event : NDArray
        (n,) bool event indicators.

    Returns
    -------
    Series
        Steps seeded with (0, 100, n). Once the risk set is exhausted,
        later times still get an at-risk entry (0) but no step.
    """
    n_total = len(time)

    # Tally events and censorings per distinct time, ascending
    unique_times, inverse = np.unique(time, return_inverse=True)
    n_events = np.bincount(inverse, weights=event.astype(np.float64),
                           minlength=len(unique_times)).astype(int)
    n_censored = np.bincount(inverse, weights=(~event).astype(np.float64),
                             minlength=len(unique_times)).astype(int)

    survival = INITIAL_SURVIVAL
    n_at_risk = n_total
    steps = [SurvivalStep(time=0.0, survival=survival, at_risk=n_total)]
    marks: list[CensoredPoint] = []
    at_risk = {0.0: n_total}

    for t_j, d_j, c_j in zip(unique_times.tolist(), n_events.tolist(), n_censored.tolist()):
        # At risk just before t_j
        at_risk[t_j] = n_at_risk
        if n_at_risk <= 0:
            continue

        if d_j > 0:
            survival *= (n_at_risk - d_j) / n_at_risk

        steps.append(SurvivalStep(time=t_j, survival=survival, at_risk=n_at_risk))
        marks.extend(CensoredPoint(time=t_j, survival=survival) for _ in range(c_j))

        n_at_risk -= d_j + c_j

    return Series(
        group=group,
        steps=tuple(steps),
        censored=tuple(marks),
        at_risk=MappingProxyType(at_risk),
    )
