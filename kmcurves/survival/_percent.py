"""
Survival curve from precomputed survival percentages.

No subject counts are available on this path, so the curve carries no
at-risk information; the points are taken as given apart from forcing
100% at time zero.
"""

from __future__ import annotations

from types import MappingProxyType

import numpy as np
from numpy.typing import NDArray

from kmcurves.core.defaults import INITIAL_SURVIVAL
from kmcurves.survival._common import CensoredPoint, Series, SurvivalStep


def percent_series(
    group: str,
    time: NDArray,
    survival: NDArray,
    censored: NDArray,
) -> Series:
    """Order one group's points by time and anchor the curve at (0, 100).

    If a point exists at time zero its survival is overwritten with 100;
    otherwise a synthetic (0, 100) point is prepended.
    """
    # Stable sort keeps input order among tied times
    order = np.argsort(time, kind="stable")
    steps = [
        SurvivalStep(time=t, survival=s)
        for t, s in zip(time[order].tolist(), survival[order].tolist())
    ]

    if not steps or steps[0].time != 0:
        steps.insert(0, SurvivalStep(time=0.0, survival=INITIAL_SURVIVAL))
    else:
        steps[0] = SurvivalStep(time=steps[0].time, survival=INITIAL_SURVIVAL)

    marks = [
        CensoredPoint(time=t, survival=s)
        for t, s in zip(time[order][censored[order]].tolist(),
                        survival[order][censored[order]].tolist())
    ]

    return Series(
        group=group,
        steps=tuple(steps),
        censored=tuple(marks),
        at_risk=MappingProxyType({}),
    )
