"""
Payloads for survival curve construction.

Every dataclass here is frozen; each build produces new instances.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class SurvivalStep:
    """One point on a group's step function."""

    time: float
    survival: float              # percent, 0-100
    at_risk: int | None = None   # at risk just before `time`; None for precomputed curves


@dataclass(frozen=True)
class CensoredPoint:
    """Censoring tick mark, drawn at the curve height at `time`."""

    time: float
    survival: float


@dataclass(frozen=True)
class Series:
    """Survival curve for one group.

    `steps` is ordered by time and starts at (0, 100). `at_risk` maps
    each recorded time to the number at risk just before it; it is
    empty for curves built from precomputed survival values.
    """

    group: str
    steps: tuple[SurvivalStep, ...]
    censored: tuple[CensoredPoint, ...]
    at_risk: Mapping[float, int]

    @property
    def times(self) -> list[float]:
        return [step.time for step in self.steps]

    @property
    def survival(self) -> list[float]:
        return [step.survival for step in self.steps]

    @property
    def n_at_start(self) -> int | None:
        """At-risk count of the initial step, if known."""
        return self.steps[0].at_risk if self.steps else None

    @property
    def median_survival(self) -> float | None:
        """Smallest step time where survival <= 50%, else None."""
        for step in self.steps:
            if step.survival <= 50.0:
                return step.time
        return None


@dataclass(frozen=True)
class CurveParams:
    """Curve construction payload carried inside a Result."""

    series: tuple[Series, ...]
    mode: str                    # "event" or "survival"
    n_rows: int                  # rows received
    n_used: int                  # rows contributing to a curve
    n_dropped: int               # rows dropped for unparseable values
