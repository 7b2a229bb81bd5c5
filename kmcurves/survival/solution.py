"""
Solution wrapper for survival curve construction.

Wraps a Result[CurveParams] and exposes user-friendly properties with a
summary() table.
"""

from __future__ import annotations

from kmcurves.core.result import Result
from kmcurves.survival._common import CurveParams, Series
from kmcurves.survival._risk import format_at_risk, risk_table, risk_table_ticks


class CurveSolution:
    """Per-group survival curves ready for plotting."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[CurveParams]) -> None:
        self._result = _result

    # -- Properties delegating to CurveParams --

    @property
    def series(self) -> list[Series]:
        """One Series per group, in first-seen order."""
        return list(self._result.params.series)

    @property
    def groups(self) -> list[str]:
        return [s.group for s in self._result.params.series]

    @property
    def mode(self) -> str:
        """'event' (product-limit) or 'survival' (precomputed)."""
        return self._result.params.mode

    @property
    def is_empty(self) -> bool:
        """True when nothing can be rendered ("no data available")."""
        return len(self._result.params.series) == 0

    @property
    def n_rows(self) -> int:
        return self._result.params.n_rows

    @property
    def n_used(self) -> int:
        return self._result.params.n_used

    @property
    def n_dropped(self) -> int:
        return self._result.params.n_dropped

    @property
    def median_survival(self) -> dict[str, float | None]:
        """Median survival time per group (None if never reached)."""
        return {s.group: s.median_survival for s in self._result.params.series}

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def info(self):
        return self._result.info

    def risk_table(self, ticks=None) -> dict[str, list[int | None]]:
        """At-risk counts per group at each tick (see risk_table_ticks())."""
        return risk_table(self._result.params.series, ticks)

    def summary(self) -> str:
        """Tabular summary of the curves and the risk table."""
        lines = []
        lines.append("Call: kaplan_meier_curves()")
        lines.append("")
        lines.append(
            f"  rows={self.n_rows}, used={self.n_used}, "
            f"dropped={self.n_dropped}, mode={self.mode}"
        )
        lines.append("")

        if self.is_empty:
            lines.append("  No data available")
            lines.extend(f"  Warning: {w}" for w in self.warnings)
            return "\n".join(lines)

        lines.append(f"  {'group':>12s}  {'steps':>6s}  {'censored':>8s}  {'median':>8s}")
        for s in self._result.params.series:
            median = s.median_survival
            median_str = f"{median:.4g}" if median is not None else "NA"
            lines.append(
                f"  {s.group:>12.12s}  {len(s.steps):6d}  "
                f"{len(s.censored):8d}  {median_str:>8s}"
            )

        ticks = risk_table_ticks(self._result.params.series)
        if ticks:
            lines.append("")
            lines.append("  Number at risk")
            lines.append(
                f"  {'time':>12s}  " + "  ".join(f"{t:>6.4g}" for t in ticks)
            )
            for group, counts in self.risk_table(ticks).items():
                lines.append(
                    f"  {group:>12.12s}  "
                    + "  ".join(f"{format_at_risk(c):>6s}" for c in counts)
                )

        for w in self.warnings:
            lines.append(f"  Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CurveSolution(groups={len(self._result.params.series)}, "
            f"mode={self.mode}, dropped={self.n_dropped})"
        )
