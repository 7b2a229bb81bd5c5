"""
Wall-clock timing for curve construction.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Timer for one construction call, with accumulating named sections.

    Used as a context manager around the whole call. Sections entered
    more than once (one 'build_curves' per group, say) add up, and the
    number of entries is reported alongside.

    Usage:
        with Timer() as timer:
            with timer.section('parse_rows'):
                design = EventDesign.from_rows(rows, mapping)
            for label, time, event in design.iter_groups():
                with timer.section('build_curves'):
                    series.append(product_limit_series(label, time, event))

        timer.result()
        # {'total_seconds': 0.002, 'parse_rows': 0.001,
        #  'build_curves': 0.001, 'build_curves_calls': 2}
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._calls: dict[str, int] = {}
        self._started_at: float | None = None
        self._total: float | None = None

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def start(self) -> None:
        self._started_at = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started_at

    @property
    def total_seconds(self) -> float | None:
        """Elapsed time of the whole call, or None while still running."""
        return self._total

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time a named section; repeated entries accumulate."""
        began = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + (time.perf_counter() - began)
            self._calls[name] = self._calls.get(name, 0) + 1

    def result(self) -> dict[str, float]:
        """
        Timing breakdown.

        Returns:
            'total_seconds', each section's seconds, and a '<name>_calls'
            count for every section entered more than once

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        breakdown = {'total_seconds': self._total}
        for name, seconds in self._sections.items():
            breakdown[name] = seconds
            if self._calls[name] > 1:
                breakdown[f'{name}_calls'] = self._calls[name]
        return breakdown
