"""
Designs: immutable per-subject arrays parsed from rows and a mapping.

EventDesign holds raw per-subject records (time, event indicator, group).
PercentDesign holds precomputed curve points (time, survival %, group,
censor flag). Both are built row by row with the tolerant parsers from
kmcurves.core.rows; rows whose time (or survival) cannot be parsed are
dropped and counted, never raised on. Downstream code trusts the arrays.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from kmcurves.core.defaults import DEFAULT_GROUP_LABEL
from kmcurves.core.rows import (
    ensure_percent,
    get_value,
    parse_boolean,
    parse_number,
    prettify_label,
)
from kmcurves.inference.design import ColumnMapping

EVENT_TOKENS = frozenset({
    "true", "yes", "y", "event", "dead", "death", "failed", "failure", "1",
})
CENSORED_TOKENS = frozenset({
    "false", "no", "n", "censored", "censor", "alive", "survived", "0",
})

# Consulted, in order, when the mapping names no censor column
_FALLBACK_CENSOR_KEYS = ("censored", "censor")


def parse_event(raw: Any) -> bool:
    """Event indicator for one subject.

    Numbers: > 0 is an event. Strings: matched against the event and
    censored vocabularies. Anything else, including a missing value,
    counts as an event.
    """
    if raw is None:
        return True

    number = parse_number(raw)
    if number is not None:
        return number > 0

    token = str(raw).strip().lower()
    if token in EVENT_TOKENS:
        return True
    if token in CENSORED_TOKENS:
        return False
    return True


def _censor_flag(row: Mapping[str, Any], censor_key: str | None) -> bool | None:
    if censor_key is not None:
        return parse_boolean(get_value(row, censor_key))
    for key in _FALLBACK_CENSOR_KEYS:
        raw = get_value(row, key)
        if raw is not None:
            return parse_boolean(raw)
    return None


def _group_label(row: Mapping[str, Any], group_key: str | None, default: str) -> str:
    raw = get_value(row, group_key) if group_key else None
    return str(raw) if raw is not None else default


@dataclass(frozen=True)
class EventDesign:
    """Per-subject event records.

    Parameters
    ----------
    time : NDArray
        (n,) float64 time of event or censoring.
    event : NDArray
        (n,) bool, True when the subject counts as an event.
    group : NDArray
        (n,) object array of group labels.
    group_order : tuple of str
        Distinct labels in first-seen order.
    n_rows : int
        Rows received, including dropped ones.
    """

    time: NDArray
    event: NDArray
    group: NDArray
    group_order: tuple[str, ...]
    n_rows: int

    @classmethod
    def from_rows(cls, rows: Sequence[Any], mapping: ColumnMapping) -> EventDesign:
        """Parse event records.

        A subject is an event when its event value says so (or is
        absent) and no censoring flag overrides it. The censoring flag
        comes from `mapping.censored`, or from a 'censored' / 'censor'
        column when the mapping names none.
        """
        times: list[float] = []
        events: list[bool] = []
        groups: list[str] = []

        for row in rows:
            if not isinstance(row, Mapping):
                continue
            time = parse_number(get_value(row, mapping.time))
            if time is None:
                continue

            is_event = parse_event(get_value(row, mapping.event) if mapping.event else None)
            censored = _censor_flag(row, mapping.censored)
            if censored is None:
                censored = not is_event

            times.append(time)
            events.append(is_event and not censored)
            groups.append(_group_label(row, mapping.group, DEFAULT_GROUP_LABEL))

        return cls(
            time=np.asarray(times, dtype=np.float64),
            event=np.asarray(events, dtype=bool),
            group=np.asarray(groups, dtype=object),
            group_order=tuple(dict.fromkeys(groups)),
            n_rows=len(rows),
        )

    @property
    def n(self) -> int:
        """Number of subjects with a parseable time."""
        return len(self.time)

    @property
    def n_dropped(self) -> int:
        return self.n_rows - self.n

    @property
    def n_events(self) -> int:
        return int(np.sum(self.event))

    def iter_groups(self) -> Iterator[tuple[str, NDArray, NDArray]]:
        """Yield (label, time, event) per group in first-seen order."""
        for label in self.group_order:
            mask = self.group == label
            yield label, self.time[mask], self.event[mask]


@dataclass(frozen=True)
class PercentDesign:
    """Precomputed survival points.

    Parameters
    ----------
    time : NDArray
        (n,) float64 time of each point.
    survival : NDArray
        (n,) float64 survival in percent (proportions already scaled).
    censored : NDArray
        (n,) bool censor-mark flag per point.
    group : NDArray
        (n,) object array of group labels.
    group_order : tuple of str
        Distinct labels in first-seen order.
    n_rows : int
        Rows received, including dropped ones.
    """

    time: NDArray
    survival: NDArray
    censored: NDArray
    group: NDArray
    group_order: tuple[str, ...]
    n_rows: int

    @classmethod
    def from_rows(cls, rows: Sequence[Any], mapping: ColumnMapping) -> PercentDesign:
        """Parse curve points; rows without a time or survival value are dropped.

        Without a group column, points are labelled with the prettified
        survival column name.
        """
        default_group = prettify_label(mapping.survival or "")
        times: list[float] = []
        values: list[float] = []
        flags: list[bool] = []
        groups: list[str] = []

        for row in rows:
            if not isinstance(row, Mapping):
                continue
            time = parse_number(get_value(row, mapping.time))
            survival = parse_number(get_value(row, mapping.survival))
            if time is None or survival is None:
                continue

            censored = parse_boolean(
                get_value(row, mapping.censored or _FALLBACK_CENSOR_KEYS[0])
            )

            times.append(time)
            values.append(ensure_percent(survival))
            flags.append(bool(censored))
            groups.append(_group_label(row, mapping.group, default_group))

        return cls(
            time=np.asarray(times, dtype=np.float64),
            survival=np.asarray(values, dtype=np.float64),
            censored=np.asarray(flags, dtype=bool),
            group=np.asarray(groups, dtype=object),
            group_order=tuple(dict.fromkeys(groups)),
            n_rows=len(rows),
        )

    @property
    def n(self) -> int:
        return len(self.time)

    @property
    def n_dropped(self) -> int:
        return self.n_rows - self.n

    def iter_groups(self) -> Iterator[tuple[str, NDArray, NDArray, NDArray]]:
        """Yield (label, time, survival, censored) per group in first-seen order."""
        for label in self.group_order:
            mask = self.group == label
            yield label, self.time[mask], self.survival[mask], self.censored[mask]
