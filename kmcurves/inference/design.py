"""
ColumnMapping: which row columns play which survival role.

A mapping names columns; it never holds data. `time` is mandatory.
Exactly one of `event` (raw per-subject records) or `survival`
(precomputed survival percentages) is expected for a usable mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from kmcurves.core.exceptions import ValidationError


@dataclass(frozen=True)
class ColumnMapping:
    """Immutable column-role assignment.

    Parameters
    ----------
    time : str
        Column holding time to event / censoring, or the time axis of a
        precomputed curve.
    group : str or None
        Column holding the arm / cohort label.
    event : str or None
        Column holding the event indicator.
    censored : str or None
        Column holding an explicit censoring flag.
    survival : str or None
        Column holding precomputed survival (proportion or percent).
    """

    time: str
    group: str | None = None
    event: str | None = None
    censored: str | None = None
    survival: str | None = None

    @property
    def is_event_based(self) -> bool:
        """True when built from raw per-subject records."""
        return self.event is not None

    @property
    def is_survival_based(self) -> bool:
        """True when built from precomputed survival values."""
        return self.event is None and self.survival is not None

    def to_dict(self) -> dict[str, str]:
        """Wire form: role -> column name, unset roles omitted."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, payload: Any) -> ColumnMapping | None:
        """Build from the wire form.

        Returns None when the payload is not a mapping or carries no
        non-empty string `time`. Roles that are not non-empty strings
        are dropped.
        """
        if not isinstance(payload, Mapping):
            return None

        roles: dict[str, str] = {}
        for f in fields(cls):
            value = payload.get(f.name)
            if isinstance(value, str) and value.strip():
                roles[f.name] = value

        if "time" not in roles:
            return None
        return cls(**roles)

    @classmethod
    def coerce(cls, value: Any) -> ColumnMapping | None:
        """Accept a ColumnMapping, its wire form, or None.

        Raises
        ------
        ValidationError
            If value is neither a ColumnMapping, a mapping, nor None.
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise ValidationError(
            f"mapping: expected ColumnMapping or dict, got {type(value).__name__}"
        )
