"""
Input validation utilities for kmcurves.

Only caller misuse is rejected here (wrong argument kinds, out-of-range
tuning knobs). Messy cell values are NOT validation failures: the
inference and survival code tolerates them row by row.

Design principles:
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from kmcurves.core.exceptions import ValidationError


def check_rows(rows: Any, name: str = "rows") -> list[Any]:
    """
    Normalize a row collection to a list.

    Accepts any sequence of mappings, or a pandas DataFrame (converted to
    records with missing cells as None). None is treated as no rows.
    Individual non-mapping entries are kept; downstream code skips them.

    Args:
        rows: Row collection to validate
        name: Parameter name for error messages

    Returns:
        list of rows

    Raises:
        ValidationError: If rows is a string, a single mapping, or not a
            sequence at all
    """
    if rows is None:
        return []

    if hasattr(rows, "to_dict") and hasattr(rows, "columns"):
        frame = rows.astype(object).where(rows.notna(), None)
        return frame.to_dict(orient="records")

    if isinstance(rows, (str, bytes)):
        raise ValidationError(
            f"{name}: expected a sequence of row mappings, got {type(rows).__name__}"
        )

    if isinstance(rows, Mapping):
        raise ValidationError(
            f"{name}: expected a sequence of row mappings, got a single mapping"
        )

    if not isinstance(rows, Sequence):
        try:
            return list(rows)
        except TypeError as e:
            raise ValidationError(
                f"{name}: expected a sequence of row mappings, "
                f"got {type(rows).__name__}"
            ) from e

    return list(rows)


def check_fraction(value: float, name: str) -> None:
    """
    Verify a value lies in [0, 1].

    Raises:
        ValidationError: If value is outside [0, 1]
    """
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{name}: must be in [0, 1], got {value}")


def check_positive_int(value: int, name: str) -> None:
    """
    Verify a value is a positive integer.

    Raises:
        ValidationError: If value is not an int >= 1
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{name}: must be a positive integer, got {value!r}")
