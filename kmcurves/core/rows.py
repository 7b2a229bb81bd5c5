"""
Tolerant access to schema-less tabular rows.

Rows come from document extraction and from LLM-driven extraction, which
rarely agree on the exact casing or spacing of column names, and whose
cell values mix numbers, numeric strings, booleans and free text. Every
read of a row cell in kmcurves goes through get_value(), and every
numeric or boolean interpretation through parse_number() /
parse_boolean(), so that the tolerance rules live in one place.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping, Sequence
from typing import Any

_WHITESPACE = re.compile(r"\s+")
_WHITESPACE_OR_UNDERSCORE = re.compile(r"[\s_]+")
_NON_NUMERIC = re.compile(r"[^0-9eE.+\-]")
_SEPARATORS = re.compile(r"[_\-]+")
_WORD_START = re.compile(r"\b\w")

_TRUE_TOKENS = frozenset({"true", "yes", "y", "1"})
_FALSE_TOKENS = frozenset({"false", "no", "n", "0"})


def get_value(row: Any, key: str | None) -> Any:
    """
    Read a cell from a row, tolerating key formatting differences.

    Lookup order:
        1. exact key
        2. key with surrounding whitespace trimmed
        3. trimmed key with all whitespace removed
        4. trimmed key with whitespace runs replaced by underscores
        5. any row key equal to the target once spaces and underscores
           are removed and both are lower-cased

    Args:
        row: A mapping from column name to value
        key: Column name to look up

    Returns:
        The cell value, or None if the row is not a mapping, the key is
        empty, or no key matches.

    Example:
        >>> get_value({"Time_Months": 12}, "time months")
        12
    """
    if not isinstance(row, Mapping) or not key:
        return None

    if key in row:
        return row[key]

    trimmed = key.strip()
    if trimmed and trimmed in row:
        return row[trimmed]

    collapsed = _WHITESPACE.sub("", trimmed)
    if collapsed and collapsed in row:
        return row[collapsed]

    underscored = _WHITESPACE.sub("_", trimmed)
    if underscored and underscored in row:
        return row[underscored]

    target = _WHITESPACE_OR_UNDERSCORE.sub("", trimmed).lower()
    if not target:
        return None

    for candidate in row:
        if _WHITESPACE_OR_UNDERSCORE.sub("", str(candidate)).lower() == target:
            return row[candidate]

    return None


def parse_number(raw: Any) -> float | None:
    """
    Permissive numeric parser.

    Finite numbers pass through. Strings are stripped of every character
    other than digits, sign, decimal point and exponent marker before
    conversion, so "12.5 months" and "~30" both parse. Booleans are not
    numbers here.

    Returns:
        The parsed finite float, or None when the value is unparseable.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Real):
        try:
            value = float(raw)
        except (OverflowError, ValueError):
            return None
        return value if math.isfinite(value) else None
    if isinstance(raw, str):
        cleaned = _NON_NUMERIC.sub("", raw.strip())
        if not cleaned:
            return None
        try:
            value = float(cleaned)
        except ValueError:
            return None
        return value if math.isfinite(value) else None
    return None


def parse_boolean(raw: Any) -> bool | None:
    """
    Permissive boolean parser for censoring flags.

    Accepts booleans, numbers (> 0 is True) and the tokens
    true/yes/y/1 and false/no/n/0 in any case.

    Returns:
        The parsed flag, or None when the value carries no flag.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, numbers.Real):
        return bool(raw > 0) if math.isfinite(raw) else None
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return None


def ensure_percent(value: float) -> float:
    """Treat values <= 1 as proportions and scale them to percent."""
    return value * 100 if value <= 1 else value


def prettify_label(value: str) -> str:
    """Turn a column name like 'os_prob' into a display label 'Os Prob'."""
    label = _SEPARATORS.sub(" ", value)
    label = _WHITESPACE.sub(" ", label)
    label = _WORD_START.sub(lambda m: m.group(0).upper(), label).strip()
    return label or "Series"


def collect_keys(rows: Sequence[Any]) -> list[str]:
    """Union of keys across rows, in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        if isinstance(row, Mapping):
            for key in row:
                seen.setdefault(key, None)
    return list(seen)
