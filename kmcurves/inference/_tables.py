"""
Deterministic standardisation of extracted tables.

Document extraction yields tables as lists of cell lists with a header
row somewhere near the top. When a header row names both a time and an
event column, the table is rewritten into rows of the pre-normalized
shape {"time", "status", "group"} that infer_mapping() accepts on its
fast path with confidence 1.0.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from kmcurves.core.defaults import DEFAULT_TABLE_GROUP

HEADER_SCAN_ROWS = 5
GROUP_SCAN_ROWS = 10

_TIME_HEADER = re.compile(r"time|month|week|day|duration")
_DATE_HEADER = re.compile(r"date")
_EVENT_HEADER = re.compile(r"event|status|outcome|death|dead|failure|recurrence")
_GROUP_HEADER = re.compile(r"group|arm|cohort|treatment|variant")

_EVENT_TOKENS = frozenset({
    "1", "yes", "y", "true", "event", "dead", "death", "failed", "failure",
})


def _is_numeric_text(value: str) -> bool:
    try:
        float(value.strip())
    except ValueError:
        return False
    return bool(value.strip())


def _find_header(rows: Sequence[Any]) -> tuple[int, int, int, list[int]] | None:
    for i, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        if not isinstance(row, (list, tuple)):
            continue
        headers = [str(h).lower().strip() for h in row]

        time_idx = next(
            (j for j, h in enumerate(headers)
             if _TIME_HEADER.search(h) and not _DATE_HEADER.search(h)),
            -1,
        )
        event_idx = next(
            (j for j, h in enumerate(headers) if _EVENT_HEADER.search(h)), -1,
        )
        if time_idx != -1 and event_idx != -1:
            groups = [j for j, h in enumerate(headers) if _GROUP_HEADER.search(h)]
            return i, time_idx, event_idx, groups
    return None


def _pick_group_column(rows: Sequence[Any], header_idx: int, candidates: list[int]) -> int:
    """Prefer a candidate whose first data cells are text rather than numbers."""
    best_idx = -1
    best_score = -1
    data = rows[header_idx + 1:header_idx + 1 + GROUP_SCAN_ROWS]

    for idx in candidates:
        text_count = 0
        numeric_count = 0
        for row in data:
            if not isinstance(row, (list, tuple)) or idx >= len(row):
                continue
            value = row[idx]
            if isinstance(value, str) and not _is_numeric_text(value):
                text_count += 1
            elif isinstance(value, (int, float, str)):
                numeric_count += 1
        score = 2 if text_count > numeric_count else 1
        if score > best_score:
            best_idx, best_score = idx, score

    return best_idx


def _parse_time(value: Any) -> float | None:
    # Accept a comma as the decimal separator
    text = str(value).replace(",", ".", 1).strip()
    match = re.match(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", text)
    if match is None:
        return None
    return float(match.group(0))


def _parse_status(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return 1 if value > 0 else 0
    if isinstance(value, str) and value.lower().strip() in _EVENT_TOKENS:
        return 1
    return 0


def rows_from_table(table: Sequence[Any]) -> list[dict[str, Any]]:
    """Standardise an extracted table into time/status/group rows.

    Parameters
    ----------
    table : sequence of sequences
        Cell rows; a header row must appear within the first 5 rows.

    Returns
    -------
    list of dict
        One {"time", "status", "group"} row per data row with a
        parseable time. Empty when no usable header row exists.

    Examples
    --------
    >>> rows_from_table([
    ...     ["Patient", "Time (months)", "Status", "Arm"],
    ...     [1, "12,5", "dead", "Drug"],
    ...     [2, 30, 0, "Placebo"],
    ... ])
    [{'time': 12.5, 'status': 1, 'group': 'Drug'}, {'time': 30.0, 'status': 0, 'group': 'Placebo'}]
    """
    if not isinstance(table, Sequence) or len(table) < 2:
        return []

    header = _find_header(table)
    if header is None:
        return []
    header_idx, time_idx, event_idx, group_candidates = header
    group_idx = _pick_group_column(table, header_idx, group_candidates)

    out: list[dict[str, Any]] = []
    for row in table[header_idx + 1:]:
        if not isinstance(row, (list, tuple)) or time_idx >= len(row):
            continue
        time = _parse_time(row[time_idx])
        if time is None:
            continue

        status = _parse_status(row[event_idx]) if event_idx < len(row) else 0

        group = DEFAULT_TABLE_GROUP
        if group_idx != -1 and group_idx < len(row) and row[group_idx] is not None:
            group = str(row[group_idx]).strip()

        out.append({"time": time, "status": status, "group": group})

    return out
