"""
Heuristic column inference.

Decides which columns of an arbitrary row set hold time, group, event,
censoring and precomputed survival, and assigns a deterministic
confidence:

    fast path {time, status, group}      1.0
    event column, group found            0.8
    event column, no group               0.6
    survival column, group found         0.7
    survival column, no group            0.5
    no time column / no event or survival column -> (None, 0.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from kmcurves.core.defaults import DEFAULTS, InferenceDefaults
from kmcurves.core.rows import collect_keys, get_value, parse_number
from kmcurves.inference._common import InferenceResult
from kmcurves.inference._patterns import (
    CENSOR_PATTERNS,
    EVENT_PATTERNS,
    GROUP_PATTERNS,
    SURVIVAL_PATTERNS,
    TIME_PATTERNS,
    WEAK_TIME_PATTERN,
    find_by_patterns,
)
from kmcurves.inference.design import ColumnMapping

FAST_PATH_KEYS = ("time", "status", "group")


def infer_mapping_fit(
    rows: Sequence[Any],
    defaults: InferenceDefaults = DEFAULTS,
) -> InferenceResult:
    """Run the heuristic on already-normalized rows.

    Parameters
    ----------
    rows : sequence
        Row mappings; entries that are not mappings are ignored.
    defaults : InferenceDefaults
        Thresholds and confidence levels.

    Returns
    -------
    InferenceResult
    """
    if len(rows) == 0:
        return InferenceResult.empty("no rows")

    keys = [k for k in collect_keys(rows) if isinstance(k, str)]

    # Pre-normalized shape emitted by deterministic table extraction
    if all(k in keys for k in FAST_PATH_KEYS):
        return InferenceResult(
            mapping=ColumnMapping(time="time", event="status", group="group"),
            confidence=defaults.confidence_fast_path,
            reasoning="standardized time/status/group columns",
        )

    time_key = find_by_patterns(keys, TIME_PATTERNS)
    if time_key is None:
        time_key = next((k for k in keys if WEAK_TIME_PATTERN.search(k)), None)
    if time_key is None:
        return InferenceResult.empty("no time-like column")

    event_key = find_by_patterns(keys, EVENT_PATTERNS, exclude={time_key})
    survival_key = find_by_patterns(keys, SURVIVAL_PATTERNS, exclude={time_key})
    if event_key is None and survival_key is None:
        return InferenceResult.empty(
            f"time column {time_key!r} found but no event or survival column"
        )

    reserved = {time_key} | {k for k in (event_key, survival_key) if k is not None}
    group_key = infer_group_column(rows, keys, reserved, defaults)
    censor_key = find_by_patterns(keys, CENSOR_PATTERNS, exclude={time_key})

    notes = [f"time={time_key!r}"]
    if event_key is not None:
        mapping = ColumnMapping(
            time=time_key, group=group_key, event=event_key, censored=censor_key,
        )
        notes.append(f"event={event_key!r}")
        confidence = (
            defaults.confidence_event_with_group if group_key
            else defaults.confidence_event
        )
    else:
        mapping = ColumnMapping(
            time=time_key, group=group_key, censored=censor_key, survival=survival_key,
        )
        notes.append(f"survival={survival_key!r}")
        confidence = (
            defaults.confidence_survival_with_group if group_key
            else defaults.confidence_survival
        )

    if group_key is not None:
        notes.append(f"group={group_key!r}")
    if censor_key is not None:
        notes.append(f"censored={censor_key!r}")

    return InferenceResult(
        mapping=mapping, confidence=confidence, reasoning="; ".join(notes),
    )


def infer_group_column(
    rows: Sequence[Any],
    keys: Sequence[str],
    reserved: set[str],
    defaults: InferenceDefaults = DEFAULTS,
) -> str | None:
    """Pick the column most likely to hold arm / cohort labels.

    An explicit group-named column wins. Otherwise every unreserved
    column is scored over the first `group_scan_limit` rows:

        score = (string values - numeric values) + min(distinct, 10)

    Only columns with 2..20 distinct non-empty values qualify, and a
    column with a non-positive categorical score is kept only when it
    has at most 10 distinct values (numeric arm codes like 1/2/3).
    Ties go to the first-seen column.
    """
    explicit = find_by_patterns(keys, GROUP_PATTERNS, exclude=reserved)
    if explicit is not None:
        return explicit

    samples = rows[:defaults.group_scan_limit]
    best_key: str | None = None
    best_score: int | None = None

    for key in keys:
        if key in reserved:
            continue

        distinct: set[str] = set()
        string_count = 0
        numeric_count = 0

        for row in samples:
            raw = get_value(row, key)
            if raw is None:
                continue
            text = str(raw).strip()
            if not text:
                continue
            distinct.add(text)
            if parse_number(raw) is not None:
                numeric_count += 1
            else:
                string_count += 1

        n_distinct = len(distinct)
        if n_distinct < defaults.group_min_distinct or n_distinct > defaults.group_max_distinct:
            continue

        categorical_score = string_count - numeric_count
        if categorical_score <= 0 and n_distinct > defaults.group_low_cardinality:
            continue

        score = categorical_score + min(n_distinct, defaults.group_low_cardinality)
        if best_score is None or score > best_score:
            best_key, best_score = key, score

    return best_key
