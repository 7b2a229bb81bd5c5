"""
Column-name keyword patterns.

All patterns are case-insensitive substring matches. A key is tested in
three forms: as given, with '_'/'-' runs turned into spaces, and with
all whitespace removed, so 'Follow-Up', 'follow_up' and 'FollowUp' all
match 'follow'.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable

TIME_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"time", r"month", r"week", r"day", r"follow",
))
WEAK_TIME_PATTERN = re.compile(r"month|week|day", re.IGNORECASE)
GROUP_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"group", r"arm", r"cohort", r"treatment", r"variant", r"strata",
))
EVENT_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"event", r"status", r"outcome", r"dead", r"death", r"failure", r"recurrence",
))
SURVIVAL_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"survival", r"surv", r"prob", r"pct", r"percent",
))
CENSOR_PATTERNS = (re.compile(r"censor", re.IGNORECASE),)

_SEPARATORS = re.compile(r"[_\-]+")
_WHITESPACE = re.compile(r"\s+")


def _key_forms(key: str) -> tuple[str, str, str]:
    normalized = _SEPARATORS.sub(" ", key.strip())
    return key, normalized, _WHITESPACE.sub("", normalized)


def matches_any(key: str, patterns: Iterable[re.Pattern]) -> bool:
    """True if any pattern matches any form of the key."""
    forms = _key_forms(key)
    return any(p.search(form) for p in patterns for form in forms)


def find_by_patterns(
    keys: Iterable[str],
    patterns: Iterable[re.Pattern],
    exclude: Collection[str] = (),
) -> str | None:
    """First key (in order) matching any pattern and not excluded."""
    patterns = tuple(patterns)
    for key in keys:
        if key in exclude:
            continue
        if matches_any(key, patterns):
            return key
    return None
