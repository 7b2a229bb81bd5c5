"""
Payloads for column inference results.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from kmcurves.inference.design import ColumnMapping


@dataclass(frozen=True)
class InferenceResult:
    """Outcome of a column inference attempt.

    `mapping is None` with `confidence == 0` is the terminal
    "cannot identify columns" state, not an error.
    """

    mapping: ColumnMapping | None
    confidence: float            # in [0, 1]
    reasoning: str | None = None
    used_llm: bool = False       # True when the collaborator supplied the mapping

    @property
    def found(self) -> bool:
        return self.mapping is not None

    @classmethod
    def empty(cls, reasoning: str | None = None) -> InferenceResult:
        return cls(mapping=None, confidence=0.0, reasoning=reasoning)


def clamp_confidence(raw: Any) -> float | None:
    """Reported confidence clipped to [0, 1]; None when not a finite number."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if not math.isfinite(raw):
        return None
    return min(max(float(raw), 0.0), 1.0)


@dataclass(frozen=True)
class CollaboratorReply:
    """What the external inference service said, before acceptance.

    `confidence` is None when the service did not report one.
    """

    mapping: ColumnMapping | None
    confidence: float | None = None
    reasoning: str | None = None

    @classmethod
    def coerce(cls, value: Any) -> CollaboratorReply | None:
        """Accept a reply, an InferenceResult, the JSON wire form, or None.

        Anything else yields None (treated as "no mapping available").
        """
        if value is None:
            return None
        if isinstance(value, (cls, InferenceResult)):
            return cls(value.mapping, clamp_confidence(value.confidence), value.reasoning)
        if not isinstance(value, Mapping):
            return None

        confidence = clamp_confidence(value.get("confidence"))

        reasoning = value.get("reasoning")
        return cls(
            mapping=ColumnMapping.from_dict(value.get("mapping")),
            confidence=confidence,
            reasoning=reasoning if isinstance(reasoning, str) else None,
        )


@dataclass(frozen=True)
class MappingResolution:
    """A resolve_mapping() outcome tagged with the request that produced it.

    Callers commit `result` only when `status == "resolved"`; a "stale"
    resolution belongs to rows that have since been replaced.
    """

    request_id: int
    status: Literal["resolved", "stale"]
    result: InferenceResult

    @property
    def is_stale(self) -> bool:
        return self.status == "stale"
