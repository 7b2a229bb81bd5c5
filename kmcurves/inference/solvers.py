"""
Public API for column inference.

    infer_mapping(rows) -> InferenceResult                 # heuristic only
    await resolve_mapping(rows, infer_fn) -> InferenceResult
    MappingResolver(infer_fn).resolve(rows) -> MappingResolution

resolve_mapping() is the heuristic -> collaborator -> degraded heuristic
-> empty decision flow. It never raises for data problems or collaborator
failures; the outcome is always encoded in the returned InferenceResult.
"""

from __future__ import annotations

import asyncio
import inspect
import warnings
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Union

from kmcurves.core.defaults import DEFAULTS
from kmcurves.core.validation import check_fraction, check_positive_int, check_rows
from kmcurves.inference._common import (
    CollaboratorReply,
    InferenceResult,
    MappingResolution,
)
from kmcurves.inference._heuristic import infer_mapping_fit

InferFn = Callable[[Sequence[Any]], Union[Awaitable[Any], Any]]


def infer_mapping(rows) -> InferenceResult:
    """Heuristic column inference.

    Parameters
    ----------
    rows : sequence of mappings or pandas.DataFrame
        Tabular rows with unknown column names.

    Returns
    -------
    InferenceResult
        `mapping=None, confidence=0.0` when no time column, or no event /
        survival column, can be identified.
    """
    rows = check_rows(rows)
    return infer_mapping_fit(rows)


async def resolve_mapping(
    rows,
    infer_fn: InferFn | None = None,
    *,
    threshold: float = DEFAULTS.accept_threshold,
    sample_size: int = DEFAULTS.llm_sample_size,
    timeout: float | None = None,
) -> InferenceResult:
    """Resolve a column mapping, consulting the collaborator when unsure.

    Parameters
    ----------
    rows : sequence of mappings or pandas.DataFrame
        Tabular rows with unknown column names.
    infer_fn : callable or None
        External inference collaborator. Called with at most
        `sample_size` rows; may be sync or async and may return a
        CollaboratorReply, an InferenceResult, the JSON wire dict, or
        None. None skips the collaborator entirely.
    threshold : float
        Heuristic confidence at or above which the collaborator is not
        consulted.
    sample_size : int
        Maximum rows sent to the collaborator.
    timeout : float or None
        Upper bound in seconds on the collaborator call. A timeout is
        handled like any other collaborator failure.

    Returns
    -------
    InferenceResult
        `used_llm=True` when the collaborator's mapping was accepted.
    """
    check_fraction(threshold, "threshold")
    check_positive_int(sample_size, "sample_size")
    rows = check_rows(rows)

    heuristic = infer_mapping_fit(rows)
    if heuristic.mapping is not None and heuristic.confidence >= threshold:
        return heuristic

    reply = None
    if infer_fn is not None and len(rows) > 0:
        reply = await _call_collaborator(infer_fn, rows[:sample_size], timeout)

    if reply is not None and reply.mapping is not None:
        if reply.confidence is not None:
            confidence = reply.confidence
        elif heuristic.mapping is not None:
            confidence = heuristic.confidence
        else:
            confidence = DEFAULTS.confidence_collaborator_fallback
        return InferenceResult(
            mapping=reply.mapping,
            confidence=confidence,
            reasoning=reply.reasoning,
            used_llm=True,
        )

    if heuristic.mapping is not None:
        return heuristic

    return InferenceResult.empty(heuristic.reasoning)


async def _call_collaborator(
    infer_fn: InferFn,
    sample: list[Any],
    timeout: float | None,
) -> CollaboratorReply | None:
    try:
        outcome = infer_fn(sample)
        if inspect.isawaitable(outcome):
            outcome = await asyncio.wait_for(outcome, timeout)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        warnings.warn(
            f"Column inference service unavailable ({type(e).__name__}: {e}); "
            f"falling back to heuristic mapping",
            RuntimeWarning,
            stacklevel=3,
        )
        return None

    reply = CollaboratorReply.coerce(outcome)
    if reply is None and outcome is not None:
        warnings.warn(
            f"Column inference service returned {type(outcome).__name__}; "
            f"falling back to heuristic mapping",
            RuntimeWarning,
            stacklevel=3,
        )
    return reply


class MappingResolver:
    """Last-request-wins coordinator for overlapping resolutions.

    Each resolve() call is tagged with a fresh request id. When rows
    change while an earlier collaborator call is still in flight, the
    earlier call's MappingResolution comes back with status "stale" and
    the caller must discard it. The resolver holds only the latest
    request id; the inference functions themselves stay stateless.

    Examples
    --------
    >>> resolver = MappingResolver(ColumnInferenceClient("http://api"))
    >>> resolution = await resolver.resolve(rows)
    >>> if not resolution.is_stale:
    ...     state.mapping = resolution.result.mapping
    """

    def __init__(
        self,
        infer_fn: InferFn | None = None,
        *,
        threshold: float = DEFAULTS.accept_threshold,
        sample_size: int = DEFAULTS.llm_sample_size,
        timeout: float | None = None,
    ) -> None:
        self._infer_fn = infer_fn
        self._threshold = threshold
        self._sample_size = sample_size
        self._timeout = timeout
        self._latest_id = 0

    @property
    def latest_request_id(self) -> int:
        return self._latest_id

    def begin(self) -> int:
        """Issue a request id for the rows about to be resolved.

        Every earlier id, including ones still in flight, becomes stale.
        Pass the id to resolve() to resolve under it.
        """
        self._latest_id += 1
        return self._latest_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest_id

    async def resolve(self, rows, request_id: int | None = None) -> MappingResolution:
        """Resolve `rows` under `request_id`, or under a fresh id when None."""
        if request_id is None:
            request_id = self.begin()
        result = await resolve_mapping(
            rows,
            self._infer_fn,
            threshold=self._threshold,
            sample_size=self._sample_size,
            timeout=self._timeout,
        )
        status = "resolved" if self.is_current(request_id) else "stale"
        return MappingResolution(request_id=request_id, status=status, result=result)
