"""
Column inference.

Public API:
    infer_mapping(rows) -> InferenceResult
    resolve_mapping(rows, infer_fn) -> InferenceResult      (async)
    MappingResolver(infer_fn).resolve(rows) -> MappingResolution  (async)
    ColumnInferenceClient(base_url)                         (async infer_fn)
    rows_from_table(table) -> list[dict]
"""

from kmcurves.inference.design import ColumnMapping
from kmcurves.inference._common import (
    CollaboratorReply,
    InferenceResult,
    MappingResolution,
)
from kmcurves.inference._client import ColumnInferenceClient
from kmcurves.inference._tables import rows_from_table
from kmcurves.inference.solvers import (
    MappingResolver,
    infer_mapping,
    resolve_mapping,
)

__all__ = [
    "ColumnMapping",
    "InferenceResult",
    "CollaboratorReply",
    "MappingResolution",
    "ColumnInferenceClient",
    "MappingResolver",
    "infer_mapping",
    "resolve_mapping",
    "rows_from_table",
]
