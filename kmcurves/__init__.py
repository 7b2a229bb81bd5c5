"""
kmcurves: Kaplan-Meier curves from schema-less clinical tables.

Turns rows of unknown shape into publication-ready survival curves:
infer which columns hold time, group, event, censoring or precomputed
survival, then build per-group product-limit step functions with
censor marks and number-at-risk tables.

Submodules:
    inference: Column role inference (heuristic + external service)
    survival: Survival curve construction and risk tables
"""

__version__ = "0.1.0"

from kmcurves import inference
from kmcurves import survival
from kmcurves.core.rows import get_value
from kmcurves.inference import (
    ColumnMapping,
    InferenceResult,
    infer_mapping,
    resolve_mapping,
)
from kmcurves.survival import build_series, get_at_risk_at_time

__all__ = [
    "__version__",
    "inference",
    "survival",
    "ColumnMapping",
    "InferenceResult",
    "infer_mapping",
    "resolve_mapping",
    "build_series",
    "get_at_risk_at_time",
    "get_value",
]
