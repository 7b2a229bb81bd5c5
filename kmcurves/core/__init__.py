"""
Core infrastructure for kmcurves.

This module provides shared abstractions and utilities used by the
inference and survival subpackages.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    rows: Tolerant row access and permissive parsers
    validation: Input validators
    defaults: Tuned thresholds
    compute: Timing
"""

from kmcurves.core.result import Result
from kmcurves.core.exceptions import (
    KMCurvesError,
    ValidationError,
    CollaboratorError,
)
from kmcurves.core.rows import get_value, parse_number, parse_boolean

__all__ = [
    # Result
    "Result",
    # Exceptions
    "KMCurvesError",
    "ValidationError",
    "CollaboratorError",
    # Row access
    "get_value",
    "parse_number",
    "parse_boolean",
]
