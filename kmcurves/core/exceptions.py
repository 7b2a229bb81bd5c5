"""
Exception hierarchy for kmcurves.

All exceptions inherit from KMCurvesError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Data-quality problems in rows are NOT exceptions; they are encoded
      in return values (None mappings, empty series lists, Result.warnings)
    - Exceptions are reserved for caller misuse and collaborator failures
"""


class KMCurvesError(Exception):
    """Base exception for all kmcurves errors."""
    pass


class ValidationError(KMCurvesError):
    """
    Input validation failed.

    Raised when the caller passes an argument of the wrong kind, e.g. a
    string where a sequence of row mappings is expected.
    """
    pass


class CollaboratorError(KMCurvesError):
    """
    The external column-inference service could not produce a mapping.

    Raised by the HTTP client for network errors, timeouts, non-success
    status codes and malformed bodies. resolve_mapping() catches it and
    falls back to the heuristic mapping.

    Attributes:
        status_code: HTTP status code, if a response was received
        reason: Short machine-readable cause ('status', 'network',
            'timeout', 'malformed')
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
