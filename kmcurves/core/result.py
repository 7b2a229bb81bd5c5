"""
Generic result container for kmcurves computations.

The Result class provides a standardized envelope for curve construction
results. It carries timing, warnings and provenance alongside a
domain-specific parameter payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, group counts, dropped rows)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Version stamp attached to every Result."""
    from kmcurves import __version__

    return {
        'kmcurves_version': __version__,
        'numpy_version': np.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (series, counts, etc.)
        info: Structured metadata (method, n_groups, n_dropped)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the construction path
        warnings: Non-fatal issues encountered during computation
        provenance: Library and interpreter versions

    Examples:
        >>> Result(
        ...     params=CurveParams(series=series, ...),
        ...     info={'method': 'Kaplan-Meier', 'n_groups': 2},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_km'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
