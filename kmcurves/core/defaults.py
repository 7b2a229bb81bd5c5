"""
Tuned constants for column inference and curve construction.

The cardinality bounds and confidence levels were tuned empirically
against extracted trial tables. Change them only together with the
inference tests that pin current behaviour.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InferenceDefaults:
    """Thresholds used by the heuristic and by resolve_mapping()."""
    accept_threshold: float
    llm_sample_size: int
    group_scan_limit: int
    group_min_distinct: int
    group_max_distinct: int
    group_low_cardinality: int
    confidence_fast_path: float
    confidence_event_with_group: float
    confidence_event: float
    confidence_survival_with_group: float
    confidence_survival: float
    confidence_collaborator_fallback: float


DEFAULTS = InferenceDefaults(
    accept_threshold=0.75,
    llm_sample_size=25,
    group_scan_limit=50,
    group_min_distinct=2,
    group_max_distinct=20,
    group_low_cardinality=10,
    confidence_fast_path=1.0,
    confidence_event_with_group=0.8,
    confidence_event=0.6,
    confidence_survival_with_group=0.7,
    confidence_survival=0.5,
    confidence_collaborator_fallback=0.5,
)

# Survival starts at 100% at time zero
INITIAL_SURVIVAL = 100.0

# Label used when an event-shaped mapping has no group column
DEFAULT_GROUP_LABEL = "Group"

# Label used by the table standardiser when no group column is present
DEFAULT_TABLE_GROUP = "All Patients"

# Default network timeout for the column-inference service, in seconds
COLLABORATOR_TIMEOUT = 10.0

COLLABORATOR_PATH = "/api/kaplan/infer-columns"
