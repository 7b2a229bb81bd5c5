"""
pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def event_rows():
    """Raw per-subject records in the standardized time/status/group shape."""
    return [
        {"time": 0, "status": 1, "group": "A"},
        {"time": 5, "status": 1, "group": "A"},
        {"time": 5, "status": 0, "group": "A"},
        {"time": 10, "status": 1, "group": "A"},
    ]


@pytest.fixture
def two_arm_rows():
    """Two-arm trial with heterogeneous column naming."""
    return [
        {"Time (months)": 3, "Death": "dead", "Arm": "Drug"},
        {"Time (months)": 6, "Death": "alive", "Arm": "Drug"},
        {"Time (months)": 9, "Death": "dead", "Arm": "Drug"},
        {"Time (months)": 2, "Death": "dead", "Arm": "Placebo"},
        {"Time (months)": 4, "Death": "dead", "Arm": "Placebo"},
        {"Time (months)": 8, "Death": "alive", "Arm": "Placebo"},
    ]


@pytest.fixture
def percent_rows():
    """Precomputed survival curve points mixing proportions and percents."""
    return [
        {"month": 0, "pct": 100, "arm": "X"},
        {"month": 6, "pct": 80, "arm": "X"},
        {"month": 12, "pct": 0.55, "arm": "X"},
    ]
