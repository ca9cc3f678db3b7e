"""Shared fixtures for match tally tests."""

import pytest

from matchtally.models.enums import ErrorPolicy, SelfMatchPolicy
from matchtally.models.results import AggregationPolicy
from matchtally.utils.counters import UINT64_MAX

RESULTS = [
    "England,France,4,2",
    "France,Italy,3,1",
    "Poland,Spain,2,0",
    "Germany,England,2,1",
    "England,Spain,1,0",
]

EXPECTED_TOTALS = {
    "England": (6, 4),
    "France": (5, 5),
    "Germany": (2, 1),
    "Italy": (1, 3),
    "Poland": (2, 0),
    "Spain": (0, 3),
}


@pytest.fixture
def results():
    """The reference five-match input, one record per line."""
    return list(RESULTS)


@pytest.fixture
def expected_totals():
    """Team -> (goals scored, goals conceded) for the reference input."""
    return dict(EXPECTED_TOTALS)


@pytest.fixture
def fail_fast_policy():
    return AggregationPolicy(
        on_error=ErrorPolicy.FAIL_FAST,
        self_match=SelfMatchPolicy.ACCEPT,
        counter_max=UINT64_MAX,
    )


@pytest.fixture
def permissive_policy():
    return AggregationPolicy(
        on_error=ErrorPolicy.SKIP_AND_COLLECT,
        self_match=SelfMatchPolicy.ACCEPT,
        counter_max=UINT64_MAX,
    )
