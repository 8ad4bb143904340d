"""
Shared fixtures for fc-evaluation tests.

Provides small, hand-checkable RecordSets:
- ``scenario_records``: three records with a fully covering interval.
- ``baseline_records``: eight records with three baseline columns, one of
  them a random-walk style baseline.
"""

from __future__ import annotations

import pytest

from fc_evaluation.records import RecordSet


@pytest.fixture
def scenario_records() -> RecordSet:
    # actual=(1, 2, 5), pred=(1, 3, 4), lo=(0, 1, 3), hi=(2, 4, 6)
    return RecordSet.from_arrays(
        actual=[1.0, 2.0, 5.0],
        median_forecast=[1.0, 3.0, 4.0],
        lower_bound=[0.0, 1.0, 3.0],
        upper_bound=[2.0, 4.0, 6.0],
        timestamps=["2024-01-01 00:00", "2024-01-01 01:00", "2024-01-01 02:00"],
    )


@pytest.fixture
def baseline_records() -> RecordSet:
    actual = [1.0, 2.0, 3.0, 2.0, 4.0, 5.0, 4.0, 6.0]
    # Primary forecast: off by 0.5 everywhere -> MAE 0.5
    median = [a + 0.5 for a in actual]
    # Random walk: previous actual (first value repeated) -> larger errors
    random_walk = [1.0] + actual[:-1]
    # Historical mean of the series -> worst
    hist_mean = [sum(actual) / len(actual)] * len(actual)
    # Near-perfect baseline -> best
    ridge = [a - 0.1 for a in actual]
    return RecordSet.from_arrays(
        actual=actual,
        median_forecast=median,
        lower_bound=[a - 1.0 for a in median],
        upper_bound=[a + 1.0 for a in median],
        baselines={
            "Random Walk": random_walk,
            "Historical Mean": hist_mean,
            "Ridge Regression": ridge,
        },
    )
