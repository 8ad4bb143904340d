"""
Unit tests for prediction-interval metrics (metrics/interval.py).
"""

from __future__ import annotations

import pytest

from fc_evaluation.metrics import (
    compute_interval_metrics,
    coverage_indicator,
    interval_widths,
    picp,
    width_summary,
)
from fc_evaluation.records import RecordSet
from fc_evaluation.utils.validation import EmptyInputError, InvalidParameterError


def test_scenario_picp_is_one(scenario_records) -> None:
    assert picp(scenario_records) == 1.0


def test_coverage_is_inclusive_at_both_bounds() -> None:
    rs = RecordSet.from_arrays(
        actual=[0.0, 2.0, 2.5, -0.1],
        median_forecast=[1.0, 1.0, 1.0, 1.0],
        lower_bound=[0.0, 0.0, 0.0, 0.0],
        upper_bound=[2.0, 2.0, 2.0, 2.0],
    )
    assert list(coverage_indicator(rs)) == [True, True, False, False]
    assert picp(rs) == 0.5


def test_inverted_bounds_never_cover_and_give_negative_width() -> None:
    rs = RecordSet.from_arrays(
        actual=[1.0],
        median_forecast=[1.0],
        lower_bound=[2.0],
        upper_bound=[0.0],
    )
    assert picp(rs) == 0.0
    assert list(interval_widths(rs)) == [-2.0]


def test_width_summary_quartiles() -> None:
    summary = width_summary([1.0, 2.0, 3.0, 4.0, 5.0])
    assert summary.min == 1.0
    assert summary.q25 == 2.0
    assert summary.median == 3.0
    assert summary.q75 == 4.0
    assert summary.max == 5.0
    assert summary.mean == 3.0
    assert summary.n_obs == 5


def test_compute_interval_metrics_reports_gap_and_rolling_coverage() -> None:
    rs = RecordSet.from_arrays(
        actual=[1.0, 5.0, 1.0, 1.0, 5.0, 1.0],
        median_forecast=[1.0] * 6,
        lower_bound=[0.0] * 6,
        upper_bound=[2.0] * 6,
    )
    im = compute_interval_metrics(rs, window=2, target_coverage=0.8)

    assert im.picp.value == pytest.approx(4 / 6)
    assert im.target_coverage == 0.8
    assert im.coverage_gap == pytest.approx(4 / 6 - 0.8)
    assert im.window == 2
    assert im.n_obs == 6

    rolling = im.rolling_coverage.value
    assert len(rolling) == 6
    assert rolling[:2] == (None, None)
    # covered = [1, 0, 1, 1, 0, 1]
    assert rolling[2:] == (0.5, 0.5, 1.0, 0.5)

    assert im.widths.value == (2.0,) * 6
    assert im.width_summary.median == 2.0


def test_picp_in_unit_interval(baseline_records) -> None:
    value = picp(baseline_records)
    assert 0.0 <= value <= 1.0


def test_interval_metrics_errors() -> None:
    with pytest.raises(EmptyInputError):
        compute_interval_metrics(RecordSet(observations=()))

    rs = RecordSet.from_arrays(
        actual=[1.0], median_forecast=[1.0], lower_bound=[0.0], upper_bound=[2.0]
    )
    with pytest.raises(InvalidParameterError):
        compute_interval_metrics(rs, window=0)
    with pytest.raises(InvalidParameterError):
        compute_interval_metrics(rs, target_coverage=1.5)


def test_window_longer_than_series_yields_only_markers(scenario_records) -> None:
    im = compute_interval_metrics(scenario_records, window=168)
    assert im.rolling_coverage.value == (None, None, None)
