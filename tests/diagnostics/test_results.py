"""
Unit tests for portable diagnostic result artifacts (diagnostics/results.py).

These tests validate the stability of the "portable contract" layer:
- DiagnosticsReport serializes deterministically via to_dict()
- failure bookkeeping (failed_components, succeeded, ok) is consistent.

We intentionally avoid re-testing metric math here. The goal is API/contract
stability.
"""

from __future__ import annotations

import pytest

from fc_evaluation.diagnostics.results import COMPONENTS, ComponentFailure, DiagnosticsReport
from fc_evaluation.metrics.results import MetricResult
from fc_evaluation.records import ImportanceEntry


def test_empty_report_defaults() -> None:
    report = DiagnosticsReport(n_obs=0)

    assert report.ok
    assert report.failed_components == ()
    assert report.rolling_coverage is None
    assert not any(report.succeeded(c) for c in COMPONENTS)


def test_failures_are_reported_in_order() -> None:
    report = DiagnosticsReport(
        n_obs=4,
        last_forecast=MetricResult("last_forecast", 2.5, n_obs=4),
        failures=(
            ComponentFailure("point", "EmptyInputError", "no records"),
            ComponentFailure("qq", "DegenerateMetricError", "constant residuals"),
        ),
    )

    assert not report.ok
    assert report.failed_components == ("point", "qq")
    assert report.succeeded("last_forecast")
    assert not report.succeeded("point")


def test_succeeded_rejects_unknown_component() -> None:
    with pytest.raises(KeyError, match="Unknown component"):
        DiagnosticsReport(n_obs=1).succeeded("calibration")


def test_to_dict_serializes_expected_fields() -> None:
    report = DiagnosticsReport(
        n_obs=3,
        rolling_error=MetricResult("rolling_mae", (None, 0.5, 0.25), n_obs=3),
        importance=(ImportanceEntry("hour", 0.9),),
        failures=(ComponentFailure("qq", "DegenerateMetricError", "constant residuals"),),
    )

    d = report.to_dict()

    assert set(d) == {"n_obs", *COMPONENTS, "failures"}
    assert d["n_obs"] == 3
    assert d["point"] is None
    assert d["rolling_error"]["value"] == [None, 0.5, 0.25]
    assert d["rolling_error"]["status"] == "ok"
    assert d["importance"] == [{"feature_name": "hour", "importance": 0.9}]
    assert d["failures"] == [
        {
            "component": "qq",
            "error_type": "DegenerateMetricError",
            "message": "constant residuals",
        }
    ]
