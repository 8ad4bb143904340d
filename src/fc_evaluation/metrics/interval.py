"""
Prediction-interval calibration metrics.

Coverage (PICP) is the fraction of actual values falling inside the forecast
interval, inclusive at both ends. Interval widths are summarized as a
distribution so downstream consumers can bucket them. The target coverage is a
caller-supplied reference; this module never derives it from the data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..records import RecordSet
from ..utils.validation import EmptyInputError, InvalidParameterError
from .results import MetricResult
from .rolling import rolling_mean

DEFAULT_COVERAGE_WINDOW = 168
DEFAULT_TARGET_COVERAGE = 0.8


@dataclass(frozen=True)
class WidthSummary:
    """Distribution summary of per-record interval widths."""

    min: float
    q25: float
    median: float
    q75: float
    max: float
    mean: float
    n_obs: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "q25": self.q25,
            "median": self.median,
            "q75": self.q75,
            "max": self.max,
            "mean": self.mean,
            "n_obs": self.n_obs,
        }


@dataclass(frozen=True)
class IntervalMetrics:
    """Coverage and width diagnostics of the forecast interval."""

    picp: MetricResult
    target_coverage: float
    coverage_gap: float
    widths: MetricResult
    width_summary: WidthSummary
    rolling_coverage: MetricResult
    window: int
    n_obs: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "picp": self.picp.to_dict(),
            "target_coverage": self.target_coverage,
            "coverage_gap": self.coverage_gap,
            "widths": self.widths.to_dict(),
            "width_summary": self.width_summary.to_dict(),
            "rolling_coverage": self.rolling_coverage.to_dict(),
            "window": self.window,
            "n_obs": self.n_obs,
        }


def coverage_indicator(records: RecordSet) -> np.ndarray:
    """Per-record boolean: ``lower_bound <= actual <= upper_bound``."""
    y = records.actual
    return (records.lower_bound <= y) & (y <= records.upper_bound)


def picp(records: RecordSet) -> float:
    """
    Prediction Interval Coverage Probability.

    Raises
    ------
    EmptyInputError
        If the RecordSet is empty.
    """
    if len(records) == 0:
        raise EmptyInputError("Cannot compute coverage on an empty RecordSet.")
    return float(np.mean(coverage_indicator(records)))


def interval_widths(records: RecordSet) -> np.ndarray:
    """Per-record ``upper_bound - lower_bound`` (negative if the bounds are inverted)."""
    return records.upper_bound - records.lower_bound


def width_summary(widths: np.ndarray) -> WidthSummary:
    """
    Summarize a width distribution (min, quartiles, max, mean).

    Raises
    ------
    EmptyInputError
        If ``widths`` is empty.
    """
    w = np.asarray(widths, dtype=float)
    if w.size == 0:
        raise EmptyInputError("Cannot summarize an empty width series.")
    q25, median, q75 = np.quantile(w, [0.25, 0.5, 0.75])
    return WidthSummary(
        min=float(w.min()),
        q25=float(q25),
        median=float(median),
        q75=float(q75),
        max=float(w.max()),
        mean=float(w.mean()),
        n_obs=int(w.size),
    )


def compute_interval_metrics(
    records: RecordSet,
    *,
    window: int = DEFAULT_COVERAGE_WINDOW,
    target_coverage: float = DEFAULT_TARGET_COVERAGE,
) -> IntervalMetrics:
    """
    Compute coverage, width distribution and rolling coverage.

    Parameters
    ----------
    records:
        Input RecordSet.
    window:
        Rolling-coverage window length in records (168 = one week of hourly data).
    target_coverage:
        Reference coverage to compare against, in [0, 1].

    Raises
    ------
    EmptyInputError
        If the RecordSet is empty.
    InvalidParameterError
        If ``window`` is not positive or ``target_coverage`` lies outside [0, 1].
    """
    if not 0.0 <= target_coverage <= 1.0:
        raise InvalidParameterError(f"target_coverage must lie in [0, 1]; got {target_coverage}.")

    coverage = picp(records)
    n = len(records)

    rolling = rolling_mean(coverage_indicator(records), window)
    widths = interval_widths(records)

    return IntervalMetrics(
        picp=MetricResult("picp", coverage, n_obs=n),
        target_coverage=float(target_coverage),
        coverage_gap=coverage - float(target_coverage),
        widths=MetricResult("interval_width", tuple(float(v) for v in widths), n_obs=n),
        width_summary=width_summary(widths),
        rolling_coverage=MetricResult("rolling_coverage", rolling, n_obs=n),
        window=int(window),
        n_obs=n,
    )
