"""
Accuracy and calibration metrics over a RecordSet.

Exports:
- Scalar metrics: mae, rmse, r_squared, directional_accuracy, picp.
- Component entrypoints: compute_point_metrics, compute_interval_metrics.
- Series helpers: rolling_mean, cumulative_error.
- Result containers: MetricResult, MetricStatus, PointMetrics,
  IntervalMetrics, WidthSummary.
"""

from .interval import (
    IntervalMetrics,
    WidthSummary,
    compute_interval_metrics,
    coverage_indicator,
    interval_widths,
    picp,
    width_summary,
)
from .point import (
    PointMetrics,
    compute_point_metrics,
    directional_accuracy,
    mae,
    r_squared,
    rmse,
    scored_pairs,
)
from .results import MetricResult, MetricStatus
from .rolling import cumulative_error, rolling_mean

__all__ = [
    "IntervalMetrics",
    "MetricResult",
    "MetricStatus",
    "PointMetrics",
    "WidthSummary",
    "compute_interval_metrics",
    "compute_point_metrics",
    "coverage_indicator",
    "cumulative_error",
    "directional_accuracy",
    "interval_widths",
    "mae",
    "picp",
    "r_squared",
    "rmse",
    "rolling_mean",
    "scored_pairs",
    "width_summary",
]
