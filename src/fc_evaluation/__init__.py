"""
Forecast Evaluation Toolkit (FC Evaluation)

This package evaluates probabilistic time-series forecasts (a median point
forecast plus a quantile prediction interval) against realized values:
accuracy and calibration metrics, trailing rolling diagnostics, residual Q-Q
quantiles, a baseline leaderboard, and feature-importance ranking.
"""

from .config import (
    ColumnMapping,
    EvaluationConfig,
    EvaluationPreset,
    get_evaluation_preset,
    resolve_config,
)
from .dataframe import (
    importance_from_df,
    merge_baselines_df,
    records_from_df,
)
from .diagnostics import (
    DiagnosticsReport,
    erfinv,
    normal_quantiles,
    qq_pairs,
    run_diagnostics,
)
from .features import rank_importance
from .metrics import (
    MetricResult,
    MetricStatus,
    compute_interval_metrics,
    compute_point_metrics,
    rolling_mean,
)
from .model_selection import build_leaderboard, compare_records
from .records import ImportanceEntry, Observation, RecordSet
from .utils import (
    DegenerateMetricError,
    EmptyInputError,
    EvaluationError,
    InvalidParameterError,
    SchemaMismatchError,
)

__all__ = [
    "ColumnMapping",
    "DegenerateMetricError",
    "DiagnosticsReport",
    "EmptyInputError",
    "EvaluationConfig",
    "EvaluationError",
    "EvaluationPreset",
    "ImportanceEntry",
    "InvalidParameterError",
    "MetricResult",
    "MetricStatus",
    "Observation",
    "RecordSet",
    "SchemaMismatchError",
    "build_leaderboard",
    "compare_records",
    "compute_interval_metrics",
    "compute_point_metrics",
    "erfinv",
    "get_evaluation_preset",
    "importance_from_df",
    "merge_baselines_df",
    "normal_quantiles",
    "qq_pairs",
    "rank_importance",
    "records_from_df",
    "resolve_config",
    "rolling_mean",
    "run_diagnostics",
]
