"""
Pandas / DataFrame adapters around the evaluation engine.

Ingestion:
- merge_baselines_df: attach a baseline forecast table to predictions.
- records_from_df: build a RecordSet from a prediction table.
- importance_from_df: read a feature-importance table.

Reporting:
- point_metrics_df, leaderboard_df, importance_df, series_df.
"""

from .ingest import importance_from_df, merge_baselines_df, records_from_df
from .report import importance_df, leaderboard_df, point_metrics_df, series_df

__all__ = [
    "importance_df",
    "importance_from_df",
    "leaderboard_df",
    "merge_baselines_df",
    "point_metrics_df",
    "records_from_df",
    "series_df",
]
