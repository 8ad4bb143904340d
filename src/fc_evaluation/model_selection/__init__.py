"""
Model-comparison utilities.

Exports:
- build_leaderboard: rank the primary forecast against baseline columns by MAE
  with relative improvement over a reference and cumulative squared error.
- Leaderboard, LeaderboardRow: immutable leaderboard results.
- relative_improvement: ``1 - MAE_candidate / MAE_reference``.
- compare_forecasts: metric table for several forecast series.
- compare_records: metric table for the forecast columns of a RecordSet.
"""

from .compare import compare_forecasts, compare_records
from .leaderboard import (
    Leaderboard,
    LeaderboardRow,
    build_leaderboard,
    relative_improvement,
)

__all__ = [
    "Leaderboard",
    "LeaderboardRow",
    "build_leaderboard",
    "compare_forecasts",
    "compare_records",
    "relative_improvement",
]
