from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from ..diagnostics.results import DiagnosticsReport
from ..metrics.point import PointMetrics
from ..model_selection.leaderboard import Leaderboard
from ..records import ImportanceEntry, RecordSet


def point_metrics_df(metrics: Sequence[PointMetrics]) -> pd.DataFrame:
    """
    Tabulate point metrics, one row per scored column.

    Returns
    -------
    pandas.DataFrame
        Indexed by column name with ["MAE", "RMSE", "R2", "DirAcc", "n_obs"].
        Undefined values appear as NaN; ``R2_status`` says whether R² is defined.
    """
    rows = {}
    for m in metrics:
        rows[m.column] = {
            "MAE": m.mae.value,
            "RMSE": m.rmse.value,
            "R2": m.r2.value if m.r2.is_defined else np.nan,
            "R2_status": m.r2.status.value,
            "DirAcc": m.directional_accuracy.value,
            "n_obs": m.n_obs,
        }
    df = pd.DataFrame.from_dict(rows, orient="index")
    df.index.name = "column"
    return df


def leaderboard_df(leaderboard: Leaderboard) -> pd.DataFrame:
    """Leaderboard rows indexed by rank (see ``Leaderboard.to_frame``)."""
    return leaderboard.to_frame()


def importance_df(entries: Iterable[ImportanceEntry]) -> pd.DataFrame:
    """Importance entries as a two-column DataFrame, in the given order."""
    return pd.DataFrame(
        [{"feature_name": e.feature_name, "importance": e.importance} for e in entries],
        columns=["feature_name", "importance"],
    )


def series_df(records: RecordSet, report: DiagnosticsReport) -> pd.DataFrame:
    """
    Per-record series of a report aligned on the RecordSet's timestamps.

    Columns (present when the producing component succeeded):
    - ``actual``, ``median_forecast``, ``lower_bound``, ``upper_bound``
    - ``rolling_coverage``, ``rolling_mae``, ``cumulative_abs_error``
    - ``cum_sq_error[<model>]`` for every leaderboard candidate

    Positions without enough history are NaN in this view.
    """
    data: dict[str, object] = {
        "actual": records.actual,
        "median_forecast": records.median_forecast,
        "lower_bound": records.lower_bound,
        "upper_bound": records.upper_bound,
    }

    def _as_float(series) -> np.ndarray:
        return np.array([np.nan if v is None else v for v in series], dtype=float)

    if report.rolling_coverage is not None:
        data["rolling_coverage"] = _as_float(report.rolling_coverage.value)
    if report.rolling_error is not None:
        data["rolling_mae"] = _as_float(report.rolling_error.value)
    if report.cumulative_abs_error is not None:
        data["cumulative_abs_error"] = _as_float(report.cumulative_abs_error.value)
    if report.leaderboard is not None:
        for name, series in report.leaderboard.cumulative_errors:
            data[f"cum_sq_error[{name}]"] = _as_float(series)

    df = pd.DataFrame(data, index=pd.Index(records.timestamps, name="timestamp"))
    return df
