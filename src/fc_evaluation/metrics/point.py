"""
Point-forecast accuracy metrics.

Scalar metrics (``mae``, ``rmse``, ``r_squared``, ``directional_accuracy``)
operate on aligned array-likes and raise typed errors. ``compute_point_metrics``
scores one forecast column of a RecordSet and packages the four metrics as
:class:`MetricResult` values, surfacing an undefined R² explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from ..records import PRIMARY_COLUMN, RecordSet
from ..utils.validation import (
    DegenerateMetricError,
    EmptyInputError,
    ensure_equal_length,
)
from .results import MetricResult

ArrayLike = Union[Iterable[float], np.ndarray]


def _aligned(y_true: ArrayLike, y_pred: ArrayLike, *, context: str) -> tuple[np.ndarray, np.ndarray]:
    y_true_arr = np.asarray(y_true, dtype=float)
    y_pred_arr = np.asarray(y_pred, dtype=float)

    if y_true_arr.ndim != 1:
        raise ValueError(f"y_true must be 1-dimensional; got shape {y_true_arr.shape}")
    ensure_equal_length(y_true_arr, y_pred_arr, name_a="y_true", name_b="y_pred", context=context)
    if y_true_arr.size == 0:
        raise EmptyInputError(f"[{context}] Cannot score an empty series.")
    return y_true_arr, y_pred_arr


def mae(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """Mean absolute error, ``mean(|y_true - y_pred|)``."""
    y, yhat = _aligned(y_true, y_pred, context="mae")
    return float(np.mean(np.abs(y - yhat)))


def rmse(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """Root mean squared error, ``sqrt(mean((y_true - y_pred)^2))``."""
    y, yhat = _aligned(y_true, y_pred, context="rmse")
    return float(np.sqrt(np.mean((y - yhat) ** 2)))


def r_squared(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """
    Coefficient of determination, ``1 - SS_res / SS_tot``.

    Raises
    ------
    DegenerateMetricError
        If the actual series is constant (``SS_tot == 0``).
    """
    y, yhat = _aligned(y_true, y_pred, context="r_squared")
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    if ss_tot == 0.0:
        raise DegenerateMetricError("R² is undefined for a constant actual series (SS_tot == 0).")
    ss_res = float(np.sum((y - yhat) ** 2))
    return 1.0 - ss_res / ss_tot


def directional_accuracy(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """
    Fraction of records where ``sign(y_true) == sign(y_pred)``.

    Zero is its own sign class: an exact zero only matches an exact zero.
    This is a policy choice carried over from the dashboard this engine
    replaces, not a statistical necessity.
    """
    y, yhat = _aligned(y_true, y_pred, context="directional_accuracy")
    return float(np.mean(np.sign(y) == np.sign(yhat)))


@dataclass(frozen=True)
class PointMetrics:
    """Accuracy of one forecast column against the actual series."""

    column: str
    mae: MetricResult
    rmse: MetricResult
    r2: MetricResult
    directional_accuracy: MetricResult
    n_obs: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "column": self.column,
            "n_obs": self.n_obs,
            "mae": self.mae.to_dict(),
            "rmse": self.rmse.to_dict(),
            "r2": self.r2.to_dict(),
            "directional_accuracy": self.directional_accuracy.to_dict(),
        }


def scored_pairs(records: RecordSet, column: str = PRIMARY_COLUMN) -> tuple[np.ndarray, np.ndarray]:
    """
    Return ``(actual, forecast)`` for one column, restricted to rows where both
    values are present (not NaN).

    Raises
    ------
    SchemaMismatchError
        If ``column`` is not part of the RecordSet.
    EmptyInputError
        If no usable rows remain.
    """
    y = records.actual
    yhat = records.column(column)
    mask = ~(np.isnan(y) | np.isnan(yhat))
    if not mask.any():
        raise EmptyInputError(f"[{column}] No usable records to score.")
    return y[mask], yhat[mask]


def compute_point_metrics(records: RecordSet, column: str = PRIMARY_COLUMN) -> PointMetrics:
    """
    Score a forecast column of a RecordSet.

    Parameters
    ----------
    records:
        Input RecordSet.
    column:
        ``"median_forecast"`` (default) or a baseline column name.

    Returns
    -------
    PointMetrics
        MAE, RMSE, R² and directional accuracy, each with the sample count.
        R² is UNDEFINED (not infinite) for a constant actual series.

    Raises
    ------
    EmptyInputError
        If the RecordSet is empty or the column has no usable rows.
    SchemaMismatchError
        If the column is absent.
    """
    if len(records) == 0:
        raise EmptyInputError("Cannot compute point metrics on an empty RecordSet.")

    y, yhat = scored_pairs(records, column)
    n = int(y.size)

    try:
        r2 = MetricResult("r2", r_squared(y, yhat), n_obs=n)
    except DegenerateMetricError as e:
        r2 = MetricResult.undefined("r2", n_obs=n, reason=str(e))

    return PointMetrics(
        column=column,
        mae=MetricResult("mae", mae(y, yhat), n_obs=n),
        rmse=MetricResult("rmse", rmse(y, yhat), n_obs=n),
        r2=r2,
        directional_accuracy=MetricResult(
            "directional_accuracy", directional_accuracy(y, yhat), n_obs=n
        ),
        n_obs=n,
    )
