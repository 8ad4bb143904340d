from __future__ import annotations

from typing import Dict, Iterable, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from ..metrics.point import (
    directional_accuracy,
    mae,
    r_squared,
    rmse,
)
from ..records import RecordSet
from ..utils.validation import DegenerateMetricError, EmptyInputError, InvalidParameterError

ArrayLike = Union[Iterable[float], np.ndarray]


def compare_forecasts(
    y_true: ArrayLike,
    forecasts: Mapping[str, ArrayLike],
) -> pd.DataFrame:
    """
    Compare multiple forecast series on the same target series.

    Parameters
    ----------
    y_true : array-like of shape (n_samples,)
        Actual values.

    forecasts : mapping from str to array-like
        Dictionary mapping model names to their forecasted values.
        Each value must be array-like of shape (n_samples,). NaN entries
        mark missing forecasts and are excluded, together with the matching
        actuals, from that model's scores.

        Example
        -------
        >>> forecasts = {
        ...     "model_a": [9, 15, 7],
        ...     "model_b": [10, 12, 8],
        ... }

    Returns
    -------
    pandas.DataFrame
        DataFrame indexed by model name with columns:
        ["MAE", "RMSE", "R2", "R2_status", "DirAcc", "n_obs"].
        ``R2`` is NaN only where ``R2_status`` is ``"undefined"``.
    """
    y_true_arr = np.asarray(y_true, dtype=float)

    if y_true_arr.ndim != 1:
        raise ValueError(f"y_true must be 1-dimensional; got shape {y_true_arr.shape}")

    if not forecasts:
        raise ValueError("forecasts mapping is empty; provide at least one model.")

    rows: Dict[str, Dict[str, object]] = {}

    for model_name, y_pred in forecasts.items():
        y_pred_arr = np.asarray(y_pred, dtype=float)
        if y_pred_arr.shape != y_true_arr.shape:
            raise ValueError(
                f"Forecast {model_name!r} has shape {y_pred_arr.shape}; "
                f"expected {y_true_arr.shape}"
            )

        mask = ~(np.isnan(y_true_arr) | np.isnan(y_pred_arr))
        if not mask.any():
            raise EmptyInputError(f"[{model_name}] No usable records to score.")
        y, yhat = y_true_arr[mask], y_pred_arr[mask]

        try:
            r2 = r_squared(y, yhat)
            r2_status = "ok"
        except DegenerateMetricError:
            r2 = float("nan")
            r2_status = "undefined"

        rows[model_name] = {
            "MAE": mae(y, yhat),
            "RMSE": rmse(y, yhat),
            "R2": r2,
            "R2_status": r2_status,
            "DirAcc": directional_accuracy(y, yhat),
            "n_obs": int(mask.sum()),
        }

    df = pd.DataFrame.from_dict(rows, orient="index")
    df.index.name = "model"
    return df


def compare_records(
    records: RecordSet,
    *,
    columns: Sequence[str] | None = None,
    primary_label: str = "Model",
) -> pd.DataFrame:
    """
    Metric table for the forecast columns of a RecordSet.

    Parameters
    ----------
    records : RecordSet
        Input records.

    columns : sequence of str, optional
        Forecast columns to include. Defaults to every column (primary first).
        Columns absent from the RecordSet are skipped.

    primary_label : str, default "Model"
        Index label used for the primary (median) forecast.

    Returns
    -------
    pandas.DataFrame
        See :func:`compare_forecasts`.

    Raises
    ------
    InvalidParameterError
        If ``primary_label`` equals the name of a selected baseline column.
    """
    if len(records) == 0:
        raise EmptyInputError("Cannot compare forecasts on an empty RecordSet.")

    selected = list(columns) if columns is not None else list(records.columns)
    labels = [primary_label if c == records.columns[0] else c for c in selected]
    if labels.count(primary_label) > 1:
        raise InvalidParameterError(
            f"primary_label {primary_label!r} collides with a baseline column of the same name."
        )
    forecasts = {
        (primary_label if c == records.columns[0] else c): records.column(c)
        for c in selected
        if records.has_column(c)
    }
    return compare_forecasts(records.actual, forecasts)
