from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import ColumnMapping
from ..records import ImportanceEntry, Observation, RecordSet
from ..utils.validation import (
    DataFrameValidationError,
    ensure_columns_present,
)

logger = logging.getLogger(__name__)

_BASELINE_SUFFIX = "__baseline"


def merge_baselines_df(
    predictions: pd.DataFrame,
    baselines: pd.DataFrame,
    *,
    on: str = "Date",
) -> pd.DataFrame:
    """
    Attach baseline forecasts to a prediction table by timestamp.

    Parameters
    ----------
    predictions : pandas.DataFrame
        Prediction table (actual, quantile forecasts). Its row order is kept.

    baselines : pandas.DataFrame
        Baseline forecast table keyed by the same timestamp column.

    on : str, default "Date"
        Name of the timestamp column present in both tables.

    Returns
    -------
    pandas.DataFrame
        One row per prediction row. Baseline columns are NaN where no baseline
        row matches; when a timestamp appears more than once in ``baselines``
        the last occurrence wins. A baseline column that shares a name with a
        prediction column replaces its value only where a baseline row matches
        and holds a value; elsewhere the prediction value is kept.
    """
    ensure_columns_present(predictions, [on], context="merge_baselines_df")
    ensure_columns_present(baselines, [on], context="merge_baselines_df")

    base = baselines.drop_duplicates(subset=[on], keep="last")
    overlap = [c for c in base.columns if c != on and c in predictions.columns]

    merged = predictions.merge(
        base, on=on, how="left", sort=False, suffixes=("", _BASELINE_SUFFIX)
    )
    for c in overlap:
        shadow = f"{c}{_BASELINE_SUFFIX}"
        merged[c] = merged[shadow].combine_first(merged[c])
        merged = merged.drop(columns=shadow)
    merged.index = predictions.index
    return merged


def records_from_df(
    df: pd.DataFrame,
    *,
    columns: ColumnMapping | None = None,
    baseline_cols: Optional[Sequence[str]] = None,
    dropna: bool = True,
) -> RecordSet:
    """
    Build a RecordSet from a tabular prediction export.

    Parameters
    ----------
    df : pandas.DataFrame
        Input table with timestamp, actual and quantile-forecast columns, plus
        optional baseline forecast columns. Row order is taken as chronological.

    columns : ColumnMapping, optional
        Column names to read. Defaults to ``ColumnMapping()``
        (``Date``, ``y_true``, ``q50``, ``q10``, ``q90``).

    baseline_cols : sequence of str, optional
        Baseline columns to attach. Defaults to ``columns.baselines``; in both
        cases, names absent from ``df`` are skipped.

    dropna : bool, default True
        If True, rows with a missing actual / quantile value are dropped with a
        warning. If False, such rows raise.

    Returns
    -------
    RecordSet

    Raises
    ------
    DataFrameValidationError
        If a required column is missing (including the median forecast), a
        required value is missing and ``dropna`` is False, or a column cannot
        be read as numbers.
    """
    cols = columns or ColumnMapping()
    ensure_columns_present(df, cols.required, context="records_from_df")

    wanted = list(baseline_cols) if baseline_cols is not None else list(cols.baselines)
    present: List[str] = []
    for name in wanted:
        if name in df.columns:
            present.append(name)
        elif baseline_cols is not None:
            logger.warning("Baseline column %r not found in DataFrame; skipping", name)

    value_cols = [cols.actual, cols.median, cols.lower, cols.upper]
    numeric = {}
    for c in value_cols + present:
        try:
            numeric[c] = pd.to_numeric(df[c], errors="raise").to_numpy(dtype=float)
        except (TypeError, ValueError) as e:
            raise DataFrameValidationError(
                f"[records_from_df] Column {c!r} is not numeric: {e}"
            ) from e

    missing = np.zeros(len(df), dtype=bool)
    for c in value_cols:
        missing |= ~np.isfinite(numeric[c])

    if missing.any():
        if not dropna:
            raise DataFrameValidationError(
                f"[records_from_df] {int(missing.sum())} row(s) have missing or non-finite "
                "actual/forecast values."
            )
        logger.warning(
            "Dropping %d row(s) with missing or non-finite actual/forecast values",
            int(missing.sum()),
        )

    keep = np.flatnonzero(~missing)
    timestamps = df[cols.timestamp].to_numpy()

    observations = tuple(
        Observation(
            timestamp=timestamps[i],
            actual=numeric[cols.actual][i],
            median_forecast=numeric[cols.median][i],
            lower_bound=numeric[cols.lower][i],
            upper_bound=numeric[cols.upper][i],
            baseline_forecasts={name: numeric[name][i] for name in present},
        )
        for i in keep
    )
    logger.info("Built RecordSet with %d records and baselines %s", len(observations), present)
    return RecordSet(observations=observations, baseline_names=tuple(present))


def importance_from_df(
    df: pd.DataFrame,
    *,
    feature_col: str = "Feature",
    importance_col: str = "Importance",
) -> List[ImportanceEntry]:
    """
    Read a two-column feature-importance table.

    Rows with a missing feature name or importance are dropped. Row order is
    kept; ranking imposes order later.

    Raises
    ------
    DataFrameValidationError
        If either column is missing.
    """
    ensure_columns_present(df, [feature_col, importance_col], context="importance_from_df")
    clean = df[[feature_col, importance_col]].dropna()
    if len(clean) < len(df):
        logger.warning("Dropping %d incomplete importance row(s)", len(df) - len(clean))
    return [
        ImportanceEntry(feature_name=str(f), importance=float(v))
        for f, v in zip(clean[feature_col], clean[importance_col])
    ]
