from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from fc_evaluation.config import ColumnMapping
from fc_evaluation.dataframe import importance_from_df, merge_baselines_df, records_from_df
from fc_evaluation.utils.validation import DataFrameValidationError, SchemaMismatchError


def _predictions() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Date": ["2024-01-01 00:00", "2024-01-01 01:00", "2024-01-01 02:00"],
            "y_true": [1.0, 2.0, 5.0],
            "q10": [0.0, 1.0, 3.0],
            "q50": [1.0, 3.0, 4.0],
            "q90": [2.0, 4.0, 6.0],
        }
    )


def test_records_from_df_reads_default_columns():
    rs = records_from_df(_predictions())

    assert len(rs) == 3
    assert rs.timestamps[0] == "2024-01-01 00:00"
    assert list(rs.actual) == [1.0, 2.0, 5.0]
    assert list(rs.median_forecast) == [1.0, 3.0, 4.0]
    assert list(rs.lower_bound) == [0.0, 1.0, 3.0]
    assert list(rs.upper_bound) == [2.0, 4.0, 6.0]
    assert rs.baseline_names == ()


def test_records_from_df_picks_up_configured_baselines_present():
    df = _predictions().assign(**{"Random Walk": [0.5, 1.0, 2.0], "Ridge Regression": [1, 2, 3]})

    rs = records_from_df(df)

    # Declaration order follows the configured baseline list, not the frame.
    assert rs.baseline_names == ("Random Walk", "Ridge Regression")
    assert list(rs.column("Ridge Regression")) == [1.0, 2.0, 3.0]


def test_records_from_df_explicit_baselines_skip_absent(caplog):
    df = _predictions().assign(naive=[1.0, 1.0, 2.0])

    with caplog.at_level("WARNING"):
        rs = records_from_df(df, baseline_cols=["naive", "Prophet"])

    assert rs.baseline_names == ("naive",)
    assert "Prophet" in caplog.text


def test_records_from_df_missing_median_is_fatal():
    df = _predictions().drop(columns=["q50"])

    with pytest.raises(DataFrameValidationError) as excinfo:
        records_from_df(df)

    assert isinstance(excinfo.value, SchemaMismatchError)
    assert "q50" in str(excinfo.value)


def test_records_from_df_custom_mapping():
    df = pd.DataFrame(
        {
            "ts": [1, 2],
            "obs": [1.0, 2.0],
            "p10": [0.0, 1.0],
            "p50": [1.0, 2.0],
            "p90": [2.0, 3.0],
        }
    )
    cols = ColumnMapping(timestamp="ts", actual="obs", median="p50", lower="p10", upper="p90")

    rs = records_from_df(df, columns=cols)

    assert rs.timestamps == (1, 2)
    assert list(rs.median_forecast) == [1.0, 2.0]


def test_records_from_df_drops_incomplete_rows(caplog):
    df = _predictions()
    df.loc[1, "y_true"] = np.nan

    with caplog.at_level("WARNING"):
        rs = records_from_df(df)

    assert len(rs) == 2
    assert list(rs.actual) == [1.0, 5.0]
    assert "Dropping 1 row" in caplog.text

    with pytest.raises(DataFrameValidationError):
        records_from_df(df, dropna=False)


def test_records_from_df_keeps_missing_baseline_values():
    df = _predictions().assign(**{"Random Walk": [np.nan, 1.0, 2.0]})

    rs = records_from_df(df)

    assert len(rs) == 3
    assert math.isnan(rs.column("Random Walk")[0])


def test_records_from_df_rejects_non_numeric_values():
    df = _predictions()
    df["q50"] = ["a", "b", "c"]

    with pytest.raises(DataFrameValidationError, match="not numeric"):
        records_from_df(df)


def test_merge_baselines_df_left_join_preserves_order():
    preds = _predictions()
    base = pd.DataFrame(
        {
            "Date": ["2024-01-01 02:00", "2024-01-01 00:00", "2024-01-01 00:00"],
            "Random Walk": [9.0, 7.0, 8.0],
        }
    )

    merged = merge_baselines_df(preds, base, on="Date")

    assert list(merged["Date"]) == list(preds["Date"])
    # Duplicate timestamp: last occurrence wins; unmatched row: NaN.
    assert merged["Random Walk"].iloc[0] == 8.0
    assert np.isnan(merged["Random Walk"].iloc[1])
    assert merged["Random Walk"].iloc[2] == 9.0
    assert len(merged) == len(preds)


def test_merge_baselines_df_overrides_shared_columns():
    preds = _predictions().assign(**{"Random Walk": [0.0, 0.0, 0.0]})
    base = pd.DataFrame({"Date": preds["Date"], "Random Walk": [1.0, 2.0, 3.0]})

    merged = merge_baselines_df(preds, base)

    assert list(merged["Random Walk"]) == [1.0, 2.0, 3.0]


def test_merge_baselines_df_requires_key():
    with pytest.raises(DataFrameValidationError):
        merge_baselines_df(_predictions(), pd.DataFrame({"x": [1]}))


def test_importance_from_df():
    df = pd.DataFrame(
        {"Feature": ["lag_1", "hour", None], "Importance": [0.7, 0.2, 0.1]}
    )

    entries = importance_from_df(df)

    assert [(e.feature_name, e.importance) for e in entries] == [("lag_1", 0.7), ("hour", 0.2)]

    with pytest.raises(DataFrameValidationError):
        importance_from_df(df, importance_col="Gain")


def test_merge_baselines_df_keeps_prediction_values_on_unmatched_rows():
    preds = _predictions()
    # Baseline export repeats y_true and misses the last timestamp.
    base = pd.DataFrame(
        {
            "Date": ["2024-01-01 00:00", "2024-01-01 01:00"],
            "y_true": [1.0, 2.0],
            "Random Walk": [0.5, 1.0],
        }
    )

    merged = merge_baselines_df(preds, base)

    assert list(merged["y_true"]) == [1.0, 2.0, 5.0]
    assert np.isnan(merged["Random Walk"].iloc[2])

    rs = records_from_df(merged)
    assert len(rs) == 3
    assert list(rs.actual) == [1.0, 2.0, 5.0]


def test_merge_baselines_df_shared_column_null_in_baseline_keeps_prediction():
    preds = _predictions()
    base = pd.DataFrame({"Date": preds["Date"], "y_true": [np.nan, 20.0, np.nan]})

    merged = merge_baselines_df(preds, base)

    assert list(merged["y_true"]) == [1.0, 20.0, 5.0]
    assert not any(c.endswith("__baseline") for c in merged.columns)


def test_records_from_df_treats_infinite_values_as_missing(caplog):
    df = _predictions()
    df.loc[2, "q90"] = np.inf

    with caplog.at_level("WARNING"):
        rs = records_from_df(df)

    assert len(rs) == 2
    assert "Dropping 1 row" in caplog.text
