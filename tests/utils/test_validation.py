from __future__ import annotations

import pandas as pd
import pytest

from fc_evaluation.utils import (
    DataFrameValidationError,
    DegenerateMetricError,
    EmptyInputError,
    EvaluationError,
    InvalidParameterError,
    SchemaMismatchError,
    ensure_columns_present,
    ensure_equal_length,
    ensure_non_empty,
    ensure_non_negative_k,
    ensure_positive_window,
)


def test_ensure_columns_present_passes_when_all_columns_exist():
    df = pd.DataFrame({"a": [1, 2], "b": [3, 4]})

    # Should not raise
    ensure_columns_present(df, ["a", "b"], context="test")


def test_ensure_columns_present_raises_with_missing_columns_and_context():
    df = pd.DataFrame({"a": [1, 2]})

    with pytest.raises(DataFrameValidationError) as excinfo:
        ensure_columns_present(df, ["a", "b"], context="my_function")

    msg = str(excinfo.value)
    assert "my_function" in msg
    assert "missing required columns" in msg.lower()
    assert "['b']" in msg


def test_ensure_non_empty_raises_empty_input_for_empty_dataframe():
    df = pd.DataFrame({"a": []})

    with pytest.raises(EmptyInputError) as excinfo:
        ensure_non_empty(df, context="empty_check")

    assert "empty_check" in str(excinfo.value)


def test_ensure_equal_length_rejects_mismatch():
    ensure_equal_length([1, 2], [3, 4], name_a="a", name_b="b")

    with pytest.raises(InvalidParameterError, match="Length mismatch"):
        ensure_equal_length([1, 2, 3], [3, 4], name_a="a", name_b="b")


@pytest.mark.parametrize("window", [0, -1, 2.5, float("nan"), float("inf"), "24", None, True])
def test_ensure_positive_window_rejects_invalid(window):
    with pytest.raises(InvalidParameterError):
        ensure_positive_window(window)


def test_ensure_positive_window_returns_int():
    assert ensure_positive_window(3.0) == 3
    assert isinstance(ensure_positive_window(3.0), int)


def test_ensure_non_negative_k():
    assert ensure_non_negative_k(0) == 0
    with pytest.raises(InvalidParameterError):
        ensure_non_negative_k(-1)
    for bad in (float("nan"), float("-inf"), "3", 1.5):
        with pytest.raises(InvalidParameterError):
            ensure_non_negative_k(bad)


def test_error_taxonomy_is_catchable_as_valueerror():
    """Callers can catch every engine error as ValueError or EvaluationError."""
    for cls in (
        EmptyInputError,
        DegenerateMetricError,
        SchemaMismatchError,
        InvalidParameterError,
        DataFrameValidationError,
    ):
        assert issubclass(cls, EvaluationError)
        assert issubclass(cls, ValueError)

    assert issubclass(DataFrameValidationError, SchemaMismatchError)
