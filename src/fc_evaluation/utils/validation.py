from __future__ import annotations

from typing import Sequence

import pandas as pd


class EvaluationError(ValueError):
    """
    Base class for all errors raised by the evaluation engine.

    This is a thin wrapper around ValueError so callers can catch a more
    specific exception type if they want to distinguish evaluation issues
    from other ValueErrors.
    """


class EmptyInputError(EvaluationError):
    """
    Raised when a RecordSet (or a required sub-sequence of it) has no rows.

    Fatal to the metric that was requested, not to the whole evaluation run.
    """


class DegenerateMetricError(EvaluationError):
    """
    Raised when a metric is mathematically undefined for the given input.

    Examples are R² on a constant actual series, a standardization with zero
    sample deviation, or relative improvement against a reference with zero
    MAE. Composition layers surface it as an explicit UNDEFINED result.
    """


class SchemaMismatchError(EvaluationError):
    """
    Raised when a requested forecast column is absent from the input.
    """


class InvalidParameterError(EvaluationError):
    """
    Raised for invalid caller-supplied parameters (window sizes, top-k counts,
    quantile pairs, out-of-domain arguments).
    """


class DataFrameValidationError(SchemaMismatchError):
    """
    Error raised when an input pandas.DataFrame fails a validation check.
    """


def _prefix(context: str | None) -> str:
    return f"[{context}] " if context is not None else ""


def _is_whole_number(value) -> bool:
    if isinstance(value, (bool, str, bytes)):
        return False
    try:
        return float(value).is_integer()
    except (TypeError, ValueError):
        return False


def ensure_columns_present(
    df: pd.DataFrame,
    required: Sequence[str],
    *,
    context: str | None = None,
) -> None:
    """
    Ensure that all required columns are present in a DataFrame.

    Parameters
    ----------
    df : pandas.DataFrame
        The DataFrame to validate.

    required : sequence of str
        Column names that must be present in ``df``.

    context : str, optional
        Optional context string to include in the error message
        (e.g. the name of the calling function).

    Raises
    ------
    DataFrameValidationError
        If one or more required columns are missing.
    """
    missing = [c for c in required if c not in df.columns]
    if not missing:
        return

    raise DataFrameValidationError(
        f"{_prefix(context)}DataFrame is missing required columns: {missing}"
    )


def ensure_non_empty(
    df: pd.DataFrame,
    *,
    context: str | None = None,
) -> None:
    """
    Ensure that a DataFrame is not empty.

    Raises
    ------
    EmptyInputError
        If the DataFrame has zero rows.
    """
    if not len(df):
        raise EmptyInputError(f"{_prefix(context)}DataFrame is empty.")


def ensure_equal_length(
    a: Sequence[object],
    b: Sequence[object],
    *,
    name_a: str,
    name_b: str,
    context: str | None = None,
) -> None:
    """
    Ensure two per-record sequences are aligned (same number of values).

    Raises
    ------
    InvalidParameterError
        If the lengths differ.
    """
    if len(a) != len(b):
        raise InvalidParameterError(
            f"{_prefix(context)}Length mismatch: {name_a} has {len(a)} values "
            f"but {name_b} has {len(b)} values."
        )


def ensure_positive_window(window: int, *, context: str | None = None) -> int:
    """
    Validate a rolling-window length and return it as ``int``.

    Raises
    ------
    InvalidParameterError
        If ``window`` is not an integer or is ``<= 0``.
    """
    if not _is_whole_number(window):
        raise InvalidParameterError(
            f"{_prefix(context)}Window size must be an integer; got {window!r}."
        )
    if window <= 0:
        raise InvalidParameterError(
            f"{_prefix(context)}Window size must be positive; got {window}."
        )
    return int(window)


def ensure_non_negative_k(k: int, *, context: str | None = None) -> int:
    """
    Validate a top-k count and return it as ``int``.

    Raises
    ------
    InvalidParameterError
        If ``k`` is not an integer or is negative.
    """
    if not _is_whole_number(k):
        raise InvalidParameterError(f"{_prefix(context)}k must be an integer; got {k!r}.")
    if k < 0:
        raise InvalidParameterError(f"{_prefix(context)}k must be non-negative; got {k}.")
    return int(k)
