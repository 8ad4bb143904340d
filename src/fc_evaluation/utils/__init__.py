"""
Utility helpers for the fc-evaluation package.

Currently includes:
    - the engine's error taxonomy
    - input validation utilities (DataFrames, windows, top-k counts)
"""

from .validation import (
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

__all__ = [
    "DataFrameValidationError",
    "DegenerateMetricError",
    "EmptyInputError",
    "EvaluationError",
    "InvalidParameterError",
    "SchemaMismatchError",
    "ensure_columns_present",
    "ensure_equal_length",
    "ensure_non_empty",
    "ensure_non_negative_k",
    "ensure_positive_window",
]
