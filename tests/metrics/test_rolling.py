"""
Unit tests for trailing-window and cumulative series (metrics/rolling.py).

The rolling window is strictly trailing: position i summarizes x[i-w .. i-1]
and the first w positions carry the insufficient-history marker (None).
"""

from __future__ import annotations

import numpy as np
import pytest

from fc_evaluation.metrics import cumulative_error, rolling_mean
from fc_evaluation.utils.validation import InvalidParameterError


def test_rolling_mean_constant_series_is_exact() -> None:
    out = rolling_mean([1, 1, 1, 1, 1], 2)

    assert len(out) == 5
    assert out[:2] == (None, None)
    assert all(v == 1.0 for v in out[2:])


def test_rolling_mean_excludes_current_point() -> None:
    out = rolling_mean([1.0, 2.0, 3.0, 4.0, 100.0], 2)
    # index 2 -> mean(x[0:2]) = 1.5, index 3 -> 2.5, index 4 -> 3.5
    assert out == (None, None, 1.5, 2.5, 3.5)


def test_rolling_mean_window_one_is_previous_value() -> None:
    out = rolling_mean([5.0, 7.0, 9.0], 1)
    assert out == (None, 5.0, 7.0)


def test_rolling_mean_accepts_booleans() -> None:
    out = rolling_mean(np.array([True, False, True, True]), 2)
    assert out == (None, None, 0.5, 0.5)


def test_rolling_mean_matches_naive_definition() -> None:
    rng = np.random.default_rng(3)
    x = rng.normal(size=60)
    w = 7
    out = rolling_mean(x, w)
    for i in range(len(x)):
        if i < w:
            assert out[i] is None
        else:
            assert out[i] == pytest.approx(float(np.mean(x[i - w : i])))


def test_rolling_mean_window_longer_than_input() -> None:
    assert rolling_mean([1.0, 2.0], 5) == (None, None)
    assert rolling_mean([], 3) == ()


@pytest.mark.parametrize("window", [0, -3])
def test_rolling_mean_rejects_non_positive_window(window) -> None:
    with pytest.raises(InvalidParameterError):
        rolling_mean([1.0, 2.0, 3.0], window)


def test_cumulative_squared_and_absolute_error() -> None:
    y = [1.0, 2.0, 5.0]
    yhat = [1.0, 3.0, 3.0]
    assert cumulative_error(y, yhat) == (0.0, 1.0, 5.0)
    assert cumulative_error(y, yhat, kind="absolute") == (0.0, 1.0, 3.0)


def test_cumulative_error_missing_values_add_nothing() -> None:
    out = cumulative_error([1.0, 2.0, 3.0], [0.0, float("nan"), 1.0])
    assert out == (1.0, 1.0, 5.0)


def test_cumulative_error_rejects_unknown_kind() -> None:
    with pytest.raises(InvalidParameterError):
        cumulative_error([1.0], [1.0], kind="relative")  # type: ignore[arg-type]
