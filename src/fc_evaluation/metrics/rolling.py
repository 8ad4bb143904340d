"""
Trailing-window and cumulative series.

``rolling_mean`` is the generic moving average used for rolling coverage and
rolling error. It is strictly trailing: the value at index ``i`` summarizes
``x[i-window .. i-1]`` and never includes ``x[i]`` itself. The first ``window``
positions hold ``None`` because a full window of history is not yet available.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, Optional, Union

import numpy as np
import pandas as pd

from ..utils.validation import InvalidParameterError, ensure_equal_length, ensure_positive_window

ArrayLike = Union[Iterable[float], Iterable[bool], np.ndarray]


def rolling_mean(x: ArrayLike, window: int) -> tuple[Optional[float], ...]:
    """
    Strictly trailing moving average.

    Parameters
    ----------
    x:
        Numeric or boolean sequence in chronological order.
    window:
        Window length ``w`` (> 0).

    Returns
    -------
    tuple of float or None
        Same length as ``x``. Index ``i < w`` is ``None``; index ``i >= w`` is
        ``mean(x[i-w .. i-1])``. A NaN inside a full window yields NaN.

    Raises
    ------
    InvalidParameterError
        If ``window`` is not a positive integer.
    """
    w = ensure_positive_window(window, context="rolling_mean")
    raw = x if isinstance(x, np.ndarray) else list(x)
    values = pd.Series(np.asarray(raw, dtype=float))

    # Mean of x[i-w+1 .. i], then shifted one step so position i sees x[i-w .. i-1].
    trailing = values.rolling(window=w, min_periods=w).mean().shift(1)

    out = trailing.to_numpy(dtype=float)
    return tuple(None if i < w else float(v) for i, v in enumerate(out))


def cumulative_error(
    y_true: ArrayLike,
    y_pred: ArrayLike,
    *,
    kind: Literal["squared", "absolute"] = "squared",
) -> tuple[float, ...]:
    """
    Running sum of per-record error in chronological order.

    Records where either value is missing (NaN) add nothing to the sum, so the
    series stays aligned with the input.

    Parameters
    ----------
    kind:
        ``"squared"`` for cumulative squared error, ``"absolute"`` for
        cumulative absolute error.
    """
    y = np.asarray(y_true, dtype=float)
    yhat = np.asarray(y_pred, dtype=float)
    ensure_equal_length(y, yhat, name_a="y_true", name_b="y_pred", context="cumulative_error")

    diff = y - yhat
    if kind == "squared":
        err = diff**2
    elif kind == "absolute":
        err = np.abs(diff)
    else:
        raise InvalidParameterError(f"Unknown cumulative error kind: {kind!r}")

    err = np.where(np.isnan(err), 0.0, err)
    return tuple(float(v) for v in np.cumsum(err))
