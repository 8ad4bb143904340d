"""
Normal-quantile transform for residual Q-Q diagnostics.

Theoretical side
----------------
For a sample of size ``n`` the ``i``-th (0-indexed) plotting position is
``p_i = (i + 0.5) / n``, mapped to a standard-normal quantile via
``z_i = sqrt(2) * erfinv(2 p_i - 1)``.

``erfinv`` starts from Winitzki's closed-form approximation (a = 0.147) and
refines it with Newton steps on ``math.erf``. The closed form alone carries
relative error around 2e-3 and degrades in the tails; two Newton steps bring
the result to near machine precision over the open interval (-1, 1).

Empirical side
--------------
Residuals ``actual - median_forecast`` are sorted and standardized as
``(x - mean) / sample_std`` using the ``n - 1`` denominator.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Final

import numpy as np

from ..records import RecordSet
from ..utils.validation import DegenerateMetricError, EmptyInputError, InvalidParameterError

_WINITZKI_A: Final[float] = 0.147
_TWO_OVER_SQRT_PI: Final[float] = 2.0 / math.sqrt(math.pi)
_NEWTON_STEPS: Final[int] = 2


def _winitzki_guess(x: float) -> float:
    # Valid for 0 < x < 1; the caller handles sign and the endpoints.
    ln = math.log((1.0 - x) * (1.0 + x))
    t1 = 2.0 / (math.pi * _WINITZKI_A) + ln / 2.0
    return math.sqrt(math.sqrt(t1 * t1 - ln / _WINITZKI_A) - t1)


def erfinv(x: float) -> float:
    """
    Inverse of the Gauss error function.

    Parameters
    ----------
    x:
        Value in [-1, 1].

    Returns
    -------
    float
        ``y`` such that ``erf(y) == x``. ``erfinv(0) == 0``, ``erfinv(±1) == ±inf``
        and ``erfinv(-x) == -erfinv(x)`` exactly.

    Raises
    ------
    InvalidParameterError
        If ``x`` is NaN or outside [-1, 1].
    """
    x = float(x)
    if math.isnan(x) or abs(x) > 1.0:
        raise InvalidParameterError(f"erfinv is defined on [-1, 1]; got {x}.")
    if x == 0.0:
        return 0.0

    sign = 1.0 if x > 0 else -1.0
    ax = abs(x)
    if ax == 1.0:
        return sign * math.inf

    y = _winitzki_guess(ax)
    for _ in range(_NEWTON_STEPS):
        slope = _TWO_OVER_SQRT_PI * math.exp(-y * y)
        if slope == 0.0:
            break
        step = (math.erf(y) - ax) / slope
        if not math.isfinite(step):
            break
        y -= step

    return sign * y


def plotting_positions(n: int) -> tuple[float, ...]:
    """Plotting positions ``(i + 0.5) / n`` for ``i = 0 .. n-1``."""
    if n < 0:
        raise InvalidParameterError(f"Sample size must be non-negative; got {n}.")
    return tuple((i + 0.5) / n for i in range(n))


def normal_quantiles(n: int) -> tuple[float, ...]:
    """Theoretical standard-normal quantiles for a sorted sample of size ``n``."""
    return tuple(math.sqrt(2.0) * erfinv(2.0 * p - 1.0) for p in plotting_positions(n))


def standardize(values: Iterable[float]) -> tuple[float, ...]:
    """
    Standardize values with the sample mean and sample standard deviation
    (``ddof=1``). Order is preserved.

    Raises
    ------
    EmptyInputError
        If ``values`` is empty.
    DegenerateMetricError
        If fewer than two values are given or the sample deviation is zero.
    """
    x = np.asarray(list(values), dtype=float)
    if x.size == 0:
        raise EmptyInputError("Cannot standardize an empty sample.")
    if x.size < 2:
        raise DegenerateMetricError("Sample standard deviation needs at least two values.")
    std = float(np.std(x, ddof=1))
    if std == 0.0 or not math.isfinite(std):
        raise DegenerateMetricError("Cannot standardize a sample with zero deviation.")
    mean = float(np.mean(x))
    return tuple(float(v) for v in (x - mean) / std)


def residuals(records: RecordSet) -> tuple[float, ...]:
    """Per-record residuals ``actual - median_forecast`` in chronological order."""
    return tuple(float(v) for v in records.actual - records.median_forecast)


@dataclass(frozen=True)
class QQResult:
    """Paired theoretical / standardized empirical quantiles, both ascending."""

    theoretical: tuple[float, ...]
    sample: tuple[float, ...]
    n_obs: int

    @property
    def pairs(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self.theoretical, self.sample))

    def to_dict(self) -> dict[str, Any]:
        return {
            "theoretical": list(self.theoretical),
            "sample": list(self.sample),
            "n_obs": self.n_obs,
        }


def qq_pairs(records: RecordSet) -> QQResult:
    """
    Build the residual Q-Q diagnostic for the primary forecast.

    Raises
    ------
    EmptyInputError
        If the RecordSet is empty.
    DegenerateMetricError
        If residuals cannot be standardized (n < 2 or constant residuals).
    """
    res = sorted(residuals(records))
    if not res:
        raise EmptyInputError("Cannot build a Q-Q diagnostic from an empty RecordSet.")
    sample = standardize(res)
    return QQResult(theoretical=normal_quantiles(len(res)), sample=sample, n_obs=len(res))
