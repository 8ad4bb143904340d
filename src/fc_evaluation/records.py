"""
Record model for forecast evaluation.

A :class:`RecordSet` is the single input every evaluation component consumes:
an ordered, immutable sequence of :class:`Observation` rows, each pairing a
realized value with a quantile forecast (lower / median / upper) and zero or
more baseline point forecasts.

Design goals
------------
- One value passed explicitly into every component call (no module-level state).
- Chronological order is meaningful and is preserved end to end.
- Immutable once constructed: column accessors return read-only arrays.
- Schema is dense: every declared baseline column exists on every record,
  possibly holding NaN as the missing-value marker. Required values (actual,
  median, bounds) are always finite, so every component scores the same rows.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Final

import numpy as np

from .utils.validation import SchemaMismatchError, ensure_equal_length

PRIMARY_COLUMN: Final[str] = "median_forecast"

_REQUIRED_FIELDS: Final[tuple[str, ...]] = ("actual", "median_forecast", "lower_bound", "upper_bound")


@dataclass(frozen=True)
class Observation:
    """
    One time-indexed record.

    Fields
    ------
    timestamp:
        Ordering key. Duplicates are tolerated and never deduplicated.
    actual:
        Realized value.
    median_forecast:
        Point estimate (q50).
    lower_bound, upper_bound:
        Lower / upper forecast quantiles (q10 / q90 by default). The invariant
        ``lower_bound <= upper_bound`` is assumed, not enforced.
    baseline_forecasts:
        Mapping baseline name -> point forecast. NaN marks a missing value.

    Raises
    ------
    SchemaMismatchError
        If a required value (actual, median or bounds) is NaN or infinite.
    """

    timestamp: Hashable
    actual: float
    median_forecast: float
    lower_bound: float
    upper_bound: float
    baseline_forecasts: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in _REQUIRED_FIELDS:
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise SchemaMismatchError(
                    f"Observation at {self.timestamp!r} has a non-finite {name} ({value}); "
                    "only baseline forecasts may be missing."
                )
            object.__setattr__(self, name, value)
        object.__setattr__(
            self,
            "baseline_forecasts",
            MappingProxyType({str(k): float(v) for k, v in self.baseline_forecasts.items()}),
        )

    @property
    def interval_width(self) -> float:
        return self.upper_bound - self.lower_bound

    @property
    def is_covered(self) -> bool:
        return self.lower_bound <= self.actual <= self.upper_bound


@dataclass(frozen=True)
class ImportanceEntry:
    """A single (feature, importance) pair from a model's importance table."""

    feature_name: str
    importance: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "feature_name", str(self.feature_name))
        object.__setattr__(self, "importance", float(self.importance))


@dataclass(frozen=True)
class RecordSet:
    """
    Ordered, immutable collection of observations from one ingested dataset.

    Parameters
    ----------
    observations:
        Observations in chronological order.
    baseline_names:
        Declared baseline columns, in declaration order. When omitted, the
        schema is taken from the first observation.

    Raises
    ------
    SchemaMismatchError
        If any observation does not carry exactly the declared baseline columns,
        or a baseline name collides with the primary column name.
    """

    observations: tuple[Observation, ...]
    baseline_names: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        obs = tuple(self.observations)
        object.__setattr__(self, "observations", obs)

        if self.baseline_names is None:
            names = tuple(obs[0].baseline_forecasts) if obs else ()
        else:
            names = tuple(str(n) for n in self.baseline_names)
        object.__setattr__(self, "baseline_names", names)

        if len(set(names)) != len(names):
            raise SchemaMismatchError(f"Duplicate baseline column names: {list(names)}")
        if PRIMARY_COLUMN in names:
            raise SchemaMismatchError(
                f"Baseline column may not be named {PRIMARY_COLUMN!r}; it is the primary column."
            )

        expected = set(names)
        for i, o in enumerate(obs):
            got = set(o.baseline_forecasts)
            if got != expected:
                missing = sorted(expected - got)
                extra = sorted(got - expected)
                raise SchemaMismatchError(
                    f"Observation {i} does not match the baseline schema "
                    f"(missing={missing}, unexpected={extra})."
                )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_arrays(
        cls,
        *,
        actual: Sequence[float],
        median_forecast: Sequence[float],
        lower_bound: Sequence[float],
        upper_bound: Sequence[float],
        timestamps: Sequence[Hashable] | None = None,
        baselines: Mapping[str, Sequence[float]] | None = None,
    ) -> RecordSet:
        """
        Build a RecordSet from aligned per-record arrays.

        ``timestamps`` defaults to ``0..n-1``. Every array must have the same
        length as ``actual``.
        """
        actual = list(actual)
        n = len(actual)
        ts = list(timestamps) if timestamps is not None else list(range(n))
        columns: dict[str, list[float]] = {
            "median_forecast": list(median_forecast),
            "lower_bound": list(lower_bound),
            "upper_bound": list(upper_bound),
        }
        for name, values in columns.items():
            ensure_equal_length(actual, values, name_a="actual", name_b=name, context="RecordSet")
        ensure_equal_length(actual, ts, name_a="actual", name_b="timestamps", context="RecordSet")

        base = {str(k): list(v) for k, v in (baselines or {}).items()}
        for name, values in base.items():
            ensure_equal_length(actual, values, name_a="actual", name_b=name, context="RecordSet")

        observations = tuple(
            Observation(
                timestamp=ts[i],
                actual=actual[i],
                median_forecast=columns["median_forecast"][i],
                lower_bound=columns["lower_bound"][i],
                upper_bound=columns["upper_bound"][i],
                baseline_forecasts={name: values[i] for name, values in base.items()},
            )
            for i in range(n)
        )
        return cls(observations=observations, baseline_names=tuple(base))

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    # ------------------------------------------------------------------
    # Column access
    # ------------------------------------------------------------------
    @property
    def columns(self) -> tuple[str, ...]:
        """Forecast columns: the primary column first, then baselines."""
        return (PRIMARY_COLUMN, *self.baseline_names)

    def has_column(self, name: str) -> bool:
        return name == PRIMARY_COLUMN or name in self.baseline_names

    @property
    def timestamps(self) -> tuple[Hashable, ...]:
        return tuple(o.timestamp for o in self.observations)

    @cached_property
    def actual(self) -> np.ndarray:
        return _frozen_array(o.actual for o in self.observations)

    @cached_property
    def median_forecast(self) -> np.ndarray:
        return _frozen_array(o.median_forecast for o in self.observations)

    @cached_property
    def lower_bound(self) -> np.ndarray:
        return _frozen_array(o.lower_bound for o in self.observations)

    @cached_property
    def upper_bound(self) -> np.ndarray:
        return _frozen_array(o.upper_bound for o in self.observations)

    def column(self, name: str) -> np.ndarray:
        """
        Per-record values of a forecast column.

        Parameters
        ----------
        name:
            ``"median_forecast"`` or one of ``baseline_names``.

        Raises
        ------
        SchemaMismatchError
            If the column is not part of this RecordSet's schema.
        """
        if name == PRIMARY_COLUMN:
            return self.median_forecast
        if name not in self.baseline_names:
            raise SchemaMismatchError(
                f"Forecast column {name!r} not found; available: {list(self.columns)}"
            )
        return _frozen_array(o.baseline_forecasts[name] for o in self.observations)


def _frozen_array(values) -> np.ndarray:
    arr = np.fromiter(values, dtype=float)
    arr.flags.writeable = False
    return arr
