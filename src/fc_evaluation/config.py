"""
Evaluation configuration and named presets.

One parameterized engine serves every dataset layout: the prediction-interval
quantile pair, rolling-window lengths, the importance top-k and the input
column names are all configuration rather than constants scattered through
the metric code.

Presets are small, named bundles of window lengths matched to a sampling
frequency. They are:

- stable and referenceable by name (e.g. in notebooks and reports),
- explicit (no hidden behavior),
- pure configuration (no computation).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Final

from .utils.validation import InvalidParameterError

DEFAULT_BASELINES: Final[tuple[str, ...]] = (
    "Random Walk",
    "Historical Mean",
    "Ridge Regression",
    "Random Forest",
    "Last Value",
)


@dataclass(frozen=True)
class ColumnMapping:
    """
    Names of the tabular input columns consumed by the DataFrame adapters.

    Defaults match the prediction / baseline / feature-importance exports the
    dashboard was built around (``Date``, ``y_true``, ``q10``/``q50``/``q90``).
    """

    timestamp: str = "Date"
    actual: str = "y_true"
    median: str = "q50"
    lower: str = "q10"
    upper: str = "q90"
    baselines: tuple[str, ...] = DEFAULT_BASELINES
    feature: str = "Feature"
    importance: str = "Importance"

    @property
    def required(self) -> tuple[str, ...]:
        return (self.timestamp, self.actual, self.median, self.lower, self.upper)


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Parameters for a full diagnostics run.

    Parameters
    ----------
    interval_quantiles:
        (lower, upper) forecast quantiles bounding the prediction interval.
    coverage_window:
        Rolling-coverage window in records.
    error_window:
        Rolling-MAE window in records.
    top_k:
        Number of features kept by importance ranking.
    target_coverage:
        Reference coverage; ``None`` means the nominal coverage of the
        quantile pair (``upper - lower``).
    primary_label:
        Display name of the primary (median) forecast on the leaderboard.
    reference_names:
        Preferred leaderboard reference models, matched case- and
        punctuation-insensitively against baseline names.
    columns:
        Input column mapping for the DataFrame adapters.
    """

    interval_quantiles: tuple[float, float] = (0.1, 0.9)
    coverage_window: int = 168
    error_window: int = 24
    top_k: int = 15
    target_coverage: float | None = None
    primary_label: str = "Model"
    reference_names: tuple[str, ...] = ("Random Walk", "Naive")
    columns: ColumnMapping = field(default_factory=ColumnMapping)

    def __post_init__(self) -> None:
        lo, hi = self.interval_quantiles
        if not 0.0 < lo < hi < 1.0:
            raise InvalidParameterError(
                f"interval_quantiles must satisfy 0 < lower < upper < 1; got {self.interval_quantiles}."
            )
        for name in ("coverage_window", "error_window"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidParameterError(f"{name} must be a positive integer; got {value!r}.")
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int) or self.top_k < 0:
            raise InvalidParameterError(f"top_k must be a non-negative integer; got {self.top_k!r}.")
        if self.target_coverage is not None and not 0.0 <= self.target_coverage <= 1.0:
            raise InvalidParameterError(
                f"target_coverage must lie in [0, 1]; got {self.target_coverage}."
            )

    @property
    def nominal_coverage(self) -> float:
        lo, hi = self.interval_quantiles
        return hi - lo

    @property
    def effective_target_coverage(self) -> float:
        if self.target_coverage is not None:
            return float(self.target_coverage)
        return self.nominal_coverage

    def with_overrides(self, **changes: Any) -> EvaluationConfig:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)


@dataclass(frozen=True)
class EvaluationPreset:
    """Named configuration bundle for a sampling frequency."""

    name: str
    description: str
    config: EvaluationConfig


HOURLY: Final[EvaluationPreset] = EvaluationPreset(
    name="hourly",
    description="Hourly data: one-week rolling coverage and 24-hour rolling MAE.",
    config=EvaluationConfig(coverage_window=168, error_window=24),
)

DAILY: Final[EvaluationPreset] = EvaluationPreset(
    name="daily",
    description="Daily data: four-week rolling coverage and one-week rolling MAE.",
    config=EvaluationConfig(coverage_window=28, error_window=7),
)

WEEKLY: Final[EvaluationPreset] = EvaluationPreset(
    name="weekly",
    description="Weekly data: quarterly rolling coverage and four-week rolling MAE.",
    config=EvaluationConfig(coverage_window=13, error_window=4),
)

EVALUATION_PRESETS: Final[Mapping[str, EvaluationPreset]] = {
    HOURLY.name: HOURLY,
    DAILY.name: DAILY,
    WEEKLY.name: WEEKLY,
}

EVALUATION_PRESET_NAMES: Final[Sequence[str]] = tuple(sorted(EVALUATION_PRESETS.keys()))


def get_evaluation_preset(name: str) -> EvaluationPreset:
    """
    Retrieve a preset by name.

    Raises
    ------
    KeyError
        If the preset name is unknown.
    """
    key = name.strip().lower()
    try:
        return EVALUATION_PRESETS[key]
    except KeyError as e:
        valid = ", ".join(EVALUATION_PRESET_NAMES)
        raise KeyError(f"Unknown evaluation preset '{name}'. Valid presets: {valid}.") from e


def resolve_config(config: EvaluationConfig | EvaluationPreset | str | None) -> EvaluationConfig:
    """
    Resolve a config, preset, preset name, or ``None`` into an EvaluationConfig.

    ``None`` resolves to the hourly defaults.

    Raises
    ------
    TypeError
        If ``config`` has an unsupported type.
    ValueError
        If ``config`` is a string but not a known preset name.
    """
    if config is None:
        return EvaluationConfig()
    if isinstance(config, EvaluationConfig):
        return config
    if isinstance(config, EvaluationPreset):
        return config.config
    if isinstance(config, str):
        try:
            return get_evaluation_preset(config).config
        except KeyError as e:
            raise ValueError(str(e)) from e
    raise TypeError(
        "`config` must be an EvaluationConfig, EvaluationPreset, preset name or None, "
        f"got {type(config).__name__}."
    )
