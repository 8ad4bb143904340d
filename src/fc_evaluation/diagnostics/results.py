"""
Portable result artifacts for a full diagnostics run.

This module defines small, stable, JSON-friendly containers intended for:

- returning everything a renderer needs from one orchestration call,
- reporting partial results together with the components that failed,
- exporting results without depending on internal component layouts.

Design goals
------------
- Keep this module *pure* (no orchestration, no pandas dependency).
- Avoid importing the orchestration layer (diagnostics/run.py) to prevent cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from ..metrics.interval import IntervalMetrics
from ..metrics.point import PointMetrics
from ..metrics.results import MetricResult
from ..model_selection.leaderboard import Leaderboard
from ..records import ImportanceEntry
from .quantile import QQResult

COMPONENTS: Final[tuple[str, ...]] = (
    "point",
    "interval",
    "rolling_error",
    "cumulative_abs_error",
    "last_forecast",
    "qq",
    "leaderboard",
    "importance",
)


@dataclass(frozen=True)
class ComponentFailure:
    """A component that raised a typed evaluation error during a run."""

    component: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "component": self.component,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(frozen=True)
class DiagnosticsReport:
    """
    Everything produced by one evaluation run.

    A field is ``None`` when its component failed (see ``failures``) or, for
    ``leaderboard`` and ``importance``, when its optional input was absent.

    Fields
    ------
    n_obs:
        Number of records in the evaluated RecordSet.
    point:
        Accuracy of the primary forecast.
    interval:
        Coverage and width diagnostics (includes rolling coverage).
    rolling_error:
        Trailing rolling MAE of the primary forecast.
    cumulative_abs_error:
        Running sum of absolute error of the primary forecast.
    last_forecast:
        Most recent point forecast.
    qq:
        Residual Q-Q pairs.
    leaderboard:
        Ranked comparison against baselines (None without baseline columns).
    importance:
        Top-k feature-importance entries (None without an importance table).
    failures:
        Components that failed, in evaluation order.
    """

    n_obs: int
    point: PointMetrics | None = None
    interval: IntervalMetrics | None = None
    rolling_error: MetricResult | None = None
    cumulative_abs_error: MetricResult | None = None
    last_forecast: MetricResult | None = None
    qq: QQResult | None = None
    leaderboard: Leaderboard | None = None
    importance: tuple[ImportanceEntry, ...] | None = None
    failures: tuple[ComponentFailure, ...] = ()

    @property
    def rolling_coverage(self) -> MetricResult | None:
        return self.interval.rolling_coverage if self.interval is not None else None

    @property
    def failed_components(self) -> tuple[str, ...]:
        return tuple(f.component for f in self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def succeeded(self, component: str) -> bool:
        """Whether ``component`` ran and produced a result."""
        if component not in COMPONENTS:
            raise KeyError(f"Unknown component {component!r}; expected one of {list(COMPONENTS)}.")
        return getattr(self, component) is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""

        def _dump(v: Any) -> Any:
            return v.to_dict() if v is not None else None

        return {
            "n_obs": self.n_obs,
            "point": _dump(self.point),
            "interval": _dump(self.interval),
            "rolling_error": _dump(self.rolling_error),
            "cumulative_abs_error": _dump(self.cumulative_abs_error),
            "last_forecast": _dump(self.last_forecast),
            "qq": _dump(self.qq),
            "leaderboard": _dump(self.leaderboard),
            "importance": (
                [{"feature_name": e.feature_name, "importance": e.importance} for e in self.importance]
                if self.importance is not None
                else None
            ),
            "failures": [f.to_dict() for f in self.failures],
        }
