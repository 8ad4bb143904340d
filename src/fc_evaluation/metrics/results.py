"""
Portable metric result artifacts.

Every scalar or series the engine reports travels as a :class:`MetricResult`,
paired with the number of observations it was computed from so consumers can
judge its statistical weight. Mathematically undefined results are carried as
an explicit UNDEFINED status with a reason, never as 0, NaN, or infinity.

This module is pure (no pandas, no orchestration).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

MetricValue = Union[float, tuple[Union[float, None], ...], None]


class MetricStatus(str, Enum):
    """Whether a metric carries a value."""

    OK = "ok"
    UNDEFINED = "undefined"


@dataclass(frozen=True)
class MetricResult:
    """
    A named scalar or ordered series with the sample count used.

    Fields
    ------
    name:
        Stable metric identifier (e.g. ``"mae"``, ``"rolling_coverage"``).
    value:
        Float for scalars, tuple for series (``None`` entries mark positions
        without enough history), ``None`` when the metric is undefined.
    n_obs:
        Number of observations that entered the computation.
    status:
        ``MetricStatus.OK`` or ``MetricStatus.UNDEFINED``.
    reason:
        Why the metric is undefined (empty for OK results).
    """

    name: str
    value: MetricValue
    n_obs: int
    status: MetricStatus = MetricStatus.OK
    reason: str = ""

    @classmethod
    def undefined(cls, name: str, *, n_obs: int, reason: str) -> MetricResult:
        return cls(name=name, value=None, n_obs=n_obs, status=MetricStatus.UNDEFINED, reason=reason)

    @property
    def is_defined(self) -> bool:
        return self.status is MetricStatus.OK

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict (series become lists)."""
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {
            "name": self.name,
            "value": value,
            "n_obs": self.n_obs,
            "status": self.status.value,
            "reason": self.reason,
        }
