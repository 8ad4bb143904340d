"""
Residual diagnostics and run-level orchestration.

Public API
----------
erfinv
    Newton-refined inverse error function.
normal_quantiles
    Theoretical standard-normal quantiles for a sample of size n.
standardize
    Standardize values with the sample mean and sample deviation (ddof=1).
residuals
    Per-record residuals of the primary forecast.
qq_pairs / QQResult
    Residual Q-Q diagnostic for the primary forecast.

run_diagnostics
    Run every evaluation component over a RecordSet, collecting partial
    results and component failures.
summarize_report
    Headline numbers of a report.
DiagnosticsReport / ComponentFailure
    Portable run-level result artifacts.
"""

from __future__ import annotations

from .quantile import (
    QQResult,
    erfinv,
    normal_quantiles,
    plotting_positions,
    qq_pairs,
    residuals,
    standardize,
)
from .results import COMPONENTS, ComponentFailure, DiagnosticsReport
from .run import run_diagnostics, summarize_report

__all__ = [
    "COMPONENTS",
    "ComponentFailure",
    "DiagnosticsReport",
    "QQResult",
    "erfinv",
    "normal_quantiles",
    "plotting_positions",
    "qq_pairs",
    "residuals",
    "run_diagnostics",
    "standardize",
    "summarize_report",
]
