"""
Run-level orchestration for forecast evaluation.

This module is the "wiring layer" between:
- one materialized RecordSet (and an optional importance table),
- the independent evaluation components (point, interval, rolling, Q-Q,
  leaderboard, importance),
- and a single DiagnosticsReport handed to a renderer.

Design goals
------------
- Keep component modules pure (no orchestration inside metrics/ or
  model_selection/).
- A failing component never aborts the run: its typed error is logged and
  recorded, and every other component still reports.

This module does NOT persist artifacts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import numpy as np

from ..config import EvaluationConfig, EvaluationPreset, resolve_config
from ..features.importance import rank_importance
from ..metrics.interval import compute_interval_metrics
from ..metrics.point import compute_point_metrics
from ..metrics.results import MetricResult
from ..metrics.rolling import cumulative_error, rolling_mean
from ..model_selection.leaderboard import build_leaderboard
from ..records import ImportanceEntry, RecordSet
from ..utils.validation import EmptyInputError, EvaluationError
from .quantile import qq_pairs
from .results import ComponentFailure, DiagnosticsReport

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run_component(
    name: str,
    fn: Callable[[], T],
    failures: list[ComponentFailure],
) -> T | None:
    logger.debug("Running component '%s'", name)
    try:
        return fn()
    except EvaluationError as e:
        logger.warning("Component '%s' failed: %s: %s", name, type(e).__name__, e)
        failures.append(ComponentFailure(component=name, error_type=type(e).__name__, message=str(e)))
        return None


def _rolling_error(records: RecordSet, window: int) -> MetricResult:
    if len(records) == 0:
        raise EmptyInputError("Cannot compute rolling error on an empty RecordSet.")
    abs_err = np.abs(records.actual - records.median_forecast)
    return MetricResult("rolling_mae", rolling_mean(abs_err, window), n_obs=len(records))


def _cumulative_abs_error(records: RecordSet) -> MetricResult:
    if len(records) == 0:
        raise EmptyInputError("Cannot compute cumulative error on an empty RecordSet.")
    series = cumulative_error(records.actual, records.median_forecast, kind="absolute")
    return MetricResult("cumulative_abs_error", series, n_obs=len(records))


def _last_forecast(records: RecordSet) -> MetricResult:
    if len(records) == 0:
        raise EmptyInputError("No forecasts in an empty RecordSet.")
    return MetricResult("last_forecast", float(records.median_forecast[-1]), n_obs=len(records))


def run_diagnostics(
    records: RecordSet,
    *,
    importance: Iterable[ImportanceEntry] | None = None,
    config: EvaluationConfig | EvaluationPreset | str | None = None,
    reference: str | None = None,
) -> DiagnosticsReport:
    """
    Run every evaluation component over one RecordSet.

    Parameters
    ----------
    records:
        Fully ingested RecordSet.
    importance:
        Optional feature-importance table. When omitted, ranking is skipped.
    config:
        EvaluationConfig, preset, preset name, or None (hourly defaults).
    reference:
        Optional leaderboard reference model name.

    Returns
    -------
    DiagnosticsReport
        Partial results plus the list of failed components. The leaderboard
        runs only when the RecordSet has baseline columns.

    Raises
    ------
    TypeError, ValueError
        If ``config`` cannot be resolved. Component errors are never raised.
    """
    cfg = resolve_config(config)
    failures: list[ComponentFailure] = []
    logger.info(
        "Evaluating %d records (%d baseline columns, coverage_window=%d, error_window=%d)",
        len(records),
        len(records.baseline_names),
        cfg.coverage_window,
        cfg.error_window,
    )

    point = _run_component("point", lambda: compute_point_metrics(records), failures)
    interval = _run_component(
        "interval",
        lambda: compute_interval_metrics(
            records,
            window=cfg.coverage_window,
            target_coverage=cfg.effective_target_coverage,
        ),
        failures,
    )
    rolling_error = _run_component(
        "rolling_error", lambda: _rolling_error(records, cfg.error_window), failures
    )
    cumulative_abs = _run_component(
        "cumulative_abs_error", lambda: _cumulative_abs_error(records), failures
    )
    last = _run_component("last_forecast", lambda: _last_forecast(records), failures)
    qq = _run_component("qq", lambda: qq_pairs(records), failures)

    leaderboard = None
    if records.baseline_names:
        leaderboard = _run_component(
            "leaderboard",
            lambda: build_leaderboard(
                records,
                reference=reference,
                primary_label=cfg.primary_label,
                reference_names=cfg.reference_names,
            ),
            failures,
        )
    else:
        logger.info("No baseline columns; skipping leaderboard")

    ranked = None
    if importance is not None:
        entries = list(importance)
        ranked_list = _run_component(
            "importance", lambda: rank_importance(entries, cfg.top_k), failures
        )
        ranked = tuple(ranked_list) if ranked_list is not None else None

    report = DiagnosticsReport(
        n_obs=len(records),
        point=point,
        interval=interval,
        rolling_error=rolling_error,
        cumulative_abs_error=cumulative_abs,
        last_forecast=last,
        qq=qq,
        leaderboard=leaderboard,
        importance=ranked,
        failures=tuple(failures),
    )

    if failures:
        logger.warning(
            "Evaluation finished with %d failed component(s): %s",
            len(failures),
            ", ".join(report.failed_components),
        )
    else:
        logger.info("Evaluation finished; all components succeeded")
    return report


def summarize_report(report: DiagnosticsReport) -> dict[str, Any]:
    """
    Headline numbers of a report (MAE, RMSE, R², directional accuracy, PICP,
    last forecast, best model), ``None`` where unavailable.
    """
    point = report.point
    return {
        "n_obs": report.n_obs,
        "mae": point.mae.value if point is not None else None,
        "rmse": point.rmse.value if point is not None else None,
        "r2": point.r2.value if point is not None else None,
        "directional_accuracy": point.directional_accuracy.value if point is not None else None,
        "picp": report.interval.picp.value if report.interval is not None else None,
        "last_forecast": report.last_forecast.value if report.last_forecast is not None else None,
        "best_model": report.leaderboard.best.name if report.leaderboard is not None else None,
        "failed_components": list(report.failed_components),
    }
