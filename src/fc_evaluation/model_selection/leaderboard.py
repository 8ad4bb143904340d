"""
Forecaster leaderboard.

Ranks the primary forecast and every baseline column of a RecordSet by MAE
(ties broken by RMSE, then by declaration order), reports each candidate's
relative improvement over a reference model, and derives a cumulative
squared-error series per candidate for visual comparison.

Reference selection
-------------------
1. An explicitly requested reference, if present among the ranked candidates.
2. Otherwise the first candidate whose name matches one of the configured
   naive / random-walk names (case and punctuation are ignored).
3. Otherwise the worst-ranked candidate.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from ..records import PRIMARY_COLUMN, RecordSet
from ..utils.validation import (
    DegenerateMetricError,
    EmptyInputError,
    InvalidParameterError,
    SchemaMismatchError,
)
from ..metrics.point import mae, rmse, scored_pairs
from ..metrics.rolling import cumulative_error

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_NAMES: tuple[str, ...] = ("Random Walk", "Naive")


@dataclass(frozen=True)
class LeaderboardRow:
    """One ranked candidate."""

    rank: int
    name: str
    column: str
    mae: float
    rmse: float
    n_obs: int
    relative_improvement: float | None
    is_reference: bool = False
    is_primary: bool = False
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "name": self.name,
            "column": self.column,
            "mae": self.mae,
            "rmse": self.rmse,
            "n_obs": self.n_obs,
            "relative_improvement": self.relative_improvement,
            "is_reference": self.is_reference,
            "is_primary": self.is_primary,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Leaderboard:
    """
    Ranked comparison of forecasters.

    Fields
    ------
    rows:
        Candidates in rank order (rank 1 = lowest MAE).
    reference:
        Display name of the reference model.
    cumulative_errors:
        ``(name, series)`` pairs in rank order; each series is the running sum
        of squared error over chronological order.
    skipped:
        ``(name, reason)`` pairs for requested candidates that could not be
        scored (absent column, no usable rows).
    """

    rows: tuple[LeaderboardRow, ...]
    reference: str
    cumulative_errors: tuple[tuple[str, tuple[float, ...]], ...]
    skipped: tuple[tuple[str, str], ...] = ()

    @property
    def best(self) -> LeaderboardRow:
        return self.rows[0]

    def row(self, name: str) -> LeaderboardRow:
        for r in self.rows:
            if r.name == name or r.column == name:
                return r
        raise KeyError(f"No leaderboard row named {name!r}.")

    def cumulative_error_for(self, name: str) -> tuple[float, ...]:
        for n, series in self.cumulative_errors:
            if n == name:
                return series
        raise KeyError(f"No cumulative error series named {name!r}.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference": self.reference,
            "rows": [r.to_dict() for r in self.rows],
            "cumulative_errors": {n: list(s) for n, s in self.cumulative_errors},
            "skipped": [{"name": n, "reason": why} for n, why in self.skipped],
        }

    def to_frame(self) -> pd.DataFrame:
        """Leaderboard as a DataFrame indexed by rank."""
        df = pd.DataFrame([r.to_dict() for r in self.rows])
        if not df.empty:
            df = df.set_index("rank")
        return df


def _normalize_name(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


def relative_improvement(candidate_mae: float, reference_mae: float) -> float:
    """
    ``1 - MAE_candidate / MAE_reference``. Positive means better than the
    reference; the value is unbounded in both directions.

    Raises
    ------
    DegenerateMetricError
        If the reference MAE is zero.
    """
    if reference_mae == 0.0:
        raise DegenerateMetricError("Relative improvement is undefined for a zero reference MAE.")
    return 1.0 - candidate_mae / reference_mae


def build_leaderboard(
    records: RecordSet,
    *,
    candidates: Sequence[str] | None = None,
    reference: str | None = None,
    primary_label: str = "Model",
    reference_names: Sequence[str] = DEFAULT_REFERENCE_NAMES,
) -> Leaderboard:
    """
    Rank forecasters by MAE and report improvement over a reference.

    Parameters
    ----------
    records:
        RecordSet carrying the primary forecast and baseline columns.
    candidates:
        Optional subset of baseline column names to rank. Names not present in
        the RecordSet are skipped, not scored as zero. The primary forecast is
        always ranked.
    reference:
        Name (display name or column) of the reference model. Falls back to the
        default rule, with a warning, if it is not among the ranked rows.
    primary_label:
        Display name for the primary (median) forecast.
    reference_names:
        Preferred default reference names (naive / random-walk baselines).

    Returns
    -------
    Leaderboard

    Raises
    ------
    EmptyInputError
        If the RecordSet is empty or the primary forecast has no usable rows.
    InvalidParameterError
        If ``primary_label`` equals the name of a ranked baseline column.
    """
    if len(records) == 0:
        raise EmptyInputError("Cannot build a leaderboard from an empty RecordSet.")

    if candidates is None:
        requested = list(records.baseline_names)
    else:
        requested = [c for c in candidates if c != PRIMARY_COLUMN]

    skipped: list[tuple[str, str]] = []
    columns: list[str] = [PRIMARY_COLUMN]
    for name in requested:
        if records.has_column(name):
            if name not in columns:
                columns.append(name)
        else:
            logger.warning("Leaderboard candidate %r not in RecordSet; skipping", name)
            skipped.append((name, "column_absent"))

    if primary_label in columns[1:]:
        raise InvalidParameterError(
            f"primary_label {primary_label!r} collides with a baseline column of the same name."
        )

    # (mae, rmse, declaration index, column, display name, n_obs)
    scored: list[tuple[float, float, int, str, str, int]] = []
    for idx, column in enumerate(columns):
        display = primary_label if column == PRIMARY_COLUMN else column
        try:
            y, yhat = scored_pairs(records, column)
        except EmptyInputError:
            if column == PRIMARY_COLUMN:
                raise
            logger.warning("Leaderboard candidate %r has no usable records; skipping", column)
            skipped.append((column, "no_usable_records"))
            continue
        except SchemaMismatchError:
            if column == PRIMARY_COLUMN:
                raise
            skipped.append((column, "column_absent"))
            continue
        scored.append((mae(y, yhat), rmse(y, yhat), idx, column, display, int(y.size)))

    scored.sort(key=lambda t: (t[0], t[1], t[2]))

    ref_column = _pick_reference(scored, reference, reference_names)
    ref_mae = next(t[0] for t in scored if t[3] == ref_column)

    rows: list[LeaderboardRow] = []
    for rank, (m, r, _, column, display, n) in enumerate(scored, start=1):
        is_ref = column == ref_column
        reason = ""
        if is_ref:
            improvement: float | None = 0.0
        else:
            try:
                improvement = relative_improvement(m, ref_mae)
            except DegenerateMetricError as e:
                improvement = None
                reason = str(e)
        rows.append(
            LeaderboardRow(
                rank=rank,
                name=display,
                column=column,
                mae=m,
                rmse=r,
                n_obs=n,
                relative_improvement=improvement,
                is_reference=is_ref,
                is_primary=column == PRIMARY_COLUMN,
                reason=reason,
            )
        )

    y_all = records.actual
    cumulative = tuple(
        (row.name, cumulative_error(y_all, records.column(row.column), kind="squared"))
        for row in rows
    )

    reference_display = next(row.name for row in rows if row.is_reference)
    return Leaderboard(
        rows=tuple(rows),
        reference=reference_display,
        cumulative_errors=cumulative,
        skipped=tuple(skipped),
    )


def _pick_reference(
    scored: Sequence[tuple[float, float, int, str, str, int]],
    reference: str | None,
    reference_names: Sequence[str],
) -> str:
    if reference is not None:
        for t in scored:
            if reference in (t[3], t[4]):
                return t[3]
        logger.warning(
            "Requested reference %r is not a ranked candidate; using the default reference",
            reference,
        )

    preferred = [_normalize_name(n) for n in reference_names]
    for key in preferred:
        for t in sorted(scored, key=lambda s: s[2]):
            if _normalize_name(t[4]) == key:
                return t[3]

    return scored[-1][3]
