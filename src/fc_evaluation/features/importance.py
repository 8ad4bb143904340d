from __future__ import annotations

from typing import Iterable, List

from ..records import ImportanceEntry
from ..utils.validation import ensure_non_negative_k


def rank_importance(entries: Iterable[ImportanceEntry], k: int) -> List[ImportanceEntry]:
    """
    Rank a feature-importance table and keep the top ``k`` entries.

    The sort is descending by importance and stable: entries with equal
    importance keep their original relative order. Importance values are
    passed through unchanged (no normalization).

    Parameters
    ----------
    entries : iterable of ImportanceEntry
        Importance table in any order.

    k : int
        Number of entries to keep. ``0`` yields an empty list; a ``k`` larger
        than the table keeps every entry.

    Returns
    -------
    list of ImportanceEntry

    Raises
    ------
    InvalidParameterError
        If ``k`` is negative.
    """
    k = ensure_non_negative_k(k, context="rank_importance")
    ranked = sorted(entries, key=lambda e: e.importance, reverse=True)
    return ranked[:k]
