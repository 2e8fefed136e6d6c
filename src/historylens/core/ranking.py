"""
Deterministic ranking of history records.

Two modes:
- plain: visit count, then recency (used when a query has no keywords)
- scored: relevance score from :mod:`historylens.core.scoring`

Both sorts are stable, so records that compare equal keep their input order.
"""

import math
from collections.abc import Iterable

from historylens.core.filters import recency_sort_key
from historylens.core.scoring import calculate_relevance_score, normalize_keywords
from historylens.models.schema import HistoryRecord, ScoredRecord


def sort_history_by_relevance(records: Iterable[HistoryRecord]) -> list[HistoryRecord]:
    """Sort by visit_count descending, then last_visit_time descending."""
    return sorted(records, key=lambda r: (-r.visit_count, recency_sort_key(r)))


def _score_sort_key(scored: ScoredRecord) -> float:
    # NaN compares unequal to everything; pin it below every real score
    if math.isnan(scored.score):
        return math.inf
    return -scored.score


def score_records(
    records: Iterable[HistoryRecord], keywords: Iterable[str], current_time: float
) -> list[ScoredRecord]:
    keywords_lower = normalize_keywords(keywords)
    return [
        ScoredRecord(
            record=record,
            score=calculate_relevance_score(record, keywords_lower, current_time),
        )
        for record in records
    ]


def sort_by_relevance_with_keywords(
    records: Iterable[HistoryRecord], keywords: Iterable[str], current_time: float
) -> list[HistoryRecord]:
    """
    Sort records by relevance score, highest first.

    Args:
        records: Records to rank
        keywords: Query keywords
        current_time: Reference time in milliseconds for the recency bonus

    Returns:
        Records ordered by descending score; equal scores keep input order
    """
    scored = score_records(records, keywords, current_time)
    scored.sort(key=_score_sort_key)
    return [s.record for s in scored]
