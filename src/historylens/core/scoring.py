"""
Relevance scoring for history records.

The score is additive over independent factors: keyword matches in the title
and URL, visit popularity (logarithmic) and recency bands. Scores are not
normalized and are only comparable within one query.
"""

import math
from collections.abc import Iterable

from historylens.models.schema import HistoryRecord

MS_PER_DAY = 1000.0 * 60.0 * 60.0 * 24.0

TITLE_MATCH_WEIGHT = 3.0
URL_MATCH_WEIGHT = 2.0
POPULARITY_WEIGHT = 0.5

# (upper bound in days, bonus); first matching band wins
RECENCY_BANDS = (
    (1.0, 2.0),  # today
    (7.0, 1.0),  # this week
    (30.0, 0.5),  # this month
)


def days_between(current_time: float, visit_time: float) -> float:
    """Age of a visit in days, both timestamps in milliseconds."""
    return (current_time - visit_time) / MS_PER_DAY


def normalize_keywords(keywords: Iterable[str]) -> list[str]:
    """Lower-case keywords and drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(keyword.lower() for keyword in keywords))


def popularity_bonus(visit_count: int) -> float:
    # ln(0) diverges; a never-visited record gets no popularity bonus
    if visit_count <= 0:
        return 0.0
    return math.log(visit_count) * POPULARITY_WEIGHT


def recency_bonus(days_old: float) -> float:
    for upper_bound, bonus in RECENCY_BANDS:
        if days_old < upper_bound:
            return bonus
    return 0.0


def calculate_relevance_score(
    record: HistoryRecord, keywords: Iterable[str], current_time: float
) -> float:
    """
    Compute the relevance score of one record.

    Args:
        record: The history record to score
        keywords: Query keywords; matched case-insensitively, each counted once
        current_time: Reference time in milliseconds (never the wall clock)

    Returns:
        Non-normalized score, higher is more relevant
    """
    title_lower = record.title.lower()
    url_lower = record.url.lower()

    score = 0.0
    for keyword in normalize_keywords(keywords):
        if keyword in title_lower:
            score += TITLE_MATCH_WEIGHT
        if keyword in url_lower:
            score += URL_MATCH_WEIGHT

    score += popularity_bonus(record.visit_count)
    score += recency_bonus(days_between(current_time, record.last_visit_time))

    return score
