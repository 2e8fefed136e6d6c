"""
Record filters: date range, keyword containment and validity.

All filters return new lists and keep the relative order of the input.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Optional

from loguru import logger

from historylens.config import get_settings
from historylens.models.schema import HistoryRecord


def filter_history_by_date_range(
    records: Iterable[HistoryRecord], start_time: float, end_time: float
) -> list[HistoryRecord]:
    """Keep records whose last visit lies in ``[start_time, end_time]``."""
    return [r for r in records if start_time <= r.last_visit_time <= end_time]


def matches_keywords(record: HistoryRecord, keywords: Sequence[str]) -> bool:
    """True if any (lower-cased) keyword is a substring of the title or URL."""
    title_lower = record.title.lower()
    url_lower = record.url.lower()
    return any(k in title_lower or k in url_lower for k in keywords)


def filter_history_by_keywords(
    records: Iterable[HistoryRecord], keywords: Iterable[str]
) -> list[HistoryRecord]:
    """
    Keep records where any keyword appears in the title or URL.

    Matching is case-insensitive substring containment. An empty keyword
    list matches nothing.
    """
    keywords_lower = [k.lower() for k in keywords]
    if not keywords_lower:
        return []
    return [r for r in records if matches_keywords(r, keywords_lower)]


def is_valid_record(
    record: HistoryRecord, max_field_length: Optional[int] = None
) -> bool:
    """
    Check that a record is plausible enough to be ranked.

    A record is rejected when its URL is empty, its timestamp is not a
    positive finite number, or its URL or title reaches the length ceiling.
    """
    if max_field_length is None:
        max_field_length = get_settings().max_field_length

    return (
        bool(record.url)
        and math.isfinite(record.last_visit_time)
        and record.last_visit_time > 0
        and len(record.url) < max_field_length
        and len(record.title) < max_field_length
    )


def sanitize_records(
    records: Iterable[HistoryRecord], max_field_length: Optional[int] = None
) -> list[HistoryRecord]:
    """Silently drop records that fail :func:`is_valid_record`."""
    if max_field_length is None:
        max_field_length = get_settings().max_field_length

    records = list(records)
    valid = [r for r in records if is_valid_record(r, max_field_length)]

    dropped = len(records) - len(valid)
    if dropped:
        logger.debug(f"Validity filter dropped {dropped:,} of {len(records):,} records")
    return valid


def limit_history_results(
    records: Iterable[HistoryRecord], max_count: int
) -> list[HistoryRecord]:
    """Return the first ``max_count`` records."""
    return list(records)[: max(max_count, 0)]


def recency_sort_key(record: HistoryRecord) -> float:
    # NaN timestamps sort after every comparable one
    if math.isnan(record.last_visit_time):
        return math.inf
    return -record.last_visit_time


def keep_most_recent(
    records: Iterable[HistoryRecord], limit: int
) -> list[HistoryRecord]:
    """
    Keep at most ``limit`` records, preferring the most recently visited.

    Input order is preserved when nothing has to be dropped; otherwise the
    survivors come back newest first (stable on equal timestamps).
    """
    records = list(records)
    if len(records) <= limit:
        return records
    return sorted(records, key=recency_sort_key)[: max(limit, 0)]
