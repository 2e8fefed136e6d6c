"""
Bounded relevance search over browsing history.

Implements the combined query pipeline: validity filtering, staged
truncation, keyword filtering, scoring and ranking. Every stage works on
in-memory lists so worst-case cost is bounded by the configured caps,
whatever the size of the caller's history.
"""

from collections.abc import Iterable
from typing import Optional

from loguru import logger

from historylens.config import Settings, get_settings
from historylens.core.filters import (
    filter_history_by_date_range,
    filter_history_by_keywords,
    keep_most_recent,
    limit_history_results,
    sanitize_records,
)
from historylens.core.keywords import extract_keywords
from historylens.core.ranking import (
    sort_by_relevance_with_keywords,
    sort_history_by_relevance,
)
from historylens.errors import QueryTooLongError
from historylens.models.schema import HistoryQuery, HistoryRecord


class HistorySearcher:
    """
    Relevance search engine with a staged bounding policy.

    Caps (from Settings):
    1. max_query_length: longer queries are rejected
    2. max_entries: valid records kept (most recent) before ranking
    3. max_scoring_entries: keyword matches kept (most recent) before scoring
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the searcher with the given (or global) settings."""
        self.settings = settings or get_settings()

        logger.debug(
            "HistorySearcher initialized "
            f"(max_entries={self.settings.max_entries}, "
            f"max_scoring_entries={self.settings.max_scoring_entries})"
        )

    def check_query(self, query: str) -> None:
        """
        Reject queries longer than the configured limit.

        Raises:
            QueryTooLongError: If the query exceeds max_query_length
        """
        if len(query) > self.settings.max_query_length:
            raise QueryTooLongError(len(query), self.settings.max_query_length)

    def find_relevant_history(
        self,
        records: Iterable[HistoryRecord],
        query: str,
        max_results: int,
        current_time: float,
    ) -> list[HistoryRecord]:
        """
        Filter, score and rank records against a free-text query.

        Args:
            records: Caller-supplied history records, in any order
            query: Free-text query
            max_results: Maximum number of records to return
            current_time: Reference time in milliseconds for recency scoring

        Returns:
            At most max_results records, most relevant first

        Raises:
            QueryTooLongError: If the query exceeds max_query_length
        """
        self.check_query(query)
        max_results = max(max_results, 0)

        entries = sanitize_records(records, self.settings.max_field_length)

        if len(entries) > self.settings.max_entries:
            logger.warning(
                f"{len(entries):,} valid records exceed the cap of "
                f"{self.settings.max_entries:,}; keeping the most recent"
            )
            entries = keep_most_recent(entries, self.settings.max_entries)

        if not entries:
            logger.info("No valid history records to search")
            return []

        keywords = extract_keywords(query)

        if not keywords:
            logger.debug("Query has no keywords, ranking by visits and recency")
            results = limit_history_results(
                sort_history_by_relevance(entries), max_results
            )
            logger.info(f"Plain ranking returned {len(results)} of {len(entries):,} records")
            return results

        logger.debug(f"Keywords: {keywords}")

        matched = filter_history_by_keywords(entries, keywords)
        logger.debug(f"Keyword filter kept {len(matched):,} of {len(entries):,} records")

        if len(matched) > self.settings.max_scoring_entries:
            logger.warning(
                f"{len(matched):,} keyword matches exceed the scoring cap of "
                f"{self.settings.max_scoring_entries:,}; keeping the most recent"
            )
            matched = keep_most_recent(matched, self.settings.max_scoring_entries)

        ranked = sort_by_relevance_with_keywords(matched, keywords, current_time)
        results = limit_history_results(ranked, max_results)

        logger.info(
            f"Scored search returned {len(results)} of {len(matched):,} matching records"
        )
        return results

    def search(
        self,
        query: HistoryQuery,
        records: Iterable[HistoryRecord],
        current_time: float,
    ) -> list[HistoryRecord]:
        """
        Run a HistoryQuery: apply its optional date range, then the combined query.

        An open-ended side of the range is left unbounded.
        """
        self.check_query(query.text)

        if query.start_time is not None or query.end_time is not None:
            start = query.start_time if query.start_time is not None else float("-inf")
            end = query.end_time if query.end_time is not None else float("inf")
            records = filter_history_by_date_range(records, start, end)
            logger.debug(f"Date range filter kept {len(records):,} records")

        return self.find_relevant_history(
            records, query.text, query.max_results, current_time
        )


# Global instance (lazy-loaded)
_searcher: Optional[HistorySearcher] = None


def get_searcher() -> HistorySearcher:
    """
    Get the global HistorySearcher instance.

    Returns:
        HistorySearcher instance
    """
    global _searcher
    if _searcher is None:
        _searcher = HistorySearcher()
    return _searcher


def reset_searcher() -> None:
    """Drop the global searcher so the next call picks up reloaded settings."""
    global _searcher
    _searcher = None


def find_relevant_history(
    records: Iterable[HistoryRecord],
    query: str,
    max_results: int,
    current_time: float,
) -> list[HistoryRecord]:
    """
    Convenience function for the combined query with the global settings.

    Args:
        records: Caller-supplied history records
        query: Free-text query
        max_results: Maximum number of records to return
        current_time: Reference time in milliseconds

    Returns:
        At most max_results records, most relevant first
    """
    return get_searcher().find_relevant_history(
        records, query, max_results, current_time
    )


def search(
    query: HistoryQuery, records: Iterable[HistoryRecord], current_time: float
) -> list[HistoryRecord]:
    """Convenience function to run a HistoryQuery with the global settings."""
    return get_searcher().search(query, records, current_time)
