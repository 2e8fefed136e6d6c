"""HistoryLens - bounded-memory relevance search over browsing history."""

from historylens.errors import (
    HistoryLensError,
    InvalidHistoryInputError,
    QueryTooLongError,
)
from historylens.models import (
    DomainStat,
    HistoryQuery,
    HistoryRecord,
    parse_history_records,
)
from historylens.core.domains import analyze_domain_patterns
from historylens.core.formatting import format_history_for_llm
from historylens.core.keywords import extract_domain, extract_keywords
from historylens.core.ranking import (
    sort_by_relevance_with_keywords,
    sort_history_by_relevance,
)
from historylens.core.search import find_relevant_history, search

__version__ = "0.1.0"

__all__ = [
    "DomainStat",
    "HistoryLensError",
    "HistoryQuery",
    "HistoryRecord",
    "InvalidHistoryInputError",
    "QueryTooLongError",
    "analyze_domain_patterns",
    "extract_domain",
    "extract_keywords",
    "find_relevant_history",
    "format_history_for_llm",
    "parse_history_records",
    "search",
    "sort_by_relevance_with_keywords",
    "sort_history_by_relevance",
]
