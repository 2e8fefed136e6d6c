"""Data models for HistoryLens."""

from .schema import (
    DomainStat,
    HistoryQuery,
    HistoryRecord,
    ScoredRecord,
    parse_history_records,
)

__all__ = [
    "DomainStat",
    "HistoryQuery",
    "HistoryRecord",
    "ScoredRecord",
    "parse_history_records",
]
