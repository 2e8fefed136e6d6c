"""Boundary errors raised by HistoryLens.

Only malformed input and over-long queries are errors. Invalid or oversized
individual records are data-quality issues and are filtered silently.
"""

from typing import Optional


class HistoryLensError(ValueError):
    """Base class for errors reported at the HistoryLens boundary."""


class InvalidHistoryInputError(HistoryLensError):
    """A history payload could not be validated into records."""

    def __init__(self, message: str, problems: Optional[list[str]] = None):
        super().__init__(message)
        self.problems = problems or []


class QueryTooLongError(HistoryLensError):
    """The query string exceeds the configured maximum length."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Query string too long: {length} characters (max {limit} characters)"
        )
        self.length = length
        self.limit = limit
