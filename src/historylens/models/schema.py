"""
Pydantic models for browsing-history records and query results.

This module defines the boundary schema for history payloads handed to
HistoryLens by a host (a browser extension, a JSON export, a test). Payloads
are validated strictly: a missing or wrongly typed field is rejected with a
descriptive error instead of being silently defaulted.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError

from historylens.errors import InvalidHistoryInputError


class HistoryRecord(BaseModel):
    """
    A single browsing-history entry.

    Records are immutable and compared structurally. The model accepts
    records that the validity filter will later drop (empty URL,
    non-positive timestamp, oversized strings): those are data-quality
    issues, not boundary errors.
    """

    url: str = Field(description="Visited URL")
    title: str = Field(description="Page title (may be empty)")
    visit_count: int = Field(
        ge=0,
        validation_alias=AliasChoices("visit_count", "visitCount"),
        description="Number of recorded visits",
    )
    last_visit_time: float = Field(
        validation_alias=AliasChoices("last_visit_time", "lastVisitTime"),
        description="Last visit, milliseconds since the Unix epoch",
    )

    class Config:
        frozen = True
        strict = True
        extra = "ignore"  # Browser history items carry id, typedCount, ...
        populate_by_name = True


class HistoryQuery(BaseModel):
    """A free-text query with an optional date range and a result cap."""

    text: str = Field(description="Free-text query")
    start_time: Optional[float] = Field(
        default=None, description="Inclusive lower bound on last_visit_time (ms)"
    )
    end_time: Optional[float] = Field(
        default=None, description="Inclusive upper bound on last_visit_time (ms)"
    )
    max_results: int = Field(
        default=50, ge=0, description="Maximum number of records to return"
    )


class DomainStat(BaseModel):
    """Aggregated visit statistics for one domain."""

    domain: str = Field(description="Host part of the URL as extracted")
    entry_count: int = Field(description="Number of history records on this domain")
    total_visits: int = Field(description="Sum of visit_count over those records")


@dataclass(frozen=True)
class ScoredRecord:
    """A record paired with its relevance score; only lives inside the ranker."""

    record: HistoryRecord
    score: float


_RECORDS_ADAPTER = TypeAdapter(list[HistoryRecord])

_EXPECTED_SHAPE = (
    "Ensure entries have: url (string), title (string), "
    "visit_count (integer), last_visit_time (number)."
)


def parse_history_records(payload: Any) -> list[HistoryRecord]:
    """
    Validate a raw payload (a list of mappings) into history records.

    Args:
        payload: Decoded JSON or any list of dicts / HistoryRecord objects

    Returns:
        List of HistoryRecord in payload order

    Raises:
        InvalidHistoryInputError: If the payload is not a list or any entry
            is missing a field or carries a wrongly typed value.
    """
    try:
        return _RECORDS_ADAPTER.validate_python(payload)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'entries'}: {err['msg']}"
            for err in e.errors()
        ]
        shown = "; ".join(problems[:5])
        if len(problems) > 5:
            shown += f"; ... ({len(problems) - 5} more)"
        raise InvalidHistoryInputError(
            f"Failed to parse entries: {shown}. {_EXPECTED_SHAPE}", problems
        ) from e
