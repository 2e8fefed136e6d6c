"""Per-domain visit aggregation."""

from collections.abc import Iterable
from typing import Optional

from loguru import logger

from historylens.config import get_settings
from historylens.core.filters import sanitize_records
from historylens.core.keywords import extract_domain
from historylens.models.schema import DomainStat, HistoryRecord


def analyze_domain_patterns(
    records: Iterable[HistoryRecord], top_n: Optional[int] = None
) -> list[DomainStat]:
    """
    Group valid records by domain and report the most visited domains.

    Domains with equal total visits keep the order in which they were first
    seen in the input.

    Args:
        records: History records (invalid ones are skipped)
        top_n: Number of domains to return (default: settings.top_domains)

    Returns:
        DomainStat list sorted by total_visits descending
    """
    settings = get_settings()
    if top_n is None:
        top_n = settings.top_domains

    # dicts keep insertion order, which makes the tie-break first-seen
    totals: dict[str, list[int]] = {}
    for record in sanitize_records(records, settings.max_field_length):
        stats = totals.setdefault(extract_domain(record.url), [0, 0])
        stats[0] += 1
        stats[1] += record.visit_count

    ranked = sorted(totals.items(), key=lambda item: -item[1][1])

    logger.debug(f"Aggregated {len(totals):,} domains, reporting top {top_n}")

    return [
        DomainStat(domain=domain, entry_count=count, total_visits=visits)
        for domain, (count, visits) in ranked[: max(top_n, 0)]
    ]
