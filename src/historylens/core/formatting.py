"""
Rendering of ranked history into a character-budgeted text block.

The output is meant to be pasted into an LLM prompt, so the budget is
enforced greedily in input order: whole entries are appended until the next
one would not fit. Entries are never cut in half.
"""

import math
from collections.abc import Iterable
from typing import Optional

from loguru import logger

from historylens.config import get_settings
from historylens.core.scoring import days_between
from historylens.models.schema import HistoryRecord

ENTRY_TEMPLATE = "URL: {url}\nTitle: {title}\nVisits: {visits}\nLast Visit: {age}\n\n"


def humanize_age(days_old: float) -> str:
    """
    Describe how long ago a visit happened.

    Args:
        days_old: Age of the visit in days

    Returns:
        "Today", "Yesterday", "N days ago" or "N weeks ago" (N floored)
    """
    if days_old < 1.0:
        return "Today"
    if days_old < 2.0:
        return "Yesterday"
    if days_old < 7.0:
        return f"{math.floor(days_old)} days ago"
    if not math.isfinite(days_old):
        return "Unknown"
    return f"{math.floor(days_old / 7.0)} weeks ago"


class HistoryFormatter:
    """
    Formats history records for an LLM context window.

    Strategy:
    1. Render each record as a fixed four-line block
    2. Append blocks in input order while they fit in max_chars
    3. Stop at the first block that would overflow the budget
    """

    def __init__(self, max_chars: int = 20000):
        """
        Initialize the formatter.

        Args:
            max_chars: Character budget for the whole output
        """
        self.max_chars = max_chars

    def format_entry(self, record: HistoryRecord, current_time: float) -> str:
        """Render a single record as a text block."""
        age = humanize_age(days_between(current_time, record.last_visit_time))
        return ENTRY_TEMPLATE.format(
            url=record.url, title=record.title, visits=record.visit_count, age=age
        )

    def format(self, records: Iterable[HistoryRecord], current_time: float) -> str:
        """
        Render records until the character budget is exhausted.

        Args:
            records: Records in the order they should appear
            current_time: Reference time in milliseconds for the age strings

        Returns:
            Concatenated blocks; empty if not even the first block fits
        """
        blocks = []
        char_count = 0

        for record in records:
            block = self.format_entry(record, current_time)
            if char_count + len(block) > self.max_chars:
                logger.debug(
                    f"Character budget reached after {len(blocks)} entries "
                    f"({char_count:,}/{self.max_chars:,} chars)"
                )
                break
            blocks.append(block)
            char_count += len(block)

        text = "".join(blocks)
        logger.debug(
            f"Formatted {len(blocks)} entries ({len(text):,}/{self.max_chars:,} chars)"
        )
        return text


def format_history_for_llm(
    records: Iterable[HistoryRecord],
    max_chars: Optional[int],
    current_time: float,
) -> str:
    """
    Convenience function to format history for an LLM prompt.

    Args:
        records: Records to render, in order
        max_chars: Character budget (None: settings.default_max_chars)
        current_time: Reference time in milliseconds

    Returns:
        The formatted text block
    """
    if max_chars is None:
        max_chars = get_settings().default_max_chars
    return HistoryFormatter(max_chars=max_chars).format(records, current_time)
