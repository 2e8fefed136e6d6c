"""
Query tokenization and URL domain extraction.

Both helpers are total: they never raise, whatever the input.
"""

from typing import Any

# Common function words with little search value. Closed set, never mutated.
STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "up", "about", "into", "through", "during",
        "i", "me", "my", "you", "your", "we", "us", "our", "they", "them", "their",
        "is", "am", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "this", "that", "these", "those", "what", "when", "where", "who", "which", "how",
    }
)

MIN_KEYWORD_LENGTH = 3


def extract_keywords(text: Any) -> list[str]:
    """
    Extract search keywords from free text.

    Lower-cases the text, splits on whitespace and strips every
    non-alphanumeric character from each word. Words shorter than three
    characters and stop words are dropped.

    Args:
        text: Raw query text

    Returns:
        Keywords in order of first appearance (duplicates retained)
    """
    if not isinstance(text, str):
        return []

    keywords = []
    for word in text.lower().split():
        cleaned = "".join(ch for ch in word if ch.isalnum())
        if len(cleaned) < MIN_KEYWORD_LENGTH or cleaned in STOP_WORDS:
            continue
        keywords.append(cleaned)
    return keywords


def extract_domain(url: Any) -> str:
    """
    Return the host part of a URL: the text between ``://`` and the next ``/``.

    This is a heuristic, not a URI parser: ports and credentials are kept.
    A string without ``://`` is returned unchanged.
    """
    if not isinstance(url, str):
        return ""

    _, sep, rest = url.partition("://")
    if not sep:
        return url
    return rest.split("/", 1)[0]
