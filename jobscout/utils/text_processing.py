"""
Text processing utilities shared by the extraction and assessment contexts.

Keyword lookups throughout the engine go through contains_term() so that
short terms ("go", "ai", "sr") only match as whole words.
"""

import re
from functools import lru_cache
from typing import Iterable, Optional


@lru_cache(maxsize=2048)
def term_pattern(term: str, case_sensitive: bool = False) -> re.Pattern:
    """
    Compile a whole-term regex for a keyword.

    Boundaries are alphanumeric lookarounds rather than \\b so that terms
    ending in symbols ("c++", "c#", "node.js") still match.
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(rf"(?<![A-Za-z0-9]){re.escape(term)}(?![A-Za-z0-9+#])", flags)


def contains_term(text: str, term: str, case_sensitive: bool = False) -> bool:
    """Check whether term occurs in text as a whole word/phrase."""
    return term_pattern(term, case_sensitive).search(text) is not None


def first_term(text: str, terms: Iterable[str]) -> Optional[str]:
    """Return the first of terms that occurs in text, or None."""
    for term in terms:
        if contains_term(text, term):
            return term
    return None


def count_words(text: str) -> int:
    return len(text.split())


def enclosing_line(text: str, index: int) -> tuple[int, int]:
    """
    Character bounds [start, end) of the line containing index.

    Example:
        >>> enclosing_line("a\\nbcd\\ne", 3)
        (2, 5)
    """
    start = text.rfind("\n", 0, index) + 1
    end = text.find("\n", index)
    return start, len(text) if end == -1 else end


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("this is a very long string", 10)
        "this is..."
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def format_score(value: float) -> str:
    """
    Render a score without a trailing ".0".

    Example:
        >>> format_score(72.0), format_score(72.5)
        ("72", "72.5")
    """
    return f"{value:g}"


def format_salary(amount: float) -> str:
    """
    Compact salary figure: 1.5M, 120K, or the plain number below 1000.

    Example:
        >>> format_salary(120000)
        "120K"
    """
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f}M"
    if amount >= 1000:
        return f"{round(amount / 1000)}K"
    return format_score(amount)
