"""Timestamp formatting and day-arithmetic utilities."""

from datetime import date, datetime, timezone
from typing import Optional


def now_exact() -> str:
    """Current UTC time as an ISO 8601 string (e.g., "2025-11-13T18:45:40.572549+00:00")."""
    return datetime.now(timezone.utc).isoformat()


def today() -> date:
    """Current UTC calendar date."""
    return datetime.now(timezone.utc).date()


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a date-only or full ISO 8601 string into a calendar date.

    Returns None for empty or unparseable values so that callers can treat
    a malformed date the same as a missing one.
    """
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def days_since(value: Optional[str], reference: Optional[date] = None) -> Optional[int]:
    """Whole days elapsed from value to reference (default: today). None if value is unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return ((reference or today()) - parsed).days


def days_until(value: Optional[str], reference: Optional[date] = None) -> Optional[int]:
    """Whole days remaining until value (negative once passed). None if value is unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return (parsed - (reference or today())).days
