"""Timestamp parsing and elapsed-time utilities."""

from datetime import datetime, timezone
from typing import Optional, Union

TimestampLike = Union[datetime, str]


def parse_timestamp(value: Optional[TimestampLike]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp (or pass through a datetime).

    Accepts the trailing "Z" that most JSON APIs emit for UTC.

    Args:
        value: datetime, ISO 8601 string, or None

    Returns:
        datetime, or None if value is empty or not an ISO 8601 string

    Examples:
        parse_timestamp("2025-11-13T18:45:40Z")
        # datetime(2025, 11, 13, 18, 45, 40, tzinfo=timezone.utc)
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def hours_between(earlier: datetime, later: datetime) -> float:
    """
    Hours elapsed from ``earlier`` to ``later`` (negative if reversed).

    Naive datetimes are treated as UTC when compared against aware ones.
    """
    if (earlier.tzinfo is None) != (later.tzinfo is None):
        if earlier.tzinfo is None:
            earlier = earlier.replace(tzinfo=timezone.utc)
        else:
            later = later.replace(tzinfo=timezone.utc)

    return (later - earlier).total_seconds() / 3600


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
