"""
Resolve recognized deadline phrases to calendar dates.

Only the phrase shapes the detector recognizes are resolved; anything else
(quarters, free-form dateparser spans) returns None and the caller keeps the
raw phrase.
"""

from datetime import date, timedelta
from typing import Optional

from taskdispatch.contexts.detection.patterns import MONTHS, WEEKDAYS, DeadlinePatterns

_SAME_DAY = ("today", "tonight", "end of day", "eod")
_END_OF_WEEK = ("this week", "end of week", "eow")

FRIDAY = 4


def _weekday_index(stem: str) -> int:
    return WEEKDAYS.index(stem.lower())


def _month_index(name: str) -> Optional[int]:
    name = name.lower()
    for i, month in enumerate(MONTHS, start=1):
        if month.startswith(name[:3]):
            return i
    return None


def resolve_due_date(phrase: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """
    Turn a deadline phrase into a concrete date.

    Args:
        phrase: Deadline phrase from DetectionResult.deadline
        today: Reference date (defaults to date.today())

    Returns:
        Resolved date, or None if the phrase has no fixed calendar meaning

    Examples:
        resolve_due_date("tomorrow", date(2025, 3, 5))        # 2025-03-06
        resolve_due_date("by Friday", date(2025, 3, 5))       # 2025-03-07
        resolve_due_date("by next Friday", date(2025, 3, 5))  # 2025-03-14
        resolve_due_date("by March 3", date(2025, 3, 5))      # 2026-03-03
    """
    if not phrase or not phrase.strip():
        return None

    today = today or date.today()
    text = phrase.strip().lower()
    if text.startswith("by "):
        text = text[3:].strip()

    if text in _SAME_DAY:
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)
    if text == "next week":
        return today + timedelta(days=7)
    if text in _END_OF_WEEK:
        return today + timedelta(days=(FRIDAY - today.weekday()) % 7)

    match = DeadlinePatterns.MONTH_DAY.search(text)
    if match:
        month = _month_index(match.group(1))
        if month is None:
            return None
        try:
            due = date(today.year, month, int(match.group(2)))
            if due < today:
                due = due.replace(year=today.year + 1)
        except ValueError:
            # Feb 30, or Feb 29 rolled into a non-leap year
            return None
        return due

    match = DeadlinePatterns.WEEKDAY.fullmatch(text)
    if match:
        target = _weekday_index(match.group(2))
        if match.group(1):
            # Named weekday of the following Monday-start week
            next_monday = today + timedelta(days=7 - today.weekday())
            return next_monday + timedelta(days=target)
        days_ahead = (target - today.weekday()) % 7 or 7
        return today + timedelta(days=days_ahead)

    return None
