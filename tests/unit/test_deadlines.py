"""Unit tests for deadline phrase resolution."""

from datetime import date

import pytest

from taskdispatch.contexts.detection.deadlines import resolve_due_date

# A Wednesday
TODAY = date(2025, 3, 5)


@pytest.mark.unit
@pytest.mark.parametrize(
    "phrase, expected",
    [
        ("today", date(2025, 3, 5)),
        ("EOD", date(2025, 3, 5)),
        ("tonight", date(2025, 3, 5)),
        ("tomorrow", date(2025, 3, 6)),
        ("next week", date(2025, 3, 12)),
        ("this week", date(2025, 3, 7)),
        ("end of week", date(2025, 3, 7)),
        ("Friday", date(2025, 3, 7)),
        ("by Friday", date(2025, 3, 7)),
        ("by Wednesday", date(2025, 3, 12)),
        ("by next Friday", date(2025, 3, 14)),
        ("next Monday", date(2025, 3, 10)),
        ("by March 20th", date(2025, 3, 20)),
        ("Sept 14", date(2025, 9, 14)),
        ("by March 3", date(2026, 3, 3)),
    ],
)
def test_resolves_phrase(phrase, expected):
    assert resolve_due_date(phrase, TODAY) == expected


@pytest.mark.unit
@pytest.mark.parametrize("phrase", [None, "", "   ", "Q2", "march", "February 30", "sometime"])
def test_unresolvable_phrase(phrase):
    assert resolve_due_date(phrase, TODAY) is None


@pytest.mark.unit
def test_end_of_week_on_friday_is_same_day():
    friday = date(2025, 3, 7)
    assert resolve_due_date("eow", friday) == friday
