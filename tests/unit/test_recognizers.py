"""Unit tests for date recognizers and sentence splitters."""

from datetime import datetime

import pytest

from taskdispatch.contexts.detection import recognizers
from taskdispatch.contexts.detection.detector import TaskDetector
from taskdispatch.contexts.detection.patterns import DetectionVocabulary
from taskdispatch.contexts.detection.recognizers import (
    DateparserRecognizer,
    NltkSentenceSplitter,
    PatternDateRecognizer,
    PeriodSentenceSplitter,
    default_sentence_splitter,
    punkt_available,
)


@pytest.mark.unit
class TestPatternDateRecognizer:
    """Regex first, keyword substring second."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Finish the deck by next Friday please", "by next Friday"),
            ("ship it by March 3rd", "by March 3rd"),
            ("ship it by Sept 14", "by Sept 14"),
            ("can we do this today?", "today"),
            ("planning for next week", "next week"),
            ("due EOD please", "EOD"),
            ("Q3 roadmap review", "Q3"),
            ("review on Thursday", "Thursday"),
        ],
    )
    def test_finds_deadline(self, text, expected):
        assert PatternDateRecognizer().find_deadline(text) == expected

    @pytest.mark.parametrize("text", ["", "nothing to see here", "lol that meme was great"])
    def test_no_deadline(self, text):
        assert PatternDateRecognizer().find_deadline(text) is None


@pytest.mark.unit
class TestDateparserRecognizer:
    """Span selection over dateparser.search results."""

    def test_prefers_covering_deadline_phrase(self, monkeypatch):
        found = [("on", datetime(2025, 3, 5)), ("Friday", datetime(2025, 3, 7))]
        monkeypatch.setattr(recognizers, "search_dates", lambda *args, **kwargs: found)

        assert DateparserRecognizer().find_deadline("put it on the list by next Friday") == (
            "by next Friday"
        )

    def test_widens_over_leading_qualifier(self, monkeypatch):
        found = [("the 14th", datetime(2025, 3, 14))]
        monkeypatch.setattr(recognizers, "search_dates", lambda *args, **kwargs: found)

        assert DateparserRecognizer().find_deadline("send the invoice by the 14th") == "by the 14th"

    def test_next_without_by(self, monkeypatch):
        found = [("Monday", datetime(2025, 3, 10))]
        monkeypatch.setattr(recognizers, "search_dates", lambda *args, **kwargs: found)

        assert DateparserRecognizer().find_deadline("demo is due next Monday") == "next Monday"

    def test_rejects_non_calendar_spans(self, monkeypatch):
        found = [("the sun", datetime(2025, 3, 5)), ("now", datetime(2025, 3, 5))]
        monkeypatch.setattr(recognizers, "search_dates", lambda *args, **kwargs: found)

        assert DateparserRecognizer().find_deadline("the sun is out now") is None

    def test_calendar_words_follow_vocabulary(self, monkeypatch):
        found = [("payday", datetime(2025, 3, 28))]
        monkeypatch.setattr(recognizers, "search_dates", lambda *args, **kwargs: found)
        vocab = DetectionVocabulary(deadline_keywords=("payday",))

        assert DateparserRecognizer(vocabulary=vocab).find_deadline("before payday") == "payday"
        assert DateparserRecognizer().find_deadline("before payday") is None

    def test_no_dates(self, monkeypatch):
        monkeypatch.setattr(recognizers, "search_dates", lambda *args, **kwargs: None)
        assert DateparserRecognizer().find_deadline("no dates in here") is None

    def test_passes_language_and_settings(self, monkeypatch):
        calls = []

        def fake_search(text, languages=None, settings=None):
            calls.append((text, languages, settings))
            return []

        monkeypatch.setattr(recognizers, "search_dates", fake_search)
        DateparserRecognizer(prefer_future=True).find_deadline("by Friday")

        assert calls == [("by Friday", ["en"], {"PREFER_DATES_FROM": "future"})]

    def test_empty_text_short_circuits(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("search_dates should not be called")

        monkeypatch.setattr(recognizers, "search_dates", fail)
        assert DateparserRecognizer().find_deadline("") is None


@pytest.mark.unit
class TestDateparserSearch:
    """Real dateparser searches, no stubbing."""

    def test_next_weekday_keeps_qualifier(self):
        assert DateparserRecognizer().find_deadline("Finish the deck by next Friday please") == (
            "by next Friday"
        )

    def test_chatter_has_no_deadline(self):
        assert DateparserRecognizer().find_deadline("I saw the second episode now") is None

    def test_detector_ignores_non_date_words(self):
        detector = TaskDetector(date_recognizer=DateparserRecognizer())
        result = detector.detect("we went to the sun deck at 5")

        assert result.deadline != "the sun"
        assert result.deadline is None or "5" in result.deadline


@pytest.mark.unit
class TestPeriodSentenceSplitter:
    """Split on the first period only."""

    def test_two_parts(self):
        parts = PeriodSentenceSplitter().split("Fix the login bug. It breaks on Safari. Since Monday.")
        assert parts == ["Fix the login bug.", "It breaks on Safari. Since Monday."]

    def test_no_period(self):
        assert PeriodSentenceSplitter().split("Fix the login bug") == ["Fix the login bug"]

    def test_trailing_period_only(self):
        assert PeriodSentenceSplitter().split("Fix the login bug.") == ["Fix the login bug."]


@pytest.mark.unit
class TestSentenceSplitterSelection:
    """Library splitter when punkt is installed."""

    def test_default_matches_punkt_availability(self):
        splitter = default_sentence_splitter()
        expected = NltkSentenceSplitter if punkt_available() else PeriodSentenceSplitter
        assert isinstance(splitter, expected)

    @pytest.mark.skipif(not punkt_available(), reason="nltk punkt model not installed")
    def test_nltk_splits_sentences(self):
        parts = NltkSentenceSplitter().split("Fix the login bug. It breaks on Safari. Since Monday.")
        assert parts == ["Fix the login bug.", "It breaks on Safari.", "Since Monday."]
