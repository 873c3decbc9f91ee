"""
Optional text recognizers used during attribute extraction.

Two capabilities, each with a library-backed implementation and a deterministic
heuristic fallback:

- DateRecognizer: finds a deadline phrase in a message
    DateparserRecognizer (dateparser.search) / PatternDateRecognizer (regex + keywords)
- SentenceSplitter: segments a message into sentences
    NltkSentenceSplitter (nltk punkt) / PeriodSentenceSplitter (first period)

The detector picks one implementation of each at construction time. Use
default_date_recognizer() and default_sentence_splitter() to select the library
implementation when its resources are present.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional

import nltk
from dateparser.search import search_dates
from loguru import logger

from taskdispatch.contexts.detection.patterns import (
    DEFAULT_VOCABULARY,
    DeadlinePatterns,
    DetectionVocabulary,
    compile_word_alternation,
    first_phrase_in,
)

# nltk resources providing the punkt sentence model, newest first
PUNKT_RESOURCES = ("punkt_tab", "punkt")

# dateparser matches shorter than this are almost always noise ("on", "at")
MIN_DATE_SPAN_LENGTH = 3

# Qualifiers directly before a dateparser span that belong to the deadline phrase
SPAN_QUALIFIER = re.compile(r"(?:\bby\s+)?(?:\bnext\s+)?$", re.IGNORECASE)


# =============================================================================
# DATE RECOGNITION
# =============================================================================


class DateRecognizer(ABC):
    """
    Abstract base for deadline recognizers.

    Subclasses set ``name`` and implement find_deadline(). A recognizer returns
    the matched span as it appears in the original text, or None.
    """

    name: str

    @abstractmethod
    def find_deadline(self, text: str) -> Optional[str]:
        """Return the deadline phrase found in ``text``, or None."""


class PatternDateRecognizer(DateRecognizer):
    """
    Regex and keyword deadline recognizer with no external resources.

    Tries the deadline phrase regex first, then the vocabulary's calendar
    keywords (today, next week, Q1, month and weekday names) by substring.
    """

    name = "pattern"

    def __init__(self, vocabulary: DetectionVocabulary = DEFAULT_VOCABULARY):
        self._keywords = vocabulary.deadline_keywords

    def find_deadline(self, text: str) -> Optional[str]:
        if not text:
            return None

        match = DeadlinePatterns.DEADLINE_PHRASE.search(text)
        if match:
            return match.group(0)

        text_lower = text.lower()
        keyword = first_phrase_in(text_lower, self._keywords)
        if keyword is None:
            return None

        # Return the original casing when lowercasing kept offsets aligned
        if len(text_lower) == len(text):
            start = text_lower.index(keyword)
            return text[start : start + len(keyword)]
        return keyword


class DateparserRecognizer(DateRecognizer):
    """
    Deadline recognizer backed by dateparser's free-text date search.

    dateparser reports bare date tokens ("Friday" out of "by next Friday") and
    also parses ordinary words ("now", "the sun"). Spans are therefore kept
    only when they carry a digit or a calendar keyword, and are widened to the
    full deadline phrase: the regex phrase when it covers the span, otherwise
    the span plus any "by"/"next" qualifier in front of it.
    """

    name = "dateparser"

    def __init__(
        self,
        languages: tuple[str, ...] = ("en",),
        prefer_future: bool = True,
        vocabulary: DetectionVocabulary = DEFAULT_VOCABULARY,
    ):
        self.languages = list(languages)
        self.settings = {"PREFER_DATES_FROM": "future" if prefer_future else "current_period"}
        self._calendar_words = compile_word_alternation(vocabulary.deadline_keywords)

    def find_deadline(self, text: str) -> Optional[str]:
        if not text:
            return None

        found = search_dates(text, languages=self.languages, settings=self.settings)
        spans = [span.strip() for span, _ in found or ()]
        spans = [span for span in spans if self._is_calendar_span(span)]
        if not spans:
            return None

        phrase = DeadlinePatterns.DEADLINE_PHRASE.search(text)
        if phrase and any(span.lower() in phrase.group(0).lower() for span in spans):
            return phrase.group(0)
        return _widen_span(text, spans[0])

    def _is_calendar_span(self, span: str) -> bool:
        if len(span) < MIN_DATE_SPAN_LENGTH:
            return False
        if any(ch.isdigit() for ch in span):
            return True
        return self._calendar_words.search(span.lower()) is not None


def _widen_span(text: str, span: str) -> str:
    """Extend ``span`` leftwards over a "by" / "next" qualifier in ``text``."""
    start = text.find(span)
    if start < 0:
        start = text.lower().find(span.lower())
    if start < 0:
        return span

    qualifier = SPAN_QUALIFIER.search(text[:start])
    return text[qualifier.start() : start + len(span)]


def default_date_recognizer(
    vocabulary: DetectionVocabulary = DEFAULT_VOCABULARY,
) -> DateRecognizer:
    """Library-backed recognizer (the detector still falls back to patterns on a miss)."""
    return DateparserRecognizer(vocabulary=vocabulary)


# =============================================================================
# SENTENCE SEGMENTATION
# =============================================================================


class SentenceSplitter(ABC):
    """Abstract base for sentence segmentation."""

    name: str

    @abstractmethod
    def split(self, text: str) -> list[str]:
        """Split ``text`` into sentences (a single element when there is one sentence)."""


class PeriodSentenceSplitter(SentenceSplitter):
    """
    Heuristic segmentation on the first period.

    "Fix the login bug. It breaks on Safari. Since Monday."
    -> ["Fix the login bug.", "It breaks on Safari. Since Monday."]
    """

    name = "period"

    def split(self, text: str) -> list[str]:
        head, sep, rest = text.partition(".")
        rest = rest.strip()
        if not sep or not rest:
            return [text]
        return [head.strip() + ".", rest]


class NltkSentenceSplitter(SentenceSplitter):
    """Sentence segmentation with nltk's pretrained punkt model."""

    name = "nltk"

    def __init__(self, language: str = "english"):
        self.language = language

    def split(self, text: str) -> list[str]:
        sentences = [s.strip() for s in nltk.sent_tokenize(text, language=self.language)]
        sentences = [s for s in sentences if s]
        return sentences or [text]


def punkt_available(download: bool = False) -> bool:
    """
    Check whether the punkt sentence model is installed.

    Args:
        download: Attempt a quiet nltk download when the model is missing
    """
    for resource in PUNKT_RESOURCES:
        try:
            nltk.data.find(f"tokenizers/{resource}")
            return True
        except LookupError:
            continue

    if download:
        for resource in PUNKT_RESOURCES:
            if nltk.download(resource, quiet=True):
                return True
    return False


def default_sentence_splitter(download: bool = False) -> SentenceSplitter:
    """
    nltk splitter when punkt is installed (optionally downloading it), else the
    period heuristic.
    """
    if punkt_available(download=download):
        return NltkSentenceSplitter()
    logger.debug("nltk punkt model not installed, using period sentence splitter")
    return PeriodSentenceSplitter()
