"""
Reusable phrase tables and regex patterns for task detection.

This module provides the keyword vocabulary and deadline patterns used across
the detection context for classification and attribute extraction.

Pattern classes follow a common convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# PRIORITY LEVELS
# =============================================================================

# Evaluation order: the first level with a matching indicator wins
PRIORITY_LEVELS = ("high", "medium", "low")

# =============================================================================
# CALENDAR CONSTANTS
# =============================================================================

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

QUARTERS = ("q1", "q2", "q3", "q4")


# =============================================================================
# DETECTION VOCABULARY
# =============================================================================


@dataclass(frozen=True)
class DetectionVocabulary:
    """
    Phrase and keyword tables consumed by the task detector.

    Every table is a tuple so instances can be shared between detectors.
    Use ``taskdispatch.contexts.detection.vocabulary.load_vocabulary`` to
    overlay a YAML file on these defaults.
    """

    # Substring match - phrasing that usually opens an instruction
    imperative_phrases: tuple[str, ...] = (
        "please",
        "kindly",
        "make sure",
        "ensure",
        "let's",
        "let us",
        "remember to",
        "don't forget",
        "help",
        "consider",
    )

    # Whole-word match
    task_verbs: tuple[str, ...] = (
        "do",
        "make",
        "create",
        "write",
        "prepare",
        "update",
        "review",
        "check",
        "finish",
        "complete",
        "fix",
        "implement",
        "develop",
        "design",
        "build",
        "test",
        "deploy",
        "send",
        "share",
        "analyze",
        "research",
        "investigate",
    )

    # Substring match
    request_patterns: tuple[str, ...] = (
        "can you",
        "could you",
        "would you",
        "please",
        "pls",
        "need to",
        "needs to",
        "should",
        "must",
        "have to",
        "has to",
        "required",
        "want to",
        "would like",
        "need someone",
        "looking for someone",
    )

    # Substring match
    delegation_phrases: tuple[str, ...] = (
        "assign",
        "delegate",
        "handle",
        "take care of",
        "own",
        "be responsible for",
        "take ownership of",
        "lead",
        "drive",
        "manage",
    )

    # (level, indicators) pairs, checked in PRIORITY_LEVELS order
    priority_indicators: tuple[tuple[str, tuple[str, ...]], ...] = (
        (
            "high",
            (
                "urgent",
                "asap",
                "immediately",
                "right away",
                "high priority",
                "important",
                "critical",
            ),
        ),
        ("medium", ("soon", "when you can", "this week", "medium priority")),
        ("low", ("when you have time", "no rush", "low priority", "whenever")),
    )

    # Substring match - last-resort deadline signal
    deadline_keywords: tuple[str, ...] = (
        "today",
        "tomorrow",
        "tonight",
        "next week",
        "this week",
        "end of day",
        "eod",
        "end of week",
        "eow",
    ) + QUARTERS + MONTHS + WEEKDAYS

    def indicators_for(self, level: str) -> tuple[str, ...]:
        """Return the indicator phrases for a priority level (empty if unknown)."""
        for name, indicators in self.priority_indicators:
            if name == level:
                return indicators
        return ()

    def to_dict(self) -> dict:
        """Plain-container form, used as the base for YAML overrides."""
        return {
            "imperative_phrases": list(self.imperative_phrases),
            "task_verbs": list(self.task_verbs),
            "request_patterns": list(self.request_patterns),
            "delegation_phrases": list(self.delegation_phrases),
            "priority_indicators": {
                level: list(indicators) for level, indicators in self.priority_indicators
            },
            "deadline_keywords": list(self.deadline_keywords),
        }


DEFAULT_VOCABULARY = DetectionVocabulary()


# =============================================================================
# DEADLINE PATTERNS
# =============================================================================

_WEEKDAY_STEM = r"(?:mon|tues|wednes|thurs|fri|satur|sun)day"
_MONTH_STEM = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*"


@dataclass(frozen=True)
class DeadlinePatterns:
    """
    Regex patterns for recognizing deadline phrases in chat messages.

    Supports:
    - Relative days (today, tomorrow)
    - Relative weeks (this week, next week)
    - "by [next] <weekday>" (e.g., "by next Friday")
    - "by <month> <day>" (e.g., "by March 3", "by Sept 14th")
    """

    DEADLINE_PHRASE: re.Pattern = re.compile(
        rf"\b(?:today|tomorrow|next week|this week"
        rf"|by (?:next )?{_WEEKDAY_STEM}"
        rf"|by {_MONTH_STEM}\s+\d{{1,2}}(?:st|nd|rd|th)?)\b",
        re.IGNORECASE,
    )

    # Month + day anywhere, used when resolving phrases to dates
    MONTH_DAY: re.Pattern = re.compile(
        rf"\b({_MONTH_STEM})\s+(\d{{1,2}})(?:st|nd|rd|th)?\b", re.IGNORECASE
    )

    # Optional "next" before a weekday name
    WEEKDAY: re.Pattern = re.compile(rf"\b(next\s+)?({_WEEKDAY_STEM})\b", re.IGNORECASE)


# =============================================================================
# HELPERS
# =============================================================================


def compile_word_alternation(words: tuple[str, ...]) -> re.Pattern:
    """
    Compile a whole-word alternation (longest first) over lowercase text.

    Example:
        >>> compile_word_alternation(("do", "fix")).search("can you fix it") is not None
        True
    """
    ordered = sorted({w.lower() for w in words if w}, key=len, reverse=True)
    if not ordered:
        # Matches nothing
        return re.compile(r"(?!x)x")
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in ordered) + r")\b")


def first_phrase_in(text_lower: str, phrases: tuple[str, ...]) -> str | None:
    """Return the first phrase (in table order) contained in ``text_lower``."""
    for phrase in phrases:
        if phrase and phrase.lower() in text_lower:
            return phrase
    return None
