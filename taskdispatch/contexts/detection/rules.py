"""
Additive scoring rules for task detection.

Each rule pairs a score weight with an extractor. An extractor inspects the
message and returns a truthy value when the rule fires (the matched phrase,
the priority level, the matched skills) or a falsy value when it does not.
Rules are independent: every fired rule adds its weight. Rules with a
``target`` also copy their extracted value onto that DetectionResult field.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from taskdispatch.contexts.detection.logger import log_recognizer_failure
from taskdispatch.contexts.detection.patterns import (
    PRIORITY_LEVELS,
    DetectionVocabulary,
    compile_word_alternation,
    first_phrase_in,
)
from taskdispatch.contexts.detection.recognizers import DateRecognizer, PatternDateRecognizer
from taskdispatch.utils.token_processing import Tokenizer

# Rule weights
IMPERATIVE_WEIGHT = 0.30
TASK_VERB_WEIGHT = 0.20
REQUEST_WEIGHT = 0.25
DELEGATION_WEIGHT = 0.20
DEADLINE_WEIGHT = 0.15
PRIORITY_WEIGHT = 0.10
SKILL_MENTION_WEIGHT = 0.10

# Shared by message and skill-name tokenization so both sides split alike
MESSAGE_TOKENIZER = Tokenizer()


@dataclass(frozen=True)
class MessageText:
    """A message prepared once and shared by every rule."""

    raw: str
    lower: str
    tokens: frozenset[str]

    @classmethod
    def from_text(cls, text: str) -> "MessageText":
        return cls(raw=text, lower=text.lower(), tokens=MESSAGE_TOKENIZER.token_set(text))


@dataclass(frozen=True)
class DetectionRule:
    """One additive rule: fires when ``extract`` returns a truthy value."""

    name: str
    weight: float
    extract: Callable[[MessageText], Any]
    target: Optional[str] = None


class DeadlineExtractor:
    """
    Deadline lookup with a deterministic fallback.

    The primary recognizer is asked first; if it finds nothing or raises, the
    pattern recognizer answers instead.
    """

    def __init__(self, primary: DateRecognizer, fallback: PatternDateRecognizer):
        self.primary = primary
        self.fallback = fallback

    def __call__(self, message: MessageText) -> Optional[str]:
        if self.primary is not self.fallback:
            try:
                found = self.primary.find_deadline(message.raw)
            except Exception as e:
                log_recognizer_failure("date", self.primary.name, e)
                found = None
            if found:
                return found
        return self.fallback.find_deadline(message.raw)


class SkillMatcher:
    """
    Finds vocabulary skills mentioned in a message.

    A skill matches when its full lowercase name is a substring of the message,
    or, for multi-word names, when every word of the name is a message token.
    """

    def __init__(self, skill_names: Iterable[str]):
        self._skills: list[tuple[str, str, frozenset[str]]] = []
        seen = set()
        for name in skill_names:
            if not name or not name.strip():
                continue
            lower = name.strip().lower()
            if lower in seen:
                continue
            seen.add(lower)
            self._skills.append((name.strip(), lower, MESSAGE_TOKENIZER.token_set(lower)))

    def __call__(self, message: MessageText) -> tuple[str, ...]:
        matched = []
        for name, lower, words in self._skills:
            if lower in message.lower:
                matched.append(name)
            elif len(words) > 1 and words <= message.tokens:
                matched.append(name)
        return tuple(matched)


def _priority_extractor(vocabulary: DetectionVocabulary) -> Callable[[MessageText], Optional[str]]:
    def extract(message: MessageText) -> Optional[str]:
        for level in PRIORITY_LEVELS:
            if first_phrase_in(message.lower, vocabulary.indicators_for(level)):
                return level
        return None

    return extract


def build_rules(
    vocabulary: DetectionVocabulary,
    skill_names: Iterable[str],
    date_recognizer: DateRecognizer,
) -> tuple[DetectionRule, ...]:
    """
    Assemble the ordered detection rule set.

    Args:
        vocabulary: Phrase tables
        skill_names: Skill vocabulary for mention matching
        date_recognizer: Primary deadline recognizer (patterns are the fallback)

    Returns:
        Rules in evaluation order
    """
    verb_pattern = compile_word_alternation(vocabulary.task_verbs)
    fallback = (
        date_recognizer
        if isinstance(date_recognizer, PatternDateRecognizer)
        else PatternDateRecognizer(vocabulary)
    )

    def task_verb(message: MessageText) -> Optional[str]:
        match = verb_pattern.search(message.lower)
        return match.group(0) if match else None

    return (
        DetectionRule(
            "imperative",
            IMPERATIVE_WEIGHT,
            lambda m: first_phrase_in(m.lower, vocabulary.imperative_phrases),
        ),
        DetectionRule("task_verb", TASK_VERB_WEIGHT, task_verb),
        DetectionRule(
            "request", REQUEST_WEIGHT, lambda m: first_phrase_in(m.lower, vocabulary.request_patterns)
        ),
        DetectionRule(
            "delegation",
            DELEGATION_WEIGHT,
            lambda m: first_phrase_in(m.lower, vocabulary.delegation_phrases),
        ),
        DetectionRule(
            "deadline", DEADLINE_WEIGHT, DeadlineExtractor(date_recognizer, fallback), "deadline"
        ),
        DetectionRule("priority", PRIORITY_WEIGHT, _priority_extractor(vocabulary), "priority"),
        DetectionRule(
            "skills", SKILL_MENTION_WEIGHT, SkillMatcher(skill_names), "suggested_skills"
        ),
    )
