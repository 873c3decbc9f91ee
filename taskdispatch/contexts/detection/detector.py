"""
Task Detector

Rule-based classification of chat messages into delegable tasks, with
extraction of deadline, priority, required skills, and the clean task sentence.

Scoring is additive and auditable: each rule in rules.py contributes a fixed
weight when it fires, and the total is capped below certainty.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from taskdispatch.contexts.detection.logger import (
    log_detection_result,
    log_recognizer_failure,
    log_rule_fired,
)
from taskdispatch.contexts.detection.patterns import DEFAULT_VOCABULARY, DetectionVocabulary
from taskdispatch.contexts.detection.recognizers import (
    DateRecognizer,
    PatternDateRecognizer,
    PeriodSentenceSplitter,
    SentenceSplitter,
    default_sentence_splitter,
)
from taskdispatch.contexts.detection.rules import DetectionRule, MessageText, build_rules
from taskdispatch.utils.report_formatter import TableFormatter

DEFAULT_CONFIDENCE_THRESHOLD = 0.4

# The classifier never claims certainty
CONFIDENCE_CEILING = 0.95


@dataclass(frozen=True)
class DetectorOptions:
    """Per-call detection options."""

    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    verbose: bool = False


@dataclass(frozen=True)
class DetectionResult:
    """Result of task detection for a single message."""

    is_task: bool
    confidence: float
    task_text: str
    suggested_skills: tuple[str, ...] = ()
    deadline: Optional[str] = None
    priority: Optional[str] = None  # "low" | "medium" | "high"
    context: str = ""
    fired_rules: tuple[str, ...] = ()  # For explanation/debugging


class TaskDetector:
    """
    Detects delegable tasks in free text using additive keyword rules.

    Algorithm:
    1. Evaluate every rule against the lowercase message
    2. Sum the weights of fired rules, capped at CONFIDENCE_CEILING
    3. Mark as task if confidence >= threshold
    4. Split off the first sentence as the task, the rest as context

    Instances are immutable after construction: build a new detector when the
    skill vocabulary changes.
    """

    def __init__(
        self,
        skill_vocabulary: Iterable[str] = (),
        vocabulary: DetectionVocabulary = DEFAULT_VOCABULARY,
        date_recognizer: Optional[DateRecognizer] = None,
        sentence_splitter: Optional[SentenceSplitter] = None,
    ):
        """
        Initialize task detector.

        Args:
            skill_vocabulary: Skill names that may be mentioned in messages
            vocabulary: Phrase tables driving the rules
            date_recognizer: Primary deadline recognizer (default: regex/keyword patterns)
            sentence_splitter: Sentence segmentation (default: nltk punkt if installed,
                otherwise first-period splitting)
        """
        self._vocabulary = vocabulary
        self._date_recognizer = date_recognizer or PatternDateRecognizer(vocabulary)
        self._sentence_splitter = sentence_splitter or default_sentence_splitter()
        self._fallback_splitter = PeriodSentenceSplitter()
        self._rules = build_rules(vocabulary, skill_vocabulary, self._date_recognizer)

    @property
    def rules(self) -> tuple[DetectionRule, ...]:
        return self._rules

    @property
    def vocabulary(self) -> DetectionVocabulary:
        return self._vocabulary

    @property
    def date_recognizer(self) -> DateRecognizer:
        return self._date_recognizer

    @property
    def sentence_splitter(self) -> SentenceSplitter:
        return self._sentence_splitter

    def detect(self, text: str, options: Optional[DetectorOptions] = None) -> DetectionResult:
        """
        Detect whether text describes a delegable task.

        Never raises for malformed input: empty, whitespace-only, or non-string
        text yields a not-a-task result with zero confidence.

        Args:
            text: Message text to analyze
            options: Threshold and verbosity (defaults to DetectorOptions())

        Returns:
            DetectionResult with classification and extracted attributes
        """
        options = options or DetectorOptions()

        if not isinstance(text, str) or not text.strip():
            return DetectionResult(
                is_task=False,
                confidence=0.0,
                task_text=text if isinstance(text, str) else "",
            )

        message = MessageText.from_text(text)
        score = 0.0
        fired = []
        extracted = {}

        for rule in self._rules:
            value = rule.extract(message)
            if not value:
                continue
            score += rule.weight
            fired.append(rule.name)
            if rule.target:
                extracted[rule.target] = value
            log_rule_fired(rule.name, rule.weight, value, options.verbose)

        confidence = round(min(max(score, 0.0), CONFIDENCE_CEILING), 4)
        task_text, context = self._split_task_and_context(text)

        result = DetectionResult(
            is_task=confidence >= options.confidence_threshold,
            confidence=confidence,
            task_text=task_text,
            suggested_skills=tuple(extracted.get("suggested_skills", ())),
            deadline=extracted.get("deadline"),
            priority=extracted.get("priority"),
            context=context,
            fired_rules=tuple(fired),
        )

        log_detection_result(result, options.verbose)
        return result

    def _split_task_and_context(self, text: str) -> tuple[str, str]:
        """First sentence is the task, the remainder is context."""
        try:
            sentences = self._sentence_splitter.split(text)
        except Exception as e:
            log_recognizer_failure("sentence", self._sentence_splitter.name, e)
            sentences = self._fallback_splitter.split(text)

        if len(sentences) > 1:
            return sentences[0], " ".join(sentences[1:])
        return text, ""

    def explain_detection(
        self, result: DetectionResult, options: Optional[DetectorOptions] = None
    ) -> str:
        """
        Generate human-readable explanation of a detection.

        Args:
            result: Detection result to explain
            options: Options the detection ran with (for the threshold line)

        Returns:
            Explanation string
        """
        options = options or DetectorOptions()
        weights = {rule.name: rule.weight for rule in self._rules}

        report = TableFormatter(columns=[], total_width=60)
        verdict = "Task detected" if result.is_task else "Not a task"
        report.add_text(
            f"{verdict} (confidence: {result.confidence:.2f}, "
            f"threshold: {options.confidence_threshold:.2f})"
        )
        report.add_key_value("Task", f'"{result.task_text}"')
        if result.context:
            report.add_key_value("Context", f'"{result.context}"')
        if result.deadline:
            report.add_key_value("Deadline", result.deadline)
        if result.priority:
            report.add_key_value("Priority", result.priority)
        if result.suggested_skills:
            report.add_key_value("Skills", ", ".join(result.suggested_skills))

        if result.fired_rules:
            report.add_text("  Rules fired:")
            for name in result.fired_rules:
                report.add_text(f"    - {name} (+{weights.get(name, 0.0):.2f})")
        else:
            report.add_text("  Rules fired: none")

        return report.render()


def detect(
    text: str,
    skill_vocabulary: Iterable[str] = (),
    options: Optional[DetectorOptions] = None,
) -> DetectionResult:
    """
    One-shot detection with a freshly built detector.

    Convenience for callers that detect a single message against the current
    skill catalog; reuse a TaskDetector when classifying many messages.
    """
    return TaskDetector(skill_vocabulary=skill_vocabulary).detect(text, options)
