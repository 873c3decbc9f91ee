"""
Delegation pipeline.

Wires detection and ranking together for one incoming chat message:

    screen -> detect (current catalog) -> resolve team pool -> rank -> suggestion

The pipeline holds configuration only. The skill catalog and candidate pool
are fetched through the host's ports on every call, and a fresh detector is
built each time so catalog changes take effect immediately.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from taskdispatch.contexts.detection.deadlines import resolve_due_date
from taskdispatch.contexts.detection.detector import DetectionResult, DetectorOptions, TaskDetector
from taskdispatch.contexts.detection.patterns import DEFAULT_VOCABULARY, DetectionVocabulary
from taskdispatch.contexts.detection.recognizers import (
    DateRecognizer,
    SentenceSplitter,
    default_date_recognizer,
    default_sentence_splitter,
)
from taskdispatch.contexts.dispatch.logger import _log_debug, _log_info
from taskdispatch.contexts.dispatch.messages import ChatMessage, should_screen_message
from taskdispatch.contexts.dispatch.ports import CandidatePoolSource, SkillCatalogSource
from taskdispatch.contexts.ranking.models import AssigneeScore
from taskdispatch.contexts.ranking.ranker import AssigneeRanker

# Hosts run detection slightly stricter than the detector default
PIPELINE_CONFIDENCE_THRESHOLD = 0.45


@dataclass(frozen=True)
class DelegationSuggestion:
    """A detected task with its ranked assignees."""

    message: ChatMessage
    detection: DetectionResult
    ranked: tuple[AssigneeScore, ...]
    due_date: Optional[date] = None

    @property
    def top_choice(self) -> Optional[AssigneeScore]:
        return self.ranked[0] if self.ranked else None

    @property
    def confidence_percent(self) -> int:
        return round(self.detection.confidence * 100)

    def summary_lines(self) -> list[str]:
        """Bullet lines describing the task and the recommended assignee."""
        detection = self.detection
        lines = []
        if detection.deadline:
            deadline = detection.deadline
            if self.due_date:
                deadline += f" ({self.due_date.isoformat()})"
            lines.append(f"• Deadline: {deadline}")
        if detection.priority:
            lines.append(f"• Priority: {detection.priority.capitalize()}")
        if detection.suggested_skills:
            lines.append(f"• Skills: {', '.join(detection.suggested_skills)}")
        if detection.context:
            lines.append(f"• Context: {detection.context}")
        top = self.top_choice
        if top:
            lines.append(f"• Recommendation: {top.name} ({top.match_reason})")
        return lines


class DelegationPipeline:
    """
    Turns chat messages into delegation suggestions.

    Example:
        pipeline = DelegationPipeline(catalog_source=snapshot, pool_source=snapshot)
        suggestion = pipeline.suggest(ChatMessage(text="Can you fix the login bug?",
                                                  user_id="U1", team_id="T1"))
        if suggestion:
            print("\\n".join(suggestion.summary_lines()))
    """

    def __init__(
        self,
        catalog_source: SkillCatalogSource,
        pool_source: CandidatePoolSource,
        vocabulary: DetectionVocabulary = DEFAULT_VOCABULARY,
        date_recognizer: Optional[DateRecognizer] = None,
        sentence_splitter: Optional[SentenceSplitter] = None,
        ranker: Optional[AssigneeRanker] = None,
        confidence_threshold: float = PIPELINE_CONFIDENCE_THRESHOLD,
        verbose: bool = False,
    ):
        """
        Initialize pipeline.

        Args:
            catalog_source: Port supplying the skills catalog
            pool_source: Port supplying team candidates
            vocabulary: Detection phrase tables
            date_recognizer: Deadline recognizer (default: dateparser)
            sentence_splitter: Sentence splitter (default: nltk punkt if installed)
            ranker: Assignee ranker (default weights, input-order ties)
            confidence_threshold: Minimum detection confidence to rank
            verbose: Log fired rules at INFO
        """
        self.catalog_source = catalog_source
        self.pool_source = pool_source
        self.vocabulary = vocabulary
        self.date_recognizer = date_recognizer or default_date_recognizer(vocabulary)
        self.sentence_splitter = sentence_splitter or default_sentence_splitter()
        self.ranker = ranker or AssigneeRanker()
        self.options = DetectorOptions(confidence_threshold=confidence_threshold, verbose=verbose)

    def suggest(
        self, message: ChatMessage, today: Optional[date] = None
    ) -> Optional[DelegationSuggestion]:
        """
        Produce a delegation suggestion for a message.

        Args:
            message: Incoming chat message
            today: Reference date for due-date resolution (defaults to today)

        Returns:
            DelegationSuggestion, or None when the message is screened out,
            is not a task, or nobody on the team can take it
        """
        if should_screen_message(message):
            _log_debug(f"screened message {message.message_id or '-'} from {message.user_id or '-'}")
            return None

        catalog = list(self.catalog_source.resolve_skill_vocabulary())
        detector = TaskDetector(
            skill_vocabulary=[skill.name for skill in catalog],
            vocabulary=self.vocabulary,
            date_recognizer=self.date_recognizer,
            sentence_splitter=self.sentence_splitter,
        )

        detection = detector.detect(message.text, self.options)
        if not detection.is_task:
            _log_debug(f"not a task (confidence {detection.confidence:.2f})")
            return None

        pool = self.pool_source.resolve_candidate_pool(message.team_id, message.user_id)
        candidates = [
            candidate
            for candidate in pool
            if candidate.contact_handle and candidate.user_id != message.user_id
        ]
        if not candidates:
            _log_info(f"task detected but team {message.team_id or '-'} has no reachable candidates")
            return None

        ranked = self.ranker.rank(
            detection.task_text, detection.suggested_skills, candidates, catalog
        )
        suggestion = DelegationSuggestion(
            message=message,
            detection=detection,
            ranked=tuple(ranked),
            due_date=resolve_due_date(detection.deadline, today),
        )

        _log_info(
            f"task detected ({suggestion.confidence_percent}% confidence), "
            f"suggesting {suggestion.top_choice.name}"
        )
        return suggestion
