"""
Integration tests for the delegation pipeline.

Runs screen -> detect -> rank against the team snapshot fixture. Most tests pin
the pattern date recognizer and period sentence splitter; the default-recognizer
tests exercise dateparser directly.
"""

from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from taskdispatch.contexts.detection.recognizers import (
    DateparserRecognizer,
    PatternDateRecognizer,
    PeriodSentenceSplitter,
)
from taskdispatch.contexts.dispatch.messages import ChatMessage
from taskdispatch.contexts.dispatch.pipeline import DelegationPipeline
from taskdispatch.contexts.dispatch.snapshot import TeamSnapshot
from taskdispatch.contexts.ranking.models import Skill
from taskdispatch.contexts.ranking.ranker import AssigneeRanker

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"
NOW = datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)
TODAY = date(2025, 3, 5)

REPORT_REQUEST = (
    "Can you please prepare the Q2 report by next Friday, it's urgent. "
    "Finance needs it for the board."
)


@pytest.fixture
def snapshot():
    return TeamSnapshot.from_yaml(FIXTURES_PATH / "team_snapshot.yaml", now=NOW)


@pytest.fixture
def pipeline(snapshot):
    return DelegationPipeline(
        catalog_source=snapshot,
        pool_source=snapshot,
        date_recognizer=PatternDateRecognizer(),
        sentence_splitter=PeriodSentenceSplitter(),
    )


def message(text, user_id="U1", **kwargs):
    return ChatMessage(text=text, user_id=user_id, team_id="T-platform", **kwargs)


@pytest.mark.integration
def test_report_request_suggests_grace(pipeline):
    """Detected task is ranked over reachable teammates, sender excluded."""
    suggestion = pipeline.suggest(message(REPORT_REQUEST), today=TODAY)

    assert suggestion is not None
    detection = suggestion.detection
    assert detection.is_task
    assert detection.priority == "high"
    assert detection.deadline == "by next Friday"
    assert detection.suggested_skills == ("Report",)
    assert detection.task_text == "Can you please prepare the Q2 report by next Friday, it's urgent."
    assert detection.context == "Finance needs it for the board."
    assert suggestion.due_date == date(2025, 3, 14)

    # U1 is the sender, U4 has no contact handle
    assert [s.user_id for s in suggestion.ranked] == ["U2", "U3"]

    grace, linus = suggestion.ranked
    assert grace.skill_match_score == pytest.approx(100)
    assert grace.total_score == pytest.approx(65 + 58 * 0.15 + 83 * 0.20)
    assert grace.match_reason == "Skills: Report (5/5), Very low current workload"
    assert linus.skill_match_score == pytest.approx(0)
    assert linus.match_reason == "No matching skills for this task"


@pytest.mark.integration
def test_default_recognizer_resolves_next_friday(snapshot):
    """dateparser-backed default keeps the "next" qualifier through to the due date."""
    pipeline = DelegationPipeline(
        catalog_source=snapshot,
        pool_source=snapshot,
        sentence_splitter=PeriodSentenceSplitter(),
    )
    assert isinstance(pipeline.date_recognizer, DateparserRecognizer)

    suggestion = pipeline.suggest(message(REPORT_REQUEST), today=TODAY)

    assert suggestion is not None
    assert suggestion.detection.deadline == "by next Friday"
    assert suggestion.due_date == date(2025, 3, 14)
    assert suggestion.summary_lines()[0] == "• Deadline: by next Friday (2025-03-14)"
    assert suggestion.top_choice.user_id == "U2"


@pytest.mark.integration
def test_summary_lines(pipeline):
    """Summary bullets list attributes then the recommendation."""
    suggestion = pipeline.suggest(message(REPORT_REQUEST), today=TODAY)

    assert suggestion.confidence_percent == 95
    assert suggestion.summary_lines() == [
        "• Deadline: by next Friday (2025-03-14)",
        "• Priority: High",
        "• Skills: Report",
        "• Context: Finance needs it for the board.",
        "• Recommendation: Grace (Skills: Report (5/5), Very low current workload)",
    ]


@pytest.mark.integration
@pytest.mark.parametrize(
    "chat_message",
    [
        message("ok thanks"),
        message(REPORT_REQUEST, is_automated=True),
        message(REPORT_REQUEST, thread_id="100.1", message_id="100.2"),
        message("lol that meme was great"),
    ],
    ids=["short", "automated", "thread-reply", "chatter"],
)
def test_no_suggestion(pipeline, chat_message):
    """Screened messages and chatter produce nothing."""
    assert pipeline.suggest(chat_message, today=TODAY) is None


@pytest.mark.integration
def test_unknown_team_has_no_candidates(pipeline):
    chat_message = ChatMessage(text=REPORT_REQUEST, user_id="U1", team_id="T-sales")
    assert pipeline.suggest(chat_message, today=TODAY) is None


@pytest.mark.integration
def test_threshold_is_configurable(snapshot):
    """A message passing the default threshold fails a stricter one."""
    text = "Please review the deck for the offsite"
    strict = DelegationPipeline(
        catalog_source=snapshot,
        pool_source=snapshot,
        date_recognizer=PatternDateRecognizer(),
        sentence_splitter=PeriodSentenceSplitter(),
        confidence_threshold=0.8,
    )

    assert DelegationPipeline(
        catalog_source=snapshot,
        pool_source=snapshot,
        date_recognizer=PatternDateRecognizer(),
        sentence_splitter=PeriodSentenceSplitter(),
    ).suggest(message(text), today=TODAY)
    assert strict.suggest(message(text), today=TODAY) is None


@pytest.mark.integration
def test_catalog_changes_apply_between_calls(snapshot, pipeline):
    """A fresh detector is built per call, so new skills are recognized."""
    text = "Please write the terraform module"
    first = pipeline.suggest(message(text), today=TODAY)
    assert first.detection.suggested_skills == ()

    snapshot.skills.append(Skill("sk-tf", "Terraform", "Infrastructure as code"))
    second = pipeline.suggest(message(text), today=TODAY)
    assert second.detection.suggested_skills == ("Terraform",)


@pytest.mark.integration
def test_custom_ranker_is_used(snapshot):
    """A custom ranker is used for every suggestion."""
    pipeline = DelegationPipeline(
        catalog_source=snapshot,
        pool_source=snapshot,
        date_recognizer=PatternDateRecognizer(),
        sentence_splitter=PeriodSentenceSplitter(),
        ranker=AssigneeRanker(tie_break="user_id"),
    )
    chat_message = message("Please review the deck for the offsite", user_id="U9")
    suggestion = pipeline.suggest(chat_message, today=TODAY)

    # General task: order comes from activity and workload alone
    assert pipeline.ranker.tie_break == "user_id"
    assert [s.user_id for s in suggestion.ranked] == ["U1", "U2", "U3"]
