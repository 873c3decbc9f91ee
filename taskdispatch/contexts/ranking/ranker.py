"""
Assignee Ranker

Orders candidates for a detected task by a fixed convex combination of:
- Skill match (relevance-weighted proficiency in the skills the task calls for)
- Recent activity
- Available capacity (inverted workload)

Every component is clamped to [0, 100] so the total is too.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from taskdispatch.contexts.ranking.exceptions import InvalidWeightsError
from taskdispatch.contexts.ranking.logger import log_ranking_result, log_relevance_map
from taskdispatch.contexts.ranking.models import (
    MAX_PROFICIENCY,
    MIN_PROFICIENCY,
    AssigneeScore,
    Candidate,
    Skill,
)
from taskdispatch.contexts.ranking.relevance import RelevanceMap, build_relevance_map

# Factor weights for scoring
SKILL_MATCH_WEIGHT = 0.65
ACTIVITY_WEIGHT = 0.15
WORKLOAD_WEIGHT = 0.20

# Skill score when the task needs nothing in particular
GENERAL_TASK_SKILL_SCORE = 50.0

# Reason thresholds (strictly greater than)
VERY_LOW_WORKLOAD_THRESHOLD = 80
LOW_WORKLOAD_THRESHOLD = 60
RECENTLY_ACTIVE_THRESHOLD = 90

# Matched skills named in the reason text
MAX_REASON_SKILLS = 2

GENERAL_TASK_REASON = "General task (no specific skills required)"
NO_MATCHING_SKILLS_REASON = "No matching skills for this task"
AVAILABLE_REASON = "Team member available for work"

TIE_BREAKS = ("input", "user_id")


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(high, max(low, value))


@dataclass(frozen=True)
class RankingWeights:
    """Factor weights; must be non-negative and sum to 1.0."""

    skill_match: float = SKILL_MATCH_WEIGHT
    activity: float = ACTIVITY_WEIGHT
    workload: float = WORKLOAD_WEIGHT

    def __post_init__(self):
        weights = self.as_dict()
        negative = [name for name, value in weights.items() if value < 0]
        if negative:
            raise InvalidWeightsError(
                f"Ranking weights must be non-negative: {', '.join(negative)}", weights
            )
        if not math.isclose(sum(weights.values()), 1.0, abs_tol=1e-9):
            raise InvalidWeightsError(
                f"Ranking weights must sum to 1.0 (got {sum(weights.values()):.4f})", weights
            )

    def as_dict(self) -> dict[str, float]:
        return {"skill_match": self.skill_match, "activity": self.activity, "workload": self.workload}


DEFAULT_WEIGHTS = RankingWeights()


class AssigneeRanker:
    """
    Ranks candidates for a task.

    Stateless apart from configuration; the relevance map is rebuilt for every
    rank() call.
    """

    def __init__(self, weights: RankingWeights = DEFAULT_WEIGHTS, tie_break: str = "input"):
        """
        Initialize ranker.

        Args:
            weights: Factor weights
            tie_break: Order for equal totals: "input" keeps candidate order,
                "user_id" sorts ascending by user id
        """
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"tie_break must be one of {TIE_BREAKS}, got {tie_break!r}")
        self.weights = weights
        self.tie_break = tie_break

    def rank(
        self,
        task_text: str,
        required_skills: Iterable[str],
        candidates: Iterable[Candidate],
        skill_catalog: Iterable[Skill],
    ) -> list[AssigneeScore]:
        """
        Rank candidates for a task, best first.

        Args:
            task_text: Task description (DetectionResult.task_text)
            required_skills: Skill names detected in the message
            candidates: Candidate pool (empty pool -> empty result)
            skill_catalog: All known skills

        Returns:
            AssigneeScore list sorted by descending total_score
        """
        candidates = list(candidates)
        if not candidates:
            log_ranking_result([])
            return []

        relevance = build_relevance_map(task_text, required_skills, skill_catalog)
        log_relevance_map(relevance)

        scores = [self.score_candidate(candidate, relevance) for candidate in candidates]

        if self.tie_break == "user_id":
            scores.sort(key=lambda s: (-s.total_score, s.user_id))
        else:
            scores.sort(key=lambda s: -s.total_score)

        log_ranking_result(scores)
        return scores

    def score_candidate(self, candidate: Candidate, relevance: RelevanceMap) -> AssigneeScore:
        """Score one candidate against a prepared relevance map."""
        matched: list[tuple[str, float]] = []

        if relevance.is_empty():
            skill_score = GENERAL_TASK_SKILL_SCORE
            skill_fragment = GENERAL_TASK_REASON
        else:
            accumulated = 0.0
            for skill_id, value in relevance.items():
                proficiency = candidate.proficiency_for(skill_id)
                if proficiency is None:
                    continue
                proficiency = _clamp(proficiency, MIN_PROFICIENCY, MAX_PROFICIENCY)
                accumulated += value * (proficiency / MAX_PROFICIENCY)
                matched.append((relevance.name_of(skill_id), proficiency))

            total_relevance = relevance.total
            skill_score = _clamp(100 * accumulated / total_relevance) if total_relevance else 0.0
            skill_fragment = ""
            if matched:
                named = ", ".join(
                    f"{name} ({level:g}/{MAX_PROFICIENCY})" for name, level in matched[:MAX_REASON_SKILLS]
                )
                skill_fragment = f"Skills: {named}"

        activity = _clamp(candidate.activity_score)
        workload = _clamp(candidate.workload_score)
        available = 100 - workload

        total = (
            skill_score * self.weights.skill_match
            + activity * self.weights.activity
            + available * self.weights.workload
        )

        return AssigneeScore(
            user_id=candidate.user_id,
            name=candidate.name,
            contact_handle=candidate.contact_handle,
            skill_match_score=skill_score,
            activity_score=activity,
            workload_score=workload,
            total_score=_clamp(total),
            match_reason=self._match_reason(skill_fragment, available, activity, relevance),
            matched_skills=tuple(name for name, _ in matched),
        )

    @staticmethod
    def _match_reason(
        skill_fragment: str, available: float, activity: float, relevance: RelevanceMap
    ) -> str:
        fragments = [skill_fragment] if skill_fragment else []

        if available > VERY_LOW_WORKLOAD_THRESHOLD:
            fragments.append("Very low current workload")
        elif available > LOW_WORKLOAD_THRESHOLD:
            fragments.append("Low current workload")

        if activity > RECENTLY_ACTIVE_THRESHOLD:
            fragments.append("Recently active")

        if fragments:
            return ", ".join(fragments)
        return AVAILABLE_REASON if relevance.is_empty() else NO_MATCHING_SKILLS_REASON


def rank(
    task_text: str,
    required_skills: Iterable[str],
    candidates: Iterable[Candidate],
    skill_catalog: Iterable[Skill],
    weights: Optional[RankingWeights] = None,
    tie_break: str = "input",
) -> list[AssigneeScore]:
    """Rank candidates with a one-off AssigneeRanker."""
    ranker = AssigneeRanker(weights=weights or DEFAULT_WEIGHTS, tie_break=tie_break)
    return ranker.rank(task_text, required_skills, candidates, skill_catalog)
