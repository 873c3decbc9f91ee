"""
Data structures shared by the ranking context.

Records are frozen: a Candidate is assembled fresh for each ranking call from
host data, and AssigneeScore is output only.
"""

from dataclasses import dataclass, field
from typing import Optional

# Proficiency is a 1-5 self-rating used only as a multiplier
MIN_PROFICIENCY = 1
MAX_PROFICIENCY = 5


@dataclass(frozen=True)
class Skill:
    """Skill catalog entry."""

    id: str
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class UserSkillProfile:
    """One user's self-reported proficiency in one catalog skill."""

    user_id: str
    skill_id: str
    proficiency_level: float


@dataclass(frozen=True)
class Candidate:
    """
    A person eligible for assignment, with precomputed signals.

    activity_score and workload_score are 0-100; see signals.py for how hosts
    derive them from raw activity timestamps and task counts.
    """

    user_id: str
    name: str
    contact_handle: Optional[str]
    skills: tuple[UserSkillProfile, ...] = ()
    activity_score: float = 0.0
    workload_score: float = 0.0

    def proficiency_for(self, skill_id: str) -> Optional[float]:
        """Proficiency for a catalog skill, or None if the candidate lacks it."""
        for profile in self.skills:
            if profile.skill_id == skill_id:
                return profile.proficiency_level
        return None


@dataclass(frozen=True)
class AssigneeScore:
    """Ranking output for one candidate."""

    user_id: str
    name: str
    contact_handle: Optional[str]
    skill_match_score: float
    activity_score: float
    workload_score: float
    total_score: float
    match_reason: str
    matched_skills: tuple[str, ...] = field(default=())
