"""
Host-facing ports.

The pipeline never reads storage itself. Host applications implement these two
sources over whatever holds their skills catalog and team data.
"""

from abc import ABC, abstractmethod
from typing import Optional

from taskdispatch.contexts.ranking.models import Candidate, Skill


class SkillCatalogSource(ABC):
    """Supplies the skills catalog known at evaluation time."""

    @abstractmethod
    def resolve_skill_vocabulary(self) -> list[Skill]:
        """Return every catalog skill."""


class CandidatePoolSource(ABC):
    """Supplies the candidate pool for a team."""

    @abstractmethod
    def resolve_candidate_pool(
        self, team_id: Optional[str], exclude_user_id: Optional[str] = None
    ) -> list[Candidate]:
        """
        Return candidates for a team with activity and workload already scored.

        Args:
            team_id: Team whose members are eligible
            exclude_user_id: Member to leave out (usually the message sender)
        """
