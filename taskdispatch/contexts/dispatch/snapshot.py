"""
YAML team snapshots.

A snapshot is a point-in-time export of one team: the skills catalog plus each
member's skill levels, last activity and open task count. TeamSnapshot
implements both pipeline ports, so scripts and tests can run the full
pipeline without a host application.

Snapshot format:

    team_id: T-platform
    skills:
      - {id: sk-py, name: Python, description: Backend services and tooling}
    members:
      - user_id: U1
        name: Ada
        contact_handle: "@ada"
        last_active: "2025-03-05T09:00:00Z"
        active_tasks: 2
        skills: {sk-py: 5}
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from omegaconf import DictConfig, OmegaConf

from taskdispatch.contexts.dispatch.exceptions import TeamSnapshotError
from taskdispatch.contexts.dispatch.logger import _log_debug
from taskdispatch.contexts.dispatch.ports import CandidatePoolSource, SkillCatalogSource
from taskdispatch.contexts.ranking.models import Candidate, Skill, UserSkillProfile
from taskdispatch.contexts.ranking.signals import (
    activity_score,
    team_average_task_count,
    workload_score,
)
from taskdispatch.utils.timestamp import parse_timestamp, utc_now


@dataclass(frozen=True)
class MemberRecord:
    """Raw per-member data, before signals are computed."""

    user_id: str
    name: str
    contact_handle: Optional[str] = None
    skill_levels: tuple[tuple[str, float], ...] = ()
    last_active: Optional[datetime] = None
    active_tasks: int = 0


@dataclass
class TeamSnapshot(SkillCatalogSource, CandidatePoolSource):
    """In-memory team data serving the catalog and candidate-pool ports."""

    team_id: Optional[str]
    skills: list[Skill] = field(default_factory=list)
    members: list[MemberRecord] = field(default_factory=list)
    now: Optional[datetime] = None

    @classmethod
    def from_yaml(cls, path: Path, now: Optional[datetime] = None) -> "TeamSnapshot":
        """
        Load a snapshot YAML file.

        Args:
            path: Snapshot file
            now: Reference time for activity scoring (defaults to the time of
                each resolve call)

        Raises:
            TeamSnapshotError: If the file is missing or malformed
        """
        path = Path(path)
        if not path.is_file():
            raise TeamSnapshotError("Snapshot file not found", snapshot_path=path)

        conf = OmegaConf.load(path)
        if not isinstance(conf, DictConfig):
            raise TeamSnapshotError("Snapshot must be a mapping", snapshot_path=path)

        return cls.from_dict(OmegaConf.to_container(conf, resolve=True), now=now, path=path)

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], now: Optional[datetime] = None, path: Optional[Path] = None
    ) -> "TeamSnapshot":
        skills = []
        for entry in data.get("skills") or []:
            if not isinstance(entry, dict) or not entry.get("id") or not entry.get("name"):
                raise TeamSnapshotError(
                    "Skill entries need an id and a name", snapshot_path=path, entry=str(entry)
                )
            skills.append(
                Skill(id=str(entry["id"]), name=str(entry["name"]), description=entry.get("description"))
            )

        members = []
        for entry in data.get("members") or []:
            if not isinstance(entry, dict) or not entry.get("user_id"):
                raise TeamSnapshotError(
                    "Member entries need a user_id", snapshot_path=path, entry=str(entry)
                )
            members.append(_member_from_dict(entry, path))

        return cls(team_id=data.get("team_id"), skills=skills, members=members, now=now)

    def resolve_skill_vocabulary(self) -> list[Skill]:
        return list(self.skills)

    def resolve_candidate_pool(
        self, team_id: Optional[str], exclude_user_id: Optional[str] = None
    ) -> list[Candidate]:
        if team_id and self.team_id and team_id != self.team_id:
            _log_debug(f"snapshot holds team {self.team_id}, not {team_id}")
            return []

        now = self.now or utc_now()
        average = team_average_task_count(
            (member.active_tasks for member in self.members), len(self.members)
        )

        return [
            Candidate(
                user_id=member.user_id,
                name=member.name,
                contact_handle=member.contact_handle,
                skills=tuple(
                    UserSkillProfile(member.user_id, skill_id, level)
                    for skill_id, level in member.skill_levels
                ),
                activity_score=activity_score(member.last_active, now),
                workload_score=workload_score(member.active_tasks, average),
            )
            for member in self.members
            if member.user_id != exclude_user_id
        ]


def _member_from_dict(entry: dict[str, Any], path: Optional[Path]) -> MemberRecord:
    user_id = str(entry["user_id"])
    levels = entry.get("skills") or {}
    if not isinstance(levels, dict):
        raise TeamSnapshotError(
            "Member skills must map skill id to proficiency", snapshot_path=path, entry=user_id
        )

    try:
        skill_levels = tuple((str(skill_id), float(level)) for skill_id, level in levels.items())
        active_tasks = int(entry.get("active_tasks") or 0)
    except (TypeError, ValueError) as e:
        raise TeamSnapshotError(
            f"Non-numeric proficiency or task count: {e}", snapshot_path=path, entry=user_id
        ) from e

    raw_last_active = entry.get("last_active")
    last_active = parse_timestamp(raw_last_active)
    if raw_last_active not in (None, "") and last_active is None:
        raise TeamSnapshotError(
            f"last_active must be an ISO 8601 timestamp, got {raw_last_active!r}",
            snapshot_path=path,
            entry=user_id,
        )

    return MemberRecord(
        user_id=user_id,
        # Fall back to the handle, then the id, for display
        name=str(entry.get("name") or entry.get("contact_handle") or user_id),
        contact_handle=entry.get("contact_handle"),
        skill_levels=skill_levels,
        last_active=last_active,
        active_tasks=active_tasks,
    )
