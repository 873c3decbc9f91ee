"""
Candidate signal formulas.

Hosts derive the two non-skill ranking inputs from raw data with these
functions: recency of activity and share of the team's open work.
"""

from datetime import datetime
from typing import Iterable, Optional

from taskdispatch.utils.timestamp import TimestampLike, hours_between, parse_timestamp, utc_now

# Activity decays linearly to zero over three days
ACTIVITY_WINDOW_HOURS = 72

# With no team baseline, ten open tasks is a full workload
FALLBACK_TASK_CAPACITY = 10

# A member carrying twice the team average is fully loaded
WORKLOAD_SATURATION_RATIO = 2

MAX_SCORE = 100


def activity_score(last_active: Optional[TimestampLike], now: Optional[datetime] = None) -> int:
    """
    Score recent activity from 100 (active now) down to 0 (72+ hours idle).

    Args:
        last_active: Last activity timestamp (datetime or ISO string); None or
            unparseable values score 0
        now: Reference time (defaults to current UTC time)

    Returns:
        Integer score in [0, 100]
    """
    last = parse_timestamp(last_active)
    if last is None:
        return 0

    hours = hours_between(last, now or utc_now())
    score = MAX_SCORE - (hours / ACTIVITY_WINDOW_HOURS) * MAX_SCORE
    return round(min(MAX_SCORE, max(0.0, score)))


def team_average_task_count(task_counts: Iterable[int], team_size: int) -> int:
    """Rounded mean active tasks per member (0 for an empty team)."""
    if team_size <= 0:
        return 0
    return round(sum(task_counts) / team_size)


def workload_score(active_task_count: int, team_average: float = 0) -> int:
    """
    Score current workload from 0 (idle) to 100 (saturated).

    Relative to the team average when there is one, otherwise against a
    fixed capacity of ten tasks.
    """
    active_task_count = max(0, active_task_count)
    if not team_average or team_average <= 0:
        score = active_task_count / FALLBACK_TASK_CAPACITY * MAX_SCORE
    else:
        score = (active_task_count / team_average) / WORKLOAD_SATURATION_RATIO * MAX_SCORE
    return round(min(MAX_SCORE, score))
