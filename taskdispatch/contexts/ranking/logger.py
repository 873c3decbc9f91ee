"""
Ranking context logger.

Provides logging interface for the ranking context with automatic [rank] prefix.
All ranking modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[rank]"


def _log_info(message: str) -> None:
    """Log info message with [rank] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [rank] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_relevance_map(relevance) -> None:
    """Log the per-call relevance map (skill name -> weight)."""
    if relevance.is_empty():
        _log_debug("no relevant skills, scoring as a general task")
        return
    listed = ", ".join(f"{relevance.name_of(skill_id)}={value}" for skill_id, value in relevance.items())
    _log_debug(f"relevance: {listed}")


def log_ranking_result(scores: list) -> None:
    """Log the top of a ranking at INFO and every score at DEBUG."""
    if not scores:
        _log_info("no candidates to rank")
        return

    top = scores[0]
    _log_info(f"ranked {len(scores)} candidates, top: {top.name} ({top.total_score:.1f})")
    for score in scores:
        _log_debug(
            f"{score.user_id}: total={score.total_score:.1f} skill={score.skill_match_score:.1f} "
            f"activity={score.activity_score:.0f} workload={score.workload_score:.0f}"
        )
