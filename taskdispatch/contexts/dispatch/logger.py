"""
Dispatch context logger.

Provides logging interface for the dispatch context with automatic [dispatch] prefix.
All dispatch modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from taskdispatch.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[dispatch]"


def setup_dispatch_logger(log_dir: Path, team: str = "") -> Path:
    """
    Setup logger for dispatch context.

    Args:
        log_dir: Directory for this dispatch session
        team: Team snapshot in use, for provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="dispatch",
        log_dir=log_dir,
        extra_provenance={"Team": team} if team else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [dispatch] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [dispatch] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
