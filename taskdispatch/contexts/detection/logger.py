"""
Detection context logger.

Provides logging interface for the detection context with automatic [detect] prefix.
All detection modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from taskdispatch.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[detect]"


def setup_detection_logger(log_dir: Path, recognizers: str = "") -> Path:
    """
    Setup logger for detection context.

    Args:
        log_dir: Directory for this detection session
        recognizers: Description of the recognizers in use, for provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="detect",
        log_dir=log_dir,
        extra_provenance={"Recognizers": recognizers} if recognizers else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [detect] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [detect] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [detect] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_rule_fired(rule_name: str, weight: float, value, verbose: bool) -> None:
    """Log a single fired rule; INFO when verbose detection was requested."""
    message = f"rule {rule_name} fired (+{weight:.2f}): {value!r}"
    if verbose:
        _log_info(message)
    else:
        _log_debug(message)


def log_recognizer_failure(capability: str, recognizer_name: str, error: Exception) -> None:
    """Log a recognizer exception that was absorbed by the fallback path."""
    _log_warning(
        f"{capability} recognizer '{recognizer_name}' failed, using fallback: "
        f"{type(error).__name__}: {error}"
    )


def log_detection_result(result, verbose: bool) -> None:
    """
    Log the outcome of one detection.

    Args:
        result: DetectionResult from TaskDetector.detect()
        verbose: Promote the summary to INFO
    """
    summary = (
        f"is_task={result.is_task} confidence={result.confidence:.2f} "
        f"rules={list(result.fired_rules)} deadline={result.deadline!r} "
        f"priority={result.priority!r} skills={list(result.suggested_skills)}"
    )
    if verbose:
        _log_info(summary)
    else:
        _log_debug(summary)
