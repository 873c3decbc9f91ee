"""
Loguru session setup shared by all contexts.

Each script run gets its own log directory holding one ``<context>.log`` file
at DEBUG, plus a console sink. The file opens with a provenance header
recording how the run was invoked. Prefixed wrappers live in
contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

CONSOLE_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
)

HEADER_RULE = "=" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Replace loguru's sinks with a session log file and a console sink.

    Args:
        context_name: Context identifier ("detect", "rank", "dispatch"); names the file
        log_dir: Session directory, created if missing
        extra_provenance: Extra header entries (recognizers, team, weights)
        console_level: Minimum level echoed to stdout (the file always gets DEBUG)

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger(
            context_name="dispatch",
            log_dir=Path("outs/logs/rank_20251114_123456"),
            extra_provenance={"Team": "T-platform"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level, color in CONSOLE_COLORS.items():
        logger.level(level, color=color)

    logger.add(log_file, level="DEBUG", format=FILE_FORMAT)
    logger.add(sys.stdout, level=console_level, format=CONSOLE_FORMAT, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """Write the run's invocation details (and any extra entries) as a header block."""
    entries = {
        "Script": sys.argv[0],
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
    }
    entries.update(extra_context or {})

    logger.info(HEADER_RULE)
    for name, value in entries.items():
        logger.info(f"{name}: {value}")
    logger.info(HEADER_RULE)
