#!/usr/bin/env python3
"""
Classify a chat message as a delegable task and explain the decision.

Usage:
    python scripts/detect_task.py "Can you please prepare the Q2 report by next Friday, it's urgent"
    python scripts/detect_task.py "fix the deploy script" --skill DevOps --skill Python -t 0.45
    python scripts/detect_task.py "ship the beta by March 3" --vocabulary vocab.yaml --dateparser
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from loguru import logger

from taskdispatch.contexts.detection.deadlines import resolve_due_date
from taskdispatch.contexts.detection.detector import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DetectorOptions,
    TaskDetector,
)
from taskdispatch.contexts.detection.exceptions import VocabularyConfigError
from taskdispatch.contexts.detection.logger import setup_detection_logger
from taskdispatch.contexts.detection.recognizers import (
    PatternDateRecognizer,
    default_date_recognizer,
    default_sentence_splitter,
)
from taskdispatch.contexts.detection.vocabulary import load_vocabulary

load_dotenv()

LOGS_PATH = os.getenv("TASKDISPATCH_LOGS_PATH")

app = typer.Typer(help="Detect tasks in chat messages.")


@app.command()
def main(
    text: str = typer.Argument(..., help="Message text to classify"),
    threshold: float = typer.Option(
        DEFAULT_CONFIDENCE_THRESHOLD, "--threshold", "-t", help="Minimum confidence for a task"
    ),
    skill: List[str] = typer.Option([], "--skill", "-s", help="Skill name in the vocabulary"),
    vocabulary: Optional[Path] = typer.Option(
        None, "--vocabulary", help="YAML vocabulary override (default: $TASKDISPATCH_VOCABULARY_PATH)"
    ),
    dateparser: bool = typer.Option(
        False, "--dateparser", help="Recognize deadlines with dateparser before the patterns"
    ),
    download_punkt: bool = typer.Option(
        False, "--download-punkt", help="Download the nltk punkt model if it is missing"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every fired rule"),
):
    """Classify TEXT and print which rules fired."""
    try:
        vocab = load_vocabulary(vocabulary)
    except VocabularyConfigError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    date_recognizer = default_date_recognizer(vocab) if dateparser else PatternDateRecognizer(vocab)
    splitter = default_sentence_splitter(download=download_punkt)

    if LOGS_PATH:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = setup_detection_logger(
            Path(LOGS_PATH) / f"detect_{timestamp}",
            recognizers=f"date={date_recognizer.name}, sentence={splitter.name}",
        )
        typer.echo(f"Log: {log_file}")
    else:
        logger.remove()
        logger.add(sys.stderr, level="INFO" if verbose else "WARNING")

    detector = TaskDetector(
        skill_vocabulary=skill,
        vocabulary=vocab,
        date_recognizer=date_recognizer,
        sentence_splitter=splitter,
    )
    options = DetectorOptions(confidence_threshold=threshold, verbose=verbose)
    result = detector.detect(text, options)

    typer.echo(detector.explain_detection(result, options))

    due = resolve_due_date(result.deadline)
    if due:
        typer.echo(f"  Due date: {due.isoformat()}")

    color = typer.colors.GREEN if result.is_task else typer.colors.YELLOW
    typer.secho("\nTask" if result.is_task else "\nNot a task", fg=color)


if __name__ == "__main__":
    app()
