#!/usr/bin/env python3
"""
Rank a team snapshot's members for a task.

Usage:
    python scripts/rank_assignees.py tests/fixtures/team_snapshot.yaml "Fix the Python login service"
    python scripts/rank_assignees.py team.yaml "Design the onboarding flow" --skill "UI Design" --exclude U1
    python scripts/rank_assignees.py team.yaml "Can you fix the deploy script by Friday?" --message --sender U1
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from loguru import logger

from taskdispatch.contexts.dispatch.exceptions import TeamSnapshotError
from taskdispatch.contexts.dispatch.logger import setup_dispatch_logger
from taskdispatch.contexts.dispatch.messages import ChatMessage
from taskdispatch.contexts.dispatch.pipeline import PIPELINE_CONFIDENCE_THRESHOLD, DelegationPipeline
from taskdispatch.contexts.dispatch.snapshot import TeamSnapshot
from taskdispatch.contexts.ranking.ranker import TIE_BREAKS, AssigneeRanker
from taskdispatch.contexts.ranking.report import format_ranking_report

load_dotenv()

LOGS_PATH = os.getenv("TASKDISPATCH_LOGS_PATH")

app = typer.Typer(help="Rank assignees from a team snapshot.")


@app.command()
def main(
    snapshot_file: Path = typer.Argument(..., help="Team snapshot YAML"),
    task_text: str = typer.Argument(..., help="Task description (or raw message with --message)"),
    skill: List[str] = typer.Option([], "--skill", "-s", help="Required skill name"),
    exclude: Optional[str] = typer.Option(None, "--exclude", help="User id to leave out"),
    tie_break: str = typer.Option("input", "--tie-break", help=f"One of {', '.join(TIE_BREAKS)}"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Show only the top N"),
    message: bool = typer.Option(
        False, "--message", help="Treat TASK_TEXT as a chat message and run detection first"
    ),
    sender: Optional[str] = typer.Option(None, "--sender", help="Sender user id for --message"),
    threshold: float = typer.Option(
        PIPELINE_CONFIDENCE_THRESHOLD, "--threshold", "-t", help="Detection threshold for --message"
    ),
):
    """Print the ranking table for TASK_TEXT."""
    if tie_break not in TIE_BREAKS:
        typer.secho(f"ERROR: --tie-break must be one of {TIE_BREAKS}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    try:
        snapshot = TeamSnapshot.from_yaml(snapshot_file)
    except TeamSnapshotError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if LOGS_PATH:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = setup_dispatch_logger(
            Path(LOGS_PATH) / f"rank_{timestamp}", team=str(snapshot.team_id or snapshot_file)
        )
        typer.echo(f"Log: {log_file}")
    else:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    ranker = AssigneeRanker(tie_break=tie_break)

    if message:
        pipeline = DelegationPipeline(
            catalog_source=snapshot,
            pool_source=snapshot,
            ranker=ranker,
            confidence_threshold=threshold,
        )
        suggestion = pipeline.suggest(
            ChatMessage(text=task_text, user_id=sender, team_id=snapshot.team_id)
        )
        if suggestion is None:
            typer.secho("No delegation suggested", fg=typer.colors.YELLOW)
            raise typer.Exit(0)

        detection = suggestion.detection
        typer.echo(f'Task: "{detection.task_text}" ({suggestion.confidence_percent}% confidence)')
        for line in suggestion.summary_lines():
            typer.echo(line)
        typer.echo("")
        typer.echo(format_ranking_report(suggestion.ranked, limit=limit))
        return

    candidates = snapshot.resolve_candidate_pool(snapshot.team_id, exclude_user_id=exclude)
    scores = ranker.rank(task_text, skill, candidates, snapshot.resolve_skill_vocabulary())
    typer.echo(format_ranking_report(scores, title=f"Ranking: {task_text}", limit=limit))


if __name__ == "__main__":
    app()
