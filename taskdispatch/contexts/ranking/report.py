"""Fixed-width ranking reports."""

from typing import Optional, Sequence

from taskdispatch.contexts.ranking.models import AssigneeScore
from taskdispatch.utils.report_formatter import Column, TableFormatter

RANKING_COLUMNS = [
    Column("#", 3, align=">"),
    Column("Name", 22),
    Column("Handle", 12),
    Column("Total", 7, align=">", precision=1),
    Column("Skill", 7, align=">", precision=1),
    Column("Active", 7, align=">", precision=0),
    Column("Load", 6, align=">", precision=0),
    Column("Reason", 50),
]


def format_ranking_report(
    scores: Sequence[AssigneeScore],
    title: Optional[str] = None,
    limit: Optional[int] = None,
) -> str:
    """
    Render ranked assignees as a fixed-width table.

    Args:
        scores: Output of AssigneeRanker.rank(), already sorted
        title: Optional section title
        limit: Show only the first N rows

    Returns:
        Report string
    """
    report = TableFormatter(RANKING_COLUMNS, total_width=120)
    if title:
        report.add_section_header(title)

    if not scores:
        report.add_text("No candidates available.")
        return report.render()

    report.add_table_header()
    shown = scores[:limit] if limit else scores
    for position, score in enumerate(shown, start=1):
        report.add_row(
            [
                position,
                score.name,
                score.contact_handle or "-",
                float(score.total_score),
                float(score.skill_match_score),
                float(score.activity_score),
                float(score.workload_score),
                score.match_reason,
            ]
        )

    hidden = len(scores) - len(shown)
    if hidden > 0:
        report.add_text(f"... {hidden} more")
    return report.render()
