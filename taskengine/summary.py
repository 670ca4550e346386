"""
Plain-text rendering of extracted tasks and transcript lines.
"""

from datetime import datetime
from typing import Iterable

from .models import Task

SUMMARY_DATE_FORMAT = "%b %d, %Y %H:%M"  # Mar 11, 2024 14:30
SUMMARY_HEADER = "=== EXTRACTED TASKS ==="


def format_task_summary(tasks: Iterable[Task], date_format: str = SUMMARY_DATE_FORMAT) -> str:
    """Render tasks as the block appended under a transcript.

    Format:
        === EXTRACTED TASKS ===
        - <title>
          Date: <formatted scheduled_at>     (scheduled tasks only)
          Details: <description>             (non-empty descriptions only)
    """
    lines = ["", SUMMARY_HEADER]
    for task in tasks:
        lines.append(f"- {task.title}")
        if task.scheduled_at is not None:
            lines.append(f"  Date: {task.scheduled_at.strftime(date_format)}")
        if task.description:
            lines.append(f"  Details: {task.description}")
        lines.append("")
    return "\n".join(lines) + "\n"


def format_transcript_line(text: str, at: datetime) -> str:
    """Prefix a recognised speech result with its wall-clock time."""
    return f"[{at.strftime('%H:%M:%S')}] {text}\n"
