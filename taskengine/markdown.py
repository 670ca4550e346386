"""
Daily task file management.

Aggregates extracted tasks into one Markdown checklist per day
(Tasks/YYYY-MM-DD.md), Obsidian-compatible.
"""

import logging
import re
from datetime import datetime, date
from pathlib import Path
from typing import Optional

from .models import Task

logger = logging.getLogger(__name__)

_SCHEDULE_FORMAT = "%Y-%m-%d %H:%M"
_CHECKBOX_PATTERN = re.compile(r"^- \[([ xX])\] (.+?)(?: \(📅 ([\d-]+ [\d:]+)\))?$", re.MULTILINE)


def build_task_line(task: Task) -> str:
    """Render one task as a checkbox line."""
    # Fragments can span transcript lines
    title = " ".join(task.title.split())
    line = f"- [ ] {title}"
    if task.scheduled_at is not None:
        line += f" (📅 {task.scheduled_at.strftime(_SCHEDULE_FORMAT)})"
    return line


def get_daily_task_file_path(tasks_dir: Path, for_date: Optional[date] = None) -> Path:
    """Get the path to the daily task file.

    Format: Tasks/YYYY-MM-DD.md
    """
    target_date = for_date or date.today()
    return tasks_dir / f"{target_date.isoformat()}.md"


def append_tasks_to_daily_file(
    tasks: list[Task],
    tasks_dir: Path,
    source: str,
    for_date: Optional[date] = None,
) -> Optional[Path]:
    """Append extracted tasks to the daily task file.

    Creates the file if it doesn't exist, otherwise appends a new
    section for this source.

    Args:
        tasks: Tasks to write
        tasks_dir: Directory for task files
        source: Label for where the tasks came from (file name, session)
        for_date: Date for the task file (default: today)

    Returns:
        Path to the daily task file, or None when there was nothing to write
    """
    if not tasks:
        return None

    tasks_dir.mkdir(parents=True, exist_ok=True)
    task_file = get_daily_task_file_path(tasks_dir, for_date)

    section = f"### From: {source}\n\n"
    section += "\n".join(build_task_line(task) for task in tasks)
    section += "\n"

    if task_file.exists():
        content = task_file.read_text(encoding="utf-8")
        content += "\n" + section
    else:
        content = _build_daily_task_header(for_date or date.today())
        content += "\n## From Transcripts\n\n"
        content += section

    task_file.write_text(content, encoding="utf-8")
    logger.info(f"Added {len(tasks)} tasks to {task_file}")
    return task_file


def _build_daily_task_header(for_date: date) -> str:
    """Build the YAML frontmatter and header for a daily task file."""
    lines = [
        "---",
        "type: daily-tasks",
        f"date: {for_date.isoformat()}",
        f"created: {datetime.now().isoformat(timespec='seconds')}",
        "---",
        "",
        f"# Tasks: {for_date.isoformat()}",
        "",
    ]
    return "\n".join(lines)


def read_task_file(task_file: Path) -> list[dict]:
    """Read checkbox lines back from a daily task file.

    Returns list of dicts with title, completed and scheduled (datetime or None).
    """
    if not task_file.exists():
        return []

    content = task_file.read_text(encoding="utf-8")
    tasks = []
    for match in _CHECKBOX_PATTERN.finditer(content):
        scheduled = match.group(3)
        tasks.append({
            "title": match.group(2).strip(),
            "completed": match.group(1).lower() == "x",
            "scheduled": datetime.strptime(scheduled, _SCHEDULE_FORMAT) if scheduled else None,
        })
    return tasks
