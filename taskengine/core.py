"""
Core extraction pipeline.

This is the main entry point for turning a transcript into tasks.
Pure function interface. No FastAPI, no ORM, no database dependency.

Usage:
    from taskengine import process_transcript

    result = process_transcript("I need to call Sam tomorrow at 10:00.")
    for task in result.tasks:
        print(task.title, task.scheduled_at)
"""

import logging
from datetime import datetime
from typing import Optional

from .config import EngineConfig
from .detector import detect_tasks, split_fragments
from .models import ExtractionResult
from .summary import format_task_summary

logger = logging.getLogger(__name__)


def process_transcript(
    text: str,
    now: Optional[datetime] = None,
    config: Optional[EngineConfig] = None,
) -> ExtractionResult:
    """Run task extraction over a transcript.

    Pipeline:
        1. Split into period-delimited fragments
        2. Detect trigger phrases and resolve dates
        3. Render the task summary

    Args:
        text: Raw transcript text.
        now: Baseline moment for relative dates. Defaults to the current time.
        config: Engine configuration. If None, uses defaults (no env lookup).

    Returns:
        ExtractionResult with tasks, rendered summary and the baseline used.
    """
    config = config or EngineConfig()
    now = now or datetime.now()

    fragments = split_fragments(text)
    logger.info(f"Extracting tasks | {len(text)} chars | {len(fragments)} fragments")

    tasks = detect_tasks(text, now=now, description=config.task_description)
    scheduled = sum(1 for task in tasks if task.is_scheduled)
    logger.info(f"  Tasks found: {len(tasks)} ({scheduled} scheduled)")

    return ExtractionResult(
        tasks=tasks,
        summary=format_task_summary(tasks, config.summary_date_format),
        extracted_at=now,
        fragment_count=len(fragments),
    )
