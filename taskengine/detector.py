"""
Sentence segmentation and trigger-phrase task detection.

Transcripts are split on bare periods and every fragment mentioning one of
the trigger phrases becomes a Task. Segmentation is deliberately naive:
decimals, abbreviations and ellipses split too, and empty pieces are dropped.
"""

import logging
from datetime import datetime
from typing import Optional

from .models import Task, TRANSCRIPT_PROVENANCE
from .resolver import resolve_datetime

logger = logging.getLogger(__name__)

TRIGGER_PHRASES = ("need to", "should", "todo", "task")


def split_fragments(text: str) -> list[str]:
    """Split transcript text on "." and drop empty fragments.

    Fragments are returned untrimmed, in input order.
    """
    return [fragment for fragment in text.split(".") if fragment]


def is_task_fragment(fragment: str) -> bool:
    """Case-insensitive substring check against the trigger phrases."""
    lowered = fragment.lower()
    return any(phrase in lowered for phrase in TRIGGER_PHRASES)


def detect_tasks(
    text: str,
    now: Optional[datetime] = None,
    description: str = TRANSCRIPT_PROVENANCE,
) -> list[Task]:
    """Extract tasks from transcript text.

    Args:
        text: Raw transcript text (may be empty).
        now: Baseline for relative dates. Defaults to the current time,
             read once so every task in the call shares it.
        description: Provenance text attached to every task.

    Returns:
        A new list of Task objects in the order their fragments appeared.
    """
    now = now or datetime.now()
    tasks = []

    for fragment in split_fragments(text):
        if not is_task_fragment(fragment):
            continue

        title = fragment.strip()
        tasks.append(Task(
            title=title,
            scheduled_at=resolve_datetime(fragment, now),
            description=description,
        ))

    logger.debug(f"Detected {len(tasks)} task(s) in {len(text)} chars")
    return tasks
