"""
Calendar event requests for extracted tasks.

Each task becomes a one-hour (by default) event starting at its scheduled
time, or at the current moment when it has none. Inserting the event is
left to the caller's sink.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from .models import CalendarEvent, Task

logger = logging.getLogger(__name__)

DEFAULT_EVENT_DURATION = timedelta(hours=1)


def build_calendar_event(
    task: Task,
    now: datetime,
    duration: timedelta = DEFAULT_EVENT_DURATION,
) -> CalendarEvent:
    """Derive the event window for a single task."""
    start = task.scheduled_at or now
    return CalendarEvent(
        title=task.title,
        description=task.description,
        start=start,
        end=start + duration,
    )


def request_calendar_events(
    tasks: Iterable[Task],
    sink: Callable[[CalendarEvent], None],
    now: Optional[datetime] = None,
    duration: timedelta = DEFAULT_EVENT_DURATION,
) -> int:
    """Hand one event per task to ``sink`` and return how many were requested."""
    now = now or datetime.now()
    requested = 0

    for task in tasks:
        sink(build_calendar_event(task, now, duration))
        requested += 1

    if requested == 0:
        logger.warning("No tasks to add to calendar")
    else:
        logger.info(f"Adding {requested} tasks to calendar")
    return requested
