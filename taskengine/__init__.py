"""
Transcript Task Engine

Turns transcribed speech into dated action items.
Transcript text → fragments → trigger-phrase detection → date resolution → Tasks

No FastAPI or database dependency.
Pure function interface: detect_tasks(text, now) -> list[Task]
"""

__version__ = "1.0.0"

from .core import process_transcript
from .models import (
    Task,
    CalendarEvent,
    DatePatternKind,
    ExtractionResult,
    TRANSCRIPT_PROVENANCE,
)
from .detector import (
    TRIGGER_PHRASES,
    detect_tasks,
    is_task_fragment,
    split_fragments,
)
from .resolver import (
    DATE_PATTERNS,
    DEFAULT_TIME,
    resolve_datetime,
)
from .summary import format_task_summary, format_transcript_line
from .calendar import build_calendar_event, request_calendar_events
from .markdown import append_tasks_to_daily_file, read_task_file
