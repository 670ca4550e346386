"""
Data models for the task-extraction engine.
No external dependencies, pure Python dataclasses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

TRANSCRIPT_PROVENANCE = "Extracted from meeting recording"


class DatePatternKind(str, Enum):
    """Date expression families, in the order the resolver tries them."""
    EXPLICIT_DATE = "explicit_date"   # "on March 5 at 14:30"
    TOMORROW = "tomorrow"             # "tomorrow at 10:00"
    NEXT_UNIT = "next_unit"           # "next Friday"


@dataclass(frozen=True)
class Task:
    """An action item detected in a transcript fragment."""
    title: str
    scheduled_at: Optional[datetime] = None
    description: str = TRANSCRIPT_PROVENANCE

    def __post_init__(self):
        if not self.title or self.title != self.title.strip():
            raise ValueError(f"Task title must be non-empty and trimmed: {self.title!r}")

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_at is not None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "scheduled_at": self.scheduled_at.isoformat() if self.scheduled_at else None,
            "description": self.description,
        }


@dataclass(frozen=True)
class CalendarEvent:
    """A calendar insert request derived from a task."""
    title: str
    description: str
    start: datetime
    end: datetime
    all_day: bool = False
    has_alarm: bool = True

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "all_day": self.all_day,
            "has_alarm": self.has_alarm,
        }


@dataclass
class ExtractionResult:
    """Complete result of running the engine over a transcript."""
    tasks: list[Task] = field(default_factory=list)
    summary: str = ""
    extracted_at: Optional[datetime] = None  # baseline used for relative dates
    fragment_count: int = 0

    @property
    def has_tasks(self) -> bool:
        return len(self.tasks) > 0
