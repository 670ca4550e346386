"""
Environment-driven configuration for the task-extraction engine.
Settings come from environment variables (optionally a .env file);
dataclass defaults apply when a variable is unset.
"""

import os
import logging
from datetime import timedelta
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .models import TRANSCRIPT_PROVENANCE
from .summary import SUMMARY_DATE_FORMAT

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Fully environment-driven engine configuration."""

    # Task output
    task_description: str = TRANSCRIPT_PROVENANCE
    summary_date_format: str = SUMMARY_DATE_FORMAT

    # Calendar requests
    event_duration_minutes: int = 60

    # Storage
    tasks_dir: Optional[Path] = None  # daily task files are only written when set
    database_url: str = "sqlite:///./data/transcripts.db"

    # Logging
    log_level: str = "INFO"

    @property
    def event_duration(self) -> timedelta:
        """Length of each calendar event window."""
        return timedelta(minutes=self.event_duration_minutes)

    def validate(self):
        """Validate the configuration at startup."""
        if self.event_duration_minutes <= 0:
            logger.error(f"Invalid event duration: {self.event_duration_minutes} minutes")
            raise ValueError("EVENT_DURATION_MINUTES must be positive")
        if not self.task_description.strip():
            logger.error("Task description is empty")
            raise ValueError("TASK_DESCRIPTION must not be empty")


def _get_int(env_key: str, default: int) -> int:
    """Read an integer env var, keeping the default on bad input."""
    raw = os.environ.get(env_key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{env_key}={raw!r} is not an integer, using {default}")
        return default


def load_config(env_file: str = ".env") -> EngineConfig:
    """Load configuration from environment variables.

    Optional env vars:
        TASK_DESCRIPTION      : provenance text on every task
        SUMMARY_DATE_FORMAT   : strftime format for summary dates
        EVENT_DURATION_MINUTES: calendar event length (default 60)
        TASKS_DIR             : folder for daily task files (unset: none written)
        DATABASE_URL          : SQLAlchemy URL for transcript sessions
        LOG_LEVEL             : logging level name
    """
    load_dotenv(env_file)
    tasks_dir = os.environ.get("TASKS_DIR", "").strip()

    config = EngineConfig(
        task_description=os.environ.get("TASK_DESCRIPTION", TRANSCRIPT_PROVENANCE),
        summary_date_format=os.environ.get("SUMMARY_DATE_FORMAT", SUMMARY_DATE_FORMAT),
        event_duration_minutes=_get_int("EVENT_DURATION_MINUTES", 60),
        tasks_dir=Path(tasks_dir) if tasks_dir else None,
        database_url=os.environ.get("DATABASE_URL", "sqlite:///./data/transcripts.db"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )

    config.validate()
    logger.debug(f"Config loaded | Tasks dir: {config.tasks_dir} | DB: {config.database_url}")
    return config
