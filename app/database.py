"""
Database configuration and models using SQLAlchemy.
Supports SQLite (default) or PostgreSQL.
"""

import os
from datetime import datetime

from sqlalchemy import create_engine, Column, Integer, String, Text, DateTime, ForeignKey, event
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from taskengine.config import load_config


def resolve_database_url(url: str) -> str:
    """Normalise a configured database URL for SQLAlchemy."""
    # Handle PostgreSQL URL format from some cloud providers
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


# Database URL - defaults to SQLite, can use PostgreSQL (DATABASE_URL)
DATABASE_URL = resolve_database_url(load_config().database_url)


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode for crash safety and better concurrent access."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def make_engine(url: str, **kwargs):
    """Create an engine, applying SQLite connection settings where needed."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        db_engine = create_engine(url, connect_args=connect_args, **kwargs)
        if ":memory:" not in url:
            event.listen(db_engine, "connect", _set_sqlite_pragma)
        return db_engine
    return create_engine(url, **kwargs)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# ============================================================================
# MODELS
# ============================================================================

class TranscriptSession(Base):
    """A transcript being built up from recognised speech lines."""
    __tablename__ = "transcript_sessions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500))
    transcript = Column(Text, default="")
    summary = Column(Text)  # Last rendered task summary

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    extracted_at = Column(DateTime)  # Baseline used for the last extraction

    tasks = relationship(
        "SessionTask",
        back_populates="session",
        order_by="SessionTask.position",
        cascade="all, delete-orphan",
    )


class SessionTask(Base):
    """A task extracted from a session's transcript."""
    __tablename__ = "session_tasks"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("transcript_sessions.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # Order within the transcript

    title = Column(Text, nullable=False)
    scheduled_at = Column(DateTime)
    description = Column(String(500))

    session = relationship("TranscriptSession", back_populates="tasks")


# ============================================================================
# DATABASE HELPERS
# ============================================================================

def init_db(bind=None):
    """Initialize database tables."""
    # Ensure data directory exists for SQLite
    if bind is None and DATABASE_URL.startswith("sqlite"):
        os.makedirs("data", exist_ok=True)

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Get database session (for FastAPI dependency injection)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
