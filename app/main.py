"""
FastAPI main application with routes.
"""

import logging
from datetime import datetime
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from taskengine import __version__ as engine_version
from taskengine.calendar import request_calendar_events
from taskengine.config import load_config
from taskengine.core import process_transcript
from taskengine.models import Task
from taskengine.summary import format_transcript_line

from .database import init_db, get_db, TranscriptSession, SessionTask

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

config = load_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


# ============================================================================
# APP SETUP
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    logger.info("🚀 Transcript Tasks starting up...")
    init_db()
    logger.info("✅ Database initialized")
    yield
    logger.info("👋 Transcript Tasks shutting down...")


app = FastAPI(
    title="Transcript Tasks",
    description="Extract dated action items from speech transcripts",
    version=engine_version,
    lifespan=lifespan
)


# ============================================================================
# PYDANTIC MODELS
# ============================================================================

class ExtractRequest(BaseModel):
    text: str = ""
    now: Optional[datetime] = None


class SessionCreate(BaseModel):
    title: Optional[str] = None


class LineAppend(BaseModel):
    text: str = Field(min_length=1)
    at: Optional[datetime] = None


class BaselineOptions(BaseModel):
    now: Optional[datetime] = None


# ============================================================================
# HELPERS
# ============================================================================

def _get_session_or_404(db: Session, session_id: int) -> TranscriptSession:
    session = db.query(TranscriptSession).filter(TranscriptSession.id == session_id).first()
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _task_to_dict(task: SessionTask) -> dict:
    return {
        "title": task.title,
        "scheduled_at": task.scheduled_at.isoformat() if task.scheduled_at else None,
        "description": task.description,
    }


def _session_to_dict(session: TranscriptSession, include_tasks: bool = True) -> dict:
    data = {
        "id": session.id,
        "title": session.title,
        "transcript": session.transcript or "",
        "summary": session.summary,
        "created_at": session.created_at.isoformat() if session.created_at else None,
        "updated_at": session.updated_at.isoformat() if session.updated_at else None,
        "extracted_at": session.extracted_at.isoformat() if session.extracted_at else None,
        "task_count": len(session.tasks),
    }
    if include_tasks:
        data["tasks"] = [_task_to_dict(t) for t in session.tasks]
    return data


# ============================================================================
# STATELESS EXTRACTION
# ============================================================================

@app.post("/api/extract")
async def api_extract(request: ExtractRequest):
    """Extract tasks from a transcript without storing anything."""
    result = process_transcript(request.text, now=request.now, config=config)
    return {
        "tasks": [t.to_dict() for t in result.tasks],
        "summary": result.summary,
        "extracted_at": result.extracted_at.isoformat(),
    }


# ============================================================================
# TRANSCRIPT SESSIONS
# ============================================================================

@app.post("/api/sessions", status_code=201)
async def api_create_session(payload: SessionCreate, db: Session = Depends(get_db)):
    """Start a new transcript session."""
    session = TranscriptSession(title=payload.title, transcript="")
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(f"📝 Session created | ID: {session.id}")
    return _session_to_dict(session)


@app.get("/api/sessions")
async def api_list_sessions(limit: int = 50, db: Session = Depends(get_db)):
    """List recent sessions, newest first."""
    sessions = (
        db.query(TranscriptSession)
        .order_by(TranscriptSession.created_at.desc(), TranscriptSession.id.desc())
        .limit(limit)
        .all()
    )
    return [_session_to_dict(s, include_tasks=False) for s in sessions]


@app.get("/api/sessions/{session_id}")
async def api_get_session(session_id: int, db: Session = Depends(get_db)):
    """Get a session with its transcript and last extracted tasks."""
    return _session_to_dict(_get_session_or_404(db, session_id))


@app.post("/api/sessions/{session_id}/lines")
async def api_append_line(session_id: int, line: LineAppend, db: Session = Depends(get_db)):
    """Append a recognised speech result to the transcript."""
    session = _get_session_or_404(db, session_id)
    session.transcript = (session.transcript or "") + format_transcript_line(
        line.text, line.at or datetime.now()
    )
    db.commit()
    db.refresh(session)
    logger.debug(f"Line appended | Session: {session_id} | {len(line.text)} chars")
    return _session_to_dict(session, include_tasks=False)


@app.post("/api/sessions/{session_id}/extract")
async def api_extract_session(
    session_id: int,
    options: Optional[BaselineOptions] = None,
    db: Session = Depends(get_db),
):
    """Run task extraction on the session transcript, replacing earlier results."""
    session = _get_session_or_404(db, session_id)
    now = options.now if options else None

    result = process_transcript(session.transcript or "", now=now, config=config)

    session.tasks = [
        SessionTask(
            position=i,
            title=task.title,
            scheduled_at=task.scheduled_at,
            description=task.description,
        )
        for i, task in enumerate(result.tasks)
    ]
    session.summary = result.summary
    session.extracted_at = result.extracted_at
    db.commit()
    db.refresh(session)

    logger.info(f"🔎 Extraction complete | Session: {session_id} | Tasks: {len(result.tasks)}")
    return _session_to_dict(session)


@app.post("/api/sessions/{session_id}/calendar")
async def api_calendar_requests(
    session_id: int,
    options: Optional[BaselineOptions] = None,
    db: Session = Depends(get_db),
):
    """Build one calendar insert request per extracted task."""
    session = _get_session_or_404(db, session_id)
    now = (options.now if options else None) or datetime.now()

    tasks = [
        Task(title=t.title, scheduled_at=t.scheduled_at, description=t.description or "")
        for t in session.tasks
    ]
    events = []
    requested = request_calendar_events(tasks, events.append, now=now, duration=config.event_duration)

    if requested == 0:
        message = "No tasks to add to calendar"
    else:
        message = f"Adding {requested} tasks to calendar"

    return {
        "requested": requested,
        "message": message,
        "events": [e.to_dict() for e in events],
    }


@app.get("/api/sessions/{session_id}/share", response_class=PlainTextResponse)
async def api_share_session(session_id: int, db: Session = Depends(get_db)):
    """Plain-text transcript (with the last task summary) for sharing."""
    session = _get_session_or_404(db, session_id)
    return (session.transcript or "") + (session.summary or "")


@app.delete("/api/sessions/{session_id}")
async def api_delete_session(session_id: int, db: Session = Depends(get_db)):
    """Delete a session and its tasks."""
    session = _get_session_or_404(db, session_id)
    db.delete(session)
    db.commit()
    logger.info(f"🗑️  Session deleted | ID: {session_id}")
    return {"success": True}


@app.get("/api/health")
async def api_health():
    return {"status": "ok", "version": engine_version}
