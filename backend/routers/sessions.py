"""
Recorded stopwatch sessions: list (filterable by user/topic), delete one,
clear all, stats and CSV export. Plus the user/topic catalog the UI picks from.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from config import TOPICS, USERS, user_color
from export import export_csv, export_filename
from models import StopwatchSession
from stats import SessionStats
from store import PersistenceError
from tracker import Tracker, get_tracker

router = APIRouter(prefix="/api", tags=["sessions"])


class SessionOut(BaseModel):
    id: str
    date: datetime
    timestamp: int
    user: str
    username: str
    color: str
    topic: str
    active_time: int
    paused_time: int

    @classmethod
    def from_session(cls, s: StopwatchSession) -> "SessionOut":
        return cls(
            id=s.id,
            date=s.utc_date,
            timestamp=s.timestamp,
            user=s.user,
            username=s.username,
            color=user_color(s.user),
            topic=s.topic,
            active_time=s.active_time,
            paused_time=s.paused_time,
        )


class UserOut(BaseModel):
    id: str
    name: str
    color: str


class TopicOut(BaseModel):
    id: str
    name: str


def _persist(tracker: Tracker, op, *args):
    try:
        with tracker.lock:
            return op(*args)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/users", response_model=list[UserOut])
def list_users():
    """Tracked people with display name and colour."""
    return USERS


@router.get("/topics", response_model=list[TopicOut])
def list_topics():
    """Activity categories a session can be recorded under."""
    return TOPICS


@router.get("/sessions", response_model=list[SessionOut])
def list_sessions(
    user: Optional[str] = None,
    topic: Optional[str] = None,
    tracker: Tracker = Depends(get_tracker),
):
    """List recorded sessions (newest first), optionally for one user and/or topic."""
    with tracker.lock:
        sessions = tracker.store.list(user=user, topic=topic)
    return [SessionOut.from_session(s) for s in sessions]


@router.get("/sessions/export")
def export_sessions(
    user: Optional[str] = None,
    topic: Optional[str] = None,
    tracker: Tracker = Depends(get_tracker),
):
    """Download the filtered sessions as CSV, named with today's UTC date."""
    with tracker.lock:
        sessions = tracker.store.list(user=user, topic=topic)
    content = export_csv(sessions)
    filename = export_filename(tracker.today())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, tracker: Tracker = Depends(get_tracker)):
    """Delete one session. Deleting an unknown id is not an error."""
    _persist(tracker, tracker.store.remove, session_id)
    return Response(status_code=204)


@router.delete("/sessions", status_code=204)
def clear_sessions(tracker: Tracker = Depends(get_tracker)):
    """Delete every recorded session."""
    _persist(tracker, tracker.store.clear)
    return Response(status_code=204)


@router.get("/stats", response_model=SessionStats)
def get_stats(
    user: Optional[str] = None,
    topic: Optional[str] = None,
    tracker: Tracker = Depends(get_tracker),
):
    """Session count plus total and average active/paused time (ms)."""
    with tracker.lock:
        return tracker.store.stats(user=user, topic=topic)
