"""
Stopwatch controls: pick user/topic, start/pause/resume, stop (records a
session) and reset (discards). Invalid transitions are ignored and just
return the current state.
"""
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from config import find_topic, find_user
from routers.sessions import SessionOut
from store import PersistenceError
from tracker import Tracker, get_tracker

router = APIRouter(prefix="/api/stopwatch", tags=["stopwatch"])


class SelectRequest(BaseModel):
    user: Optional[str] = None
    topic: Optional[str] = None


class StopwatchOut(BaseModel):
    phase: str
    user: Optional[str]
    topic: Optional[str]
    started_at: Optional[int]
    paused_accumulated: int
    pause_started_at: Optional[int]
    elapsed: int
    paused: int


def _state(tracker: Tracker) -> StopwatchOut:
    with tracker.lock:
        snap = tracker.stopwatch.snapshot()
    return StopwatchOut(**asdict(snap))


@router.get("", response_model=StopwatchOut)
def get_stopwatch(tracker: Tracker = Depends(get_tracker)):
    """Current state with live elapsed/paused times. Poll this for the display."""
    return _state(tracker)


@router.post("/select", response_model=StopwatchOut)
def select(req: SelectRequest, tracker: Tracker = Depends(get_tracker)):
    """Pick the user and/or topic for the next session."""
    if req.user is not None and not find_user(req.user):
        raise HTTPException(status_code=404, detail=f"Unknown user: {req.user}")
    if req.topic is not None and not find_topic(req.topic):
        raise HTTPException(status_code=404, detail=f"Unknown topic: {req.topic}")
    with tracker.lock:
        sw = tracker.stopwatch
        if sw.is_open and (
            (req.user is not None and req.user != sw.user)
            or (req.topic is not None and req.topic != sw.topic)
        ):
            raise HTTPException(
                status_code=409,
                detail="Stop or reset the stopwatch before changing user or topic",
            )
        if req.user is not None:
            sw.select_user(req.user)
        if req.topic is not None:
            sw.select_topic(req.topic)
        return _state(tracker)


@router.post("/start", response_model=StopwatchOut)
def start(tracker: Tracker = Depends(get_tracker)):
    """Start, or resume after a pause."""
    with tracker.lock:
        tracker.stopwatch.start()
        return _state(tracker)


@router.post("/pause", response_model=StopwatchOut)
def pause(tracker: Tracker = Depends(get_tracker)):
    """Pause a running stopwatch."""
    with tracker.lock:
        tracker.stopwatch.pause()
        return _state(tracker)


@router.post("/toggle", response_model=StopwatchOut)
def toggle(tracker: Tracker = Depends(get_tracker)):
    """Single Start/Pause button: pause when running, otherwise start."""
    with tracker.lock:
        tracker.stopwatch.toggle()
        return _state(tracker)


@router.post("/stop", response_model=Optional[SessionOut])
def stop(tracker: Tracker = Depends(get_tracker)):
    """Stop and record the session. Returns null when nothing was running."""
    try:
        session = tracker.stop()
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if session is None:
        return None
    return SessionOut.from_session(session)


@router.post("/reset", response_model=StopwatchOut)
def reset(tracker: Tracker = Depends(get_tracker)):
    """Throw away the current timing without recording it."""
    with tracker.lock:
        tracker.stopwatch.reset()
        return _state(tracker)
