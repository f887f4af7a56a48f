from collections.abc import Iterable

from pydantic import BaseModel

from models import StopwatchSession


class SessionStats(BaseModel):
    total_sessions: int = 0
    total_active_time: int = 0
    total_paused_time: int = 0
    average_active_time: float = 0
    average_paused_time: float = 0


def get_stats(sessions: Iterable[StopwatchSession]) -> SessionStats:
    """Counts, sums and averages (in ms) over an already-filtered set of sessions."""
    sessions = list(sessions)
    if not sessions:
        return SessionStats()
    total = len(sessions)
    active = sum(s.active_time for s in sessions)
    paused = sum(s.paused_time for s in sessions)
    return SessionStats(
        total_sessions=total,
        total_active_time=active,
        total_paused_time=paused,
        average_active_time=active / total,
        average_paused_time=paused / total,
    )
