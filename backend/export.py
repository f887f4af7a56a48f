"""
CSV export of stopwatch sessions.
"""
import csv
import io
from collections.abc import Iterable
from datetime import date, timezone

from config import user_display_name
from models import StopwatchSession

HEADER = [
    "Date",
    "Timestamp",
    "User",
    "Topic",
    "Active Time (ms)",
    "Paused Time (ms)",
    "Active Time",
    "Paused Time",
]


def format_duration(ms: int | None) -> str:
    """Milliseconds as HH:MM:SS. Hours are not wrapped at 24."""
    if not ms or ms < 0:
        return "00:00:00"
    total_seconds = int(ms // 1000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _row(s: StopwatchSession) -> list:
    return [
        s.utc_date.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
        s.timestamp,
        s.username or user_display_name(s.user),
        s.topic,
        s.active_time,
        s.paused_time,
        format_duration(s.active_time),
        format_duration(s.paused_time),
    ]


def export_csv(sessions: Iterable[StopwatchSession]) -> str:
    """Header plus one line per session, in the order given."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADER)
    for s in sessions:
        writer.writerow(_row(s))
    return buf.getvalue()


def export_filename(today: date) -> str:
    return f"stopwatch-sessions-{today.isoformat()}.csv"
