"""
Durable store of finished stopwatch sessions.

The in-memory list (newest first) is authoritative for the life of the
process; every change is written through to the database. A failed write
raises PersistenceError but the in-memory change is kept.
"""
from __future__ import annotations

import logging
import uuid
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from config import user_display_name
from models import EPOCH, StopwatchSession
from stats import SessionStats, get_stats
from stopwatch import FinishedSession

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """The database write behind a store operation failed."""


def session_from_finished(finished: FinishedSession) -> StopwatchSession:
    return StopwatchSession(
        id=str(uuid.uuid4()),
        date=EPOCH + timedelta(milliseconds=finished.ended_at),
        user=finished.user,
        username=user_display_name(finished.user),
        topic=finished.topic,
        active_time=max(0, finished.active_time),
        paused_time=max(0, finished.paused_time),
    )


class SessionStore:
    def __init__(self, engine):
        self.engine = engine
        self._sessions: list[StopwatchSession] = []

    def load(self) -> None:
        """Rebuild the in-memory list from the database."""
        with Session(self.engine) as db:
            rows = db.exec(
                select(StopwatchSession).order_by(StopwatchSession.date.desc())
            ).all()
        self._sessions = list(rows)
        logger.info("loaded %d stopwatch sessions", len(self._sessions))

    def append(self, record: StopwatchSession) -> StopwatchSession:
        if not record.id:
            record.id = str(uuid.uuid4())
        record.active_time = max(0, record.active_time)
        record.paused_time = max(0, record.paused_time)
        self._sessions.insert(0, record)
        self._write(lambda db: db.add(record), f"save session {record.id}")
        logger.info(
            "saved session %s (%s/%s, active=%dms paused=%dms)",
            record.id, record.user, record.topic, record.active_time, record.paused_time,
        )
        return record

    def remove(self, session_id: str) -> bool:
        """Delete one session. An unknown id is not an error."""
        before = len(self._sessions)
        self._sessions = [s for s in self._sessions if s.id != session_id]
        if len(self._sessions) == before:
            return False
        self._write(
            lambda db: _delete_one(db, session_id),
            f"delete session {session_id}",
        )
        logger.info("deleted session %s", session_id)
        return True

    def clear(self) -> None:
        count = len(self._sessions)
        self._sessions = []
        self._write(_delete_all, "clear sessions")
        logger.info("cleared %d sessions", count)

    def list(self, user: str | None = None, topic: str | None = None) -> list[StopwatchSession]:
        return [
            s for s in self._sessions
            if (not user or s.user == user) and (not topic or s.topic == topic)
        ]

    def by_user(self, user: str) -> list[StopwatchSession]:
        return self.list(user=user)

    def by_topic(self, topic: str) -> list[StopwatchSession]:
        return self.list(topic=topic)

    def stats(self, user: str | None = None, topic: str | None = None) -> SessionStats:
        return get_stats(self.list(user=user, topic=topic))

    def __len__(self) -> int:
        return len(self._sessions)

    def _write(self, op, what: str) -> None:
        try:
            with Session(self.engine, expire_on_commit=False) as db:
                op(db)
                db.commit()
        except SQLAlchemyError as e:
            logger.error("could not %s: %s", what, e)
            raise PersistenceError(f"Could not {what}") from e


def _delete_one(db: Session, session_id: str) -> None:
    row = db.get(StopwatchSession, session_id)
    if row is not None:
        db.delete(row)


def _delete_all(db: Session) -> None:
    for row in db.exec(select(StopwatchSession)).all():
        db.delete(row)
