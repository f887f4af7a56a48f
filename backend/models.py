from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlmodel import SQLModel, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class StopwatchSession(SQLModel, table=True):
    __tablename__ = "stopwatch_session"

    id: str = Field(primary_key=True, index=True)
    date: datetime = Field(index=True)
    user: str = Field(index=True)
    username: str
    topic: str = Field(index=True)
    # milliseconds, never negative: SessionStore.append clamps before writing
    active_time: int
    paused_time: int

    @property
    def utc_date(self) -> datetime:
        # SQLite hands datetimes back without tzinfo; they are stored as UTC
        if self.date.tzinfo is None:
            return self.date.replace(tzinfo=timezone.utc)
        return self.date

    @property
    def timestamp(self) -> int:
        """Stop time as epoch milliseconds."""
        return (self.utc_date - EPOCH) // timedelta(milliseconds=1)
