"""
Stopwatch state machine: idle -> running <-> paused -> (stop) idle.

All durations are integer milliseconds derived from clock timestamps taken at
transition time. Display polling only reads; it never changes the state.
Invalid transitions are no-ops and return False instead of raising.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from clock import Clock, SystemClock
from config import TOPICS

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"


@dataclass(frozen=True)
class FinishedSession:
    """What a stop hands over to the session store."""
    user: str
    topic: str
    active_time: int
    paused_time: int
    ended_at: int


@dataclass(frozen=True)
class StopwatchSnapshot:
    phase: str
    user: Optional[str]
    topic: Optional[str]
    started_at: Optional[int]
    paused_accumulated: int
    pause_started_at: Optional[int]
    elapsed: int
    paused: int


class Stopwatch:
    def __init__(self, clock: Clock | None = None):
        self.clock = clock or SystemClock()
        self.user: Optional[str] = None
        self.topic: Optional[str] = None
        self._clear()

    def _clear(self) -> None:
        self.phase = IDLE
        self.started_at: Optional[int] = None
        self.paused_accumulated = 0
        self.pause_started_at: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.phase in (RUNNING, PAUSED)

    # --- selection ---

    def select_user(self, user_id: str) -> bool:
        if self.is_open or not user_id:
            return False
        self.user = user_id
        if not self.topic and TOPICS:
            self.topic = TOPICS[0]["id"]
        return True

    def select_topic(self, topic_id: str) -> bool:
        if self.is_open or not topic_id:
            return False
        self.topic = topic_id
        return True

    # --- transitions ---

    def start(self) -> bool:
        """Start from idle, or resume from paused."""
        if not self.user or not self.topic:
            return False
        now = self.clock.now()
        if self.phase == IDLE:
            self.started_at = now
        elif self.phase == PAUSED:
            self.paused_accumulated += max(0, now - self.pause_started_at)
            self.pause_started_at = None
        else:
            return False
        self.phase = RUNNING
        logger.debug("stopwatch running (%s/%s)", self.user, self.topic)
        return True

    def pause(self) -> bool:
        if self.phase != RUNNING:
            return False
        self.pause_started_at = self.clock.now()
        self.phase = PAUSED
        logger.debug("stopwatch paused (%s/%s)", self.user, self.topic)
        return True

    def toggle(self) -> bool:
        if self.phase == RUNNING:
            return self.pause()
        return self.start()

    def stop(self) -> FinishedSession | None:
        """Close the open session and return it, or None when nothing is open."""
        if not self.is_open or self.started_at is None:
            return None
        if not self.user or not self.topic:
            return None
        now = self.clock.now()
        paused = self.paused_accumulated
        if self.phase == PAUSED:
            # close the dangling pause so active + paused covers the whole span
            paused += max(0, now - self.pause_started_at)
        active = max(0, now - self.started_at - paused)
        finished = FinishedSession(
            user=self.user,
            topic=self.topic,
            active_time=active,
            paused_time=paused,
            ended_at=now,
        )
        self._clear()
        logger.debug("stopwatch stopped: %s", finished)
        return finished

    def reset(self) -> None:
        """Drop in-progress timing without recording anything."""
        self._clear()

    # --- live queries ---

    def elapsed(self) -> int:
        if self.started_at is None:
            return 0
        if self.phase == PAUSED:
            now = self.pause_started_at
        else:
            now = self.clock.now()
        return max(0, now - self.started_at - self.paused_accumulated)

    def paused_elapsed(self) -> int:
        if self.phase == PAUSED:
            return self.paused_accumulated + max(0, self.clock.now() - self.pause_started_at)
        return self.paused_accumulated

    def snapshot(self) -> StopwatchSnapshot:
        return StopwatchSnapshot(
            phase=self.phase,
            user=self.user,
            topic=self.topic,
            started_at=self.started_at,
            paused_accumulated=self.paused_accumulated,
            pause_started_at=self.pause_started_at,
            elapsed=self.elapsed(),
            paused=self.paused_elapsed(),
        )
