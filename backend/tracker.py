import threading
from datetime import date, timedelta

from fastapi import Request

from clock import Clock
from models import EPOCH, StopwatchSession
from stopwatch import Stopwatch
from store import SessionStore, session_from_finished


class Tracker:
    """
    One stopwatch plus the store its finished sessions go to.

    Endpoints run in a threadpool; hold `lock` around anything that reads or
    changes the stopwatch or the store.
    """

    def __init__(self, engine, clock: Clock | None = None):
        self.stopwatch = Stopwatch(clock)
        self.store = SessionStore(engine)
        self.lock = threading.RLock()

    def stop(self) -> StopwatchSession | None:
        """
        Stop the stopwatch and record the session.
        The stopwatch is idle afterwards even if the store raises PersistenceError.
        """
        with self.lock:
            finished = self.stopwatch.stop()
            if finished is None:
                return None
            return self.store.append(session_from_finished(finished))

    def today(self) -> date:
        """Current UTC date according to the stopwatch clock."""
        return (EPOCH + timedelta(milliseconds=self.stopwatch.clock.now())).date()


def get_tracker(request: Request) -> Tracker:
    return request.app.state.tracker
