import time

import pytest
from fastapi.testclient import TestClient

from db import create_db_and_tables, make_engine
from main import create_app


class FakeClock:
    def __init__(self, t: int = 0):
        self.t = t

    def now(self) -> int:
        return self.t

    def advance(self, ms: int) -> None:
        self.t += ms


@pytest.fixture
def clock():
    return FakeClock(1_700_000_000_000)


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    create_db_and_tables(engine)
    return engine


@pytest.fixture
def client(engine, clock):
    app = create_app(engine=engine, clock=clock)
    with TestClient(app) as c:
        yield c


class SlowClock(FakeClock):
    """Widens the window between reading and changing stopwatch state."""

    def now(self) -> int:
        time.sleep(0.05)
        return self.t
