import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current wall-clock time in epoch milliseconds."""
        ...


class SystemClock:
    """Host wall clock. Not monotonic: it can jump if the system time changes."""

    def now(self) -> int:
        return int(time.time() * 1000)
