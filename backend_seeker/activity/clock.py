"""
Clock capability and the UTC+8 start-of-day cutoff.
"""

from __future__ import annotations

import time
from typing import Protocol

SECONDS_PER_DAY = 86_400
UTC8_OFFSET_SEC = 8 * 3600


class Clock(Protocol):
    def now(self) -> int:
        """Current time as integer Unix seconds."""
        ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """Clock frozen at a given instant; used by tests and the CLI --now flag."""

    def __init__(self, now: int) -> None:
        self._now = int(now)

    def now(self) -> int:
        return self._now


def start_of_day_cutoff(now: int, offset_sec: int = UTC8_OFFSET_SEC) -> int:
    """
    Epoch seconds of 00:00 local time in a fixed UTC offset (UTC+8 by default).

    Pure arithmetic on the UTC epoch value; no timezone database. At exactly
    local midnight the cutoff equals now.
    """
    return now - ((now + offset_sec) % SECONDS_PER_DAY)
