"""Identifier and time sources used by the event store."""
import threading
import time
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def new_id(self) -> str:
        """Return a globally unique identifier string."""
        ...


class Clock(Protocol):
    def now(self) -> int:
        """Return the current time in nanoseconds; never decreases."""
        ...


class UuidGenerator:
    """Random (version 4) UUIDs in canonical text form."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SystemClock:
    """
    Wall-clock nanoseconds since the epoch.

    Readings are clamped to the last value returned, so a wall-clock step
    backwards is seen as time standing still.
    """

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, time.time_ns())
            return self._last
