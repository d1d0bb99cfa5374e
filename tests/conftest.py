"""Shared fixtures: deterministic clock and id source for the event store."""
import pytest
from app.adapters.memory import InMemoryAdapter
from app.event_models import EventPayload
from app.services.event_store import EventStore

START_TIME = 1_700_000_000_000_000_000


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: int = START_TIME):
        self.current = now
        self.calls = 0

    def now(self) -> int:
        self.calls += 1
        return self.current

    def advance(self, delta: int):
        self.current += delta


class SequentialIdGenerator:
    """Valid, predictable UUID strings: ...-000000000001, ...-000000000002, ..."""

    def __init__(self):
        self.counter = 0

    def new_id(self) -> str:
        self.counter += 1
        return f"00000000-0000-4000-8000-{self.counter:012x}"


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def adapter():
    return InMemoryAdapter()


@pytest.fixture
def store(adapter, ids, clock):
    return EventStore(adapter=adapter, id_generator=ids, clock=clock)


@pytest.fixture
def car_payload():
    return EventPayload(
        asset_type="car",
        asset_description="sedan",
        owner_name="Alice",
        status="active",
    )
