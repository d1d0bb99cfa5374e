"""In-memory event store adapter."""
import structlog
from .base import StoreAdapter
from ..event_models import Event

log = structlog.get_logger()


class InMemoryAdapter(StoreAdapter):
    """Dict-backed adapter; iteration follows insertion order."""

    def __init__(self):
        self._events: dict[str, Event] = {}

    def get(self, event_id: str) -> Event | None:
        return self._events.get(event_id)

    def insert(self, event: Event) -> None:
        self._events[event.id] = event
        log.debug("store.inserted", id=event.id, adapter="memory")

    def remove(self, event_id: str) -> Event | None:
        removed = self._events.pop(event_id, None)
        if removed is not None:
            log.debug("store.removed", id=event_id, adapter="memory")
        return removed

    def values(self) -> list[Event]:
        return list(self._events.values())

    def count(self) -> int:
        return len(self._events)

    def health_check(self) -> bool:
        """In-memory adapter is always healthy."""
        return True
