"""Event store service: validation and ownership rules around a keyed map."""
from functools import lru_cache, wraps
from typing import TYPE_CHECKING
import structlog

from ..adapters.base import StoreAdapter
from ..adapters.memory import InMemoryAdapter
from ..adapters.redis_hash import RedisHashAdapter
from ..config import get_settings
from ..event_models import (
    FIXED_DURATION,
    Event,
    EventPayload,
    is_valid_identifier,
    is_valid_status,
)
from .collaborators import Clock, IdGenerator, SystemClock, UuidGenerator
from .result import ErrorKind, Result

if TYPE_CHECKING:
    from ..metrics import Metrics

log = structlog.get_logger()
settings = get_settings()

_metrics: "Metrics | None" = None


def set_metrics(metrics: "Metrics | None"):
    """Attach the Prometheus metrics that store operations report into."""
    global _metrics
    _metrics = metrics


class EventStoreError(Exception):
    """Base exception for rule violations inside the store"""
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdError(EventStoreError):
    kind = ErrorKind.INVALID_ID


class InvalidOwnerIdError(EventStoreError):
    kind = ErrorKind.INVALID_OWNER_ID


class InvalidStatusError(EventStoreError):
    kind = ErrorKind.INVALID_STATUS


class IncompleteInputError(EventStoreError):
    kind = ErrorKind.INCOMPLETE_INPUT


class NotFoundError(EventStoreError):
    kind = ErrorKind.NOT_FOUND


class ForbiddenError(EventStoreError):
    kind = ErrorKind.FORBIDDEN


class AlreadyEndedError(EventStoreError):
    kind = ErrorKind.ALREADY_ENDED


def _operation(name: str, failure_message: str):
    """
    Wrap a store method so it returns a Result and never raises.

    Rule violations become their own error kind; anything else is logged
    with its traceback and reported as an Internal failure.
    """
    def decorator(method):
        @wraps(method)
        def wrapper(self: "EventStore", *args, **kwargs) -> Result:
            try:
                result = Result.ok(method(self, *args, **kwargs))
            except EventStoreError as e:
                log.info("event.rejected", operation=name, error=e.kind.value, reason=e.message)
                result = Result.err(e.kind, e.message)
            except Exception as e:
                log.error(
                    "event_store.operation_failed",
                    operation=name,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                result = Result.err(ErrorKind.INTERNAL, failure_message)
            self._record(name, result)
            return result
        return wrapper
    return decorator


class EventStore:
    """
    Owns the event map and every operation on it.

    Provides:
    - Listing all events, or filtered by owner or status (full scans)
    - Point lookup by id
    - Creation with freshly minted id and owner id
    - Owner-only partial update, ending and deletion

    Every public method returns a Result; none of them raise.
    """

    def __init__(
        self,
        adapter: StoreAdapter | None = None,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
    ):
        """
        Initialize EventStore

        Args:
            adapter: Backend map (defaults to the configured adapter)
            id_generator: Source of event and owner ids (defaults to uuid4)
            clock: Source of nanosecond timestamps (defaults to wall clock)
        """
        self._adapter = adapter if adapter is not None else _create_default_adapter()
        self._ids = id_generator or UuidGenerator()
        self._clock = clock or SystemClock()

    @property
    def adapter(self) -> StoreAdapter:
        return self._adapter

    @_operation("list_all", "Failed to get events!")
    def list_all(self) -> list[Event]:
        return self._adapter.values()

    @_operation("get_by_id", "Failed to get event!")
    def get_by_id(self, event_id: str) -> Event:
        if not is_valid_identifier(event_id):
            raise InvalidIdError("Invalid event ID")

        event = self._adapter.get(event_id)
        if event is None:
            raise NotFoundError(f"Event with the provided id: {event_id} has not been found!")
        return event

    @_operation("list_by_owner", "Failed to retrieve events for owner!")
    def list_by_owner(self, owner_id: str) -> list[Event]:
        if not is_valid_identifier(owner_id):
            raise InvalidOwnerIdError("Invalid owner ID")
        return [event for event in self._adapter.values() if event.owner_id == owner_id]

    @_operation("list_by_status", "Failed to retrieve events!")
    def list_by_status(self, status: str) -> list[Event]:
        if not is_valid_status(status):
            raise InvalidStatusError(f"Invalid event status: {status}")
        return [event for event in self._adapter.values() if event.status == status]

    @_operation("create", "Failed to create event!")
    def create(self, payload: EventPayload) -> Event:
        missing = payload.missing_fields()
        if missing:
            log.debug("event.incomplete_input", missing=missing)
            raise IncompleteInputError("Incomplete input data!")
        _check_status(payload.status)

        now = self._clock.now()
        event = Event(
            id=self._ids.new_id(),
            owner_id=self._ids.new_id(),
            owner_name=payload.owner_name,
            asset_type=payload.asset_type,
            asset_description=payload.asset_description,
            status=payload.status,
            start_date=now,
            end_date=now + FIXED_DURATION,
        )
        self._adapter.insert(event)

        log.info("event.created", id=event.id, owner_id=event.owner_id, status=event.status)
        return event

    @_operation("update", "Failed to update event!")
    def update(self, event_id: str, owner_id: str, payload: EventPayload) -> Event:
        _check_identifiers(event_id, owner_id, "updating")
        if payload.status:
            _check_status(payload.status)

        event = self._owned_event(event_id, owner_id, "update")

        changes = {
            field: getattr(payload, field)
            for field in ("asset_type", "asset_description", "owner_name", "status")
            if getattr(payload, field)
        }
        updated = event.model_copy(update=changes)
        self._adapter.insert(updated)

        log.info("event.updated", id=event_id, fields=sorted(changes))
        return updated

    @_operation("end", "Failed to end event!")
    def end(self, event_id: str, owner_id: str) -> Event:
        _check_identifiers(event_id, owner_id, "ending")
        event = self._owned_event(event_id, owner_id, "end")

        now = self._clock.now()
        # Rejects while endDate has not yet passed; kept as the literal comparison.
        if event.end_date >= now:
            raise AlreadyEndedError("Event already ended!")

        ended = event.model_copy(update={"end_date": now, "status": "inactive"})
        self._adapter.insert(ended)

        log.info("event.ended", id=event_id, end_date=now)
        return ended

    @_operation("delete", "Failed to delete event!")
    def delete(self, event_id: str, owner_id: str) -> Event:
        _check_identifiers(event_id, owner_id, "deleting")

        removed = self._adapter.remove(event_id)
        if removed is None:
            raise NotFoundError(f"Failed to delete event with id: {event_id}")
        # The record is already gone at this point, even if the caller is not the owner.
        if removed.owner_id != owner_id:
            log.warning("event.deleted_by_non_owner", id=event_id)
            raise ForbiddenError("Only owner can delete event!")

        log.info("event.deleted", id=event_id)
        return removed

    def health_check(self) -> bool:
        return self._adapter.health_check()

    def _owned_event(self, event_id: str, owner_id: str, verb: str) -> Event:
        event = self._adapter.get(event_id)
        if event is None:
            raise NotFoundError(f"Failed to {verb} event with id: {event_id}!")
        if event.owner_id != owner_id:
            raise ForbiddenError(f"Only the owner can {verb} this event!")
        return event

    def _record(self, operation: str, result: Result):
        if _metrics is None:
            return
        try:
            outcome = "ok" if result.is_ok else result.error.value
            _metrics.record_operation(operation, outcome)
            if result.is_ok and operation in ("create", "delete"):
                _metrics.set_stored_events(self._adapter.count())
        except Exception as e:
            log.warning("metrics.record_failed", operation=operation, error=str(e))


def _check_identifiers(event_id: str, owner_id: str, action: str):
    message = f"Invalid event or owner ID for {action} an event."
    if not is_valid_identifier(event_id):
        raise InvalidIdError(message)
    if not is_valid_identifier(owner_id):
        raise InvalidOwnerIdError(message)


def _check_status(status: str):
    if not is_valid_status(status):
        raise InvalidStatusError(f"Invalid event status: {status}")


def _create_default_adapter() -> StoreAdapter:
    """
    Create the default adapter based on configuration.

    Returns:
        StoreAdapter instance based on STORE_ADAPTER setting
    """
    if settings.STORE_ADAPTER == "redis":
        if not settings.REDIS_URL:
            log.warning(
                "adapter.fallback",
                requested="redis",
                actual="memory",
                reason="REDIS_URL not configured"
            )
            return InMemoryAdapter()

        log.info("adapter.selected", type="redis", url=str(settings.REDIS_URL))
        return RedisHashAdapter()
    else:
        log.info("adapter.selected", type="memory")
        return InMemoryAdapter()


@lru_cache(maxsize=1)
def get_event_store() -> EventStore:
    """Process-wide event store, built on first use."""
    return EventStore()
