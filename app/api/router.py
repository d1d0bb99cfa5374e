"""HTTP routes for the event store operations."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from .schemas import EventListResponse, ErrorResponse
from ..event_models import Event, EventPayload
from ..services.event_store import EventStore, get_event_store
from ..services.result import ErrorKind, Result

router = APIRouter(prefix="/v1", tags=["events"])

ERROR_STATUS = {
    ErrorKind.INVALID_ID: 400,
    ErrorKind.INVALID_OWNER_ID: 400,
    ErrorKind.INVALID_STATUS: 400,
    ErrorKind.INCOMPLETE_INPUT: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_ENDED: 409,
    ErrorKind.INTERNAL: 500,
}

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in sorted(set(ERROR_STATUS.values()))
}


def _error_response(result: Result) -> JSONResponse:
    body = ErrorResponse(error=result.error, message=result.message)
    return JSONResponse(status_code=ERROR_STATUS[result.error], content=body.model_dump(mode="json"))


def _event_or_error(result: Result[Event]):
    if not result.is_ok:
        return _error_response(result)
    return result.value


def _list_or_error(result: Result[list[Event]]):
    if not result.is_ok:
        return _error_response(result)
    return EventListResponse(total=len(result.value), events=result.value)


@router.get("/events", response_model=EventListResponse, responses=ERROR_RESPONSES)
async def get_all_events(store: EventStore = Depends(get_event_store)):
    """List every stored event."""
    return _list_or_error(store.list_all())


@router.get("/events/status/{status}", response_model=EventListResponse, responses=ERROR_RESPONSES)
async def get_events_by_status(status: str, store: EventStore = Depends(get_event_store)):
    """List events whose status is 'active' or 'inactive'."""
    return _list_or_error(store.list_by_status(status))


@router.get("/owners/{owner_id}/events", response_model=EventListResponse, responses=ERROR_RESPONSES)
async def get_owners_events(owner_id: str, store: EventStore = Depends(get_event_store)):
    """List events belonging to one owner."""
    return _list_or_error(store.list_by_owner(owner_id))


@router.get("/events/{event_id}", response_model=Event, responses=ERROR_RESPONSES)
async def get_event_by_id(event_id: str, store: EventStore = Depends(get_event_store)):
    return _event_or_error(store.get_by_id(event_id))


@router.post("/events", response_model=Event, status_code=201, responses=ERROR_RESPONSES)
async def create_event(payload: EventPayload, store: EventStore = Depends(get_event_store)):
    """
    Create an event.

    The response carries the minted ownerId, which later update, end and
    delete calls must present.
    """
    return _event_or_error(store.create(payload))


@router.patch("/events/{event_id}", response_model=Event, responses=ERROR_RESPONSES)
async def update_event(
    event_id: str,
    payload: EventPayload,
    owner_id: str = Query(..., alias="ownerId"),
    store: EventStore = Depends(get_event_store),
):
    """Overwrite the non-empty payload fields of an event."""
    return _event_or_error(store.update(event_id, owner_id, payload))


@router.post("/events/{event_id}/end", response_model=Event, responses=ERROR_RESPONSES)
async def end_event(
    event_id: str,
    owner_id: str = Query(..., alias="ownerId"),
    store: EventStore = Depends(get_event_store),
):
    return _event_or_error(store.end(event_id, owner_id))


@router.delete("/events/{event_id}", response_model=Event, responses=ERROR_RESPONSES)
async def delete_event(
    event_id: str,
    owner_id: str = Query(..., alias="ownerId"),
    store: EventStore = Depends(get_event_store),
):
    """Delete an event and return the removed record."""
    return _event_or_error(store.delete(event_id, owner_id))
