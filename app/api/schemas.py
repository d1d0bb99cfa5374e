from pydantic import BaseModel
from typing import List
from ..event_models import Event
from ..services.result import ErrorKind

class EventListResponse(BaseModel):
    total: int
    events: List[Event]

class ErrorResponse(BaseModel):
    error: ErrorKind
    message: str
