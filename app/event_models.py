from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Literal
import re

# Added to startDate to produce the initial endDate, in clock units.
FIXED_DURATION = 86_400_000

UINT64_MAX = 2**64 - 1

EVENT_STATUSES = ("active", "inactive")

_IDENTIFIER_RE = re.compile(r"[\da-f]{8}-([\da-f]{4}-){3}[\da-f]{12}", re.IGNORECASE)

EventStatus = Literal["active", "inactive"]


def is_valid_identifier(value: str) -> bool:
    """Check that value is a canonical 8-4-4-4-12 hex UUID string."""
    return isinstance(value, str) and _IDENTIFIER_RE.fullmatch(value) is not None


def is_valid_status(value: str) -> bool:
    return value in EVENT_STATUSES


class EventPayload(BaseModel):
    """Caller-supplied fields for create and partial update.

    Absent fields default to the empty string, which update treats as
    "keep the stored value".
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    asset_type: str = Field(default="", description="Kind of asset the event concerns")
    asset_description: str = Field(default="", description="Free-form asset description")
    owner_name: str = Field(default="", description="Display name of the owner")
    status: str = Field(default="", description="'active' or 'inactive'")

    def missing_fields(self) -> list[str]:
        """Wire names of the fields left empty."""
        return [
            to_camel(name)
            for name in ("asset_type", "asset_description", "owner_name", "status")
            if not getattr(self, name)
        ]


class Event(BaseModel):
    """Persisted event record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    owner_id: str
    owner_name: str
    asset_type: str
    asset_description: str
    status: EventStatus
    start_date: int = Field(..., ge=0, le=UINT64_MAX)
    end_date: int = Field(..., ge=0, le=UINT64_MAX)
