"""Success/failure result returned by every event store operation."""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories reported by the event store."""
    INVALID_ID = "InvalidId"
    INVALID_OWNER_ID = "InvalidOwnerId"
    INVALID_STATUS = "InvalidStatus"
    INCOMPLETE_INPUT = "IncompleteInput"
    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    ALREADY_ENDED = "AlreadyEnded"
    INTERNAL = "Internal"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value (error is None) or an error kind with a message."""
    value: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def err(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=kind, message=message)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising ValueError for a failed result."""
        if self.error is not None:
            raise ValueError(f"{self.error.value}: {self.message}")
        return self.value
