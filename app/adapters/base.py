"""Base adapter interface for event store backends."""
from abc import ABC, abstractmethod
from ..event_models import Event


class StoreAdapter(ABC):
    """Abstract interface for the keyed map that holds events by id."""

    @abstractmethod
    def get(self, event_id: str) -> Event | None:
        """
        Look up a single event.

        Args:
            event_id: Key of the event

        Returns:
            The stored event, or None if the key is absent
        """
        pass

    @abstractmethod
    def insert(self, event: Event) -> None:
        """
        Store an event under its id, replacing any existing entry.

        Args:
            event: The event to store
        """
        pass

    @abstractmethod
    def remove(self, event_id: str) -> Event | None:
        """
        Remove an event and return what was stored.

        Lookup and removal happen as one step.

        Args:
            event_id: Key of the event

        Returns:
            The removed event, or None if the key was absent
        """
        pass

    @abstractmethod
    def values(self) -> list[Event]:
        """Return every stored event."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored events."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the backend is healthy and accessible.

        Returns:
            True if backend is healthy, False otherwise
        """
        pass
