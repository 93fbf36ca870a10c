"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from events.domain import Booking, Event, EventId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def create(self, attrs: Mapping[str, Any]) -> Event:
        """Validate ``attrs`` and insert a new event.

        Raises:
            ValidationError: If a field is missing or malformed.
            SlugConflictError: If another event already has the derived slug.
        """
        ...

    @abstractmethod
    def update(self, event_id: EventId, attrs: Mapping[str, Any]) -> Event:
        """Replace every field of an existing event with ``attrs``.

        Raises:
            EventNotFoundError: If the event does not exist.
            ValidationError: If a field is missing or malformed.
            SlugConflictError: If another event already has the derived slug.
        """
        ...

    @abstractmethod
    def find_by_slug(self, slug: str) -> Event | None:
        """Return the event with exactly this slug, or None if not found."""
        ...

    @abstractmethod
    def exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def create(self, attrs: Mapping[str, Any]) -> Booking:
        """Validate ``attrs``, check the referenced event and insert a booking.

        Raises:
            ValidationError: If the email or event id is malformed.
            EventReferenceMissingError: If the referenced event does not exist.
        """
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Booking]:
        """Return bookings for an event ordered by created_at descending."""
        ...
