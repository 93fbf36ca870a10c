"""Booking service."""

import logging
from collections.abc import Mapping
from typing import Any

from events.domain import Booking
from events.domain.errors import EventNotFoundError, InvalidSlugError
from events.domain.slugs import normalize_slug
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


class BookingService:
    """Service for creating and reading bookings."""

    def __init__(self, store: BookingStore, events: EventStore) -> None:
        self._store = store
        self._events = events

    def create_booking(self, attrs: Mapping[str, Any]) -> Booking:
        """Create a booking for an existing event.

        Raises:
            ValidationError: If the email or event id is malformed.
            EventReferenceMissingError: If the event does not exist.
        """
        booking = self._store.create(attrs)
        logger.info("Booked %s for event %s", booking.email, booking.event_id)
        return booking

    def list_bookings(self, event_slug: str) -> list[Booking]:
        """Return bookings for the event with this slug.

        Raises:
            InvalidSlugError: If the slug is empty or malformed.
            EventNotFoundError: If the event does not exist.
        """
        slug = normalize_slug(event_slug)
        if slug is None:
            raise InvalidSlugError()
        event = self._events.find_by_slug(slug)
        if event is None:
            raise EventNotFoundError(slug)
        return self._store.list_for_event(event.id)
