"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from typing import Any

from events.domain import Event
from events.domain.errors import EventNotFoundError, InvalidSlugError
from events.domain.slugs import normalize_slug
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_events(self) -> list[Event]:
        """Return all events, newest first."""
        return self._store.list_events()

    def create_event(self, attrs: Mapping[str, Any]) -> Event:
        """Create an event from raw request attributes.

        Raises:
            ValidationError: If a field is missing or malformed.
            SlugConflictError: If the derived slug is already taken.
        """
        event = self._store.create(attrs)
        logger.info("Created event %s (%s)", event.slug, event.id)
        return event

    def get_event_by_slug(self, raw_slug: str) -> Event:
        """Return an event by slug.

        Raises:
            InvalidSlugError: If the slug is empty or malformed.
            EventNotFoundError: If the event does not exist.
        """
        slug = normalize_slug(raw_slug)
        if slug is None:
            raise InvalidSlugError()
        event = self._store.find_by_slug(slug)
        if event is None:
            raise EventNotFoundError(slug)
        return event

    def replace_event(self, raw_slug: str, attrs: Mapping[str, Any]) -> Event:
        """Replace every field of the event with this slug.

        Raises:
            InvalidSlugError: If the slug is empty or malformed.
            EventNotFoundError: If the event does not exist.
            ValidationError: If a field is missing or malformed.
            SlugConflictError: If the new title's slug is already taken.
        """
        current = self.get_event_by_slug(raw_slug)
        event = self._store.update(current.id, attrs)
        logger.info("Replaced event %s (%s)", event.slug, event.id)
        return event
