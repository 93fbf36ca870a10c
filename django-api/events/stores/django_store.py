"""Django ORM implementations of the EventStore and BookingStore."""

import logging
from collections.abc import Mapping
from typing import Any

from django.db import IntegrityError

from events import models as orm
from events.domain import Booking, BookingId, EmailAddress, Event, EventId
from events.domain.errors import EventNotFoundError, EventReferenceMissingError, SlugConflictError
from events.domain.validation import EventFields, clean_booking_fields, clean_event_fields
from events.stores.database import Database, translate_database_errors
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    def __init__(self, database: Database) -> None:
        self._db = database

    @property
    def _events(self):
        return orm.Event.objects.using(self._db.alias)

    @translate_database_errors
    def create(self, attrs: Mapping[str, Any]) -> Event:
        fields = clean_event_fields(attrs)
        record = orm.Event(**_field_values(fields))
        self._save(record, fields.slug)
        return _to_event(record)

    @translate_database_errors
    def update(self, event_id: EventId, attrs: Mapping[str, Any]) -> Event:
        record = self._events.filter(pk=event_id.value).first()
        if record is None:
            raise EventNotFoundError(str(event_id))
        fields = clean_event_fields(attrs, current=_to_event(record))
        for name, value in _field_values(fields).items():
            setattr(record, name, value)
        self._save(record, fields.slug)
        return _to_event(record)

    @translate_database_errors
    def find_by_slug(self, slug: str) -> Event | None:
        record = self._events.filter(slug=slug).first()
        return _to_event(record) if record is not None else None

    @translate_database_errors
    def exists(self, event_id: EventId) -> bool:
        return self._events.filter(pk=event_id.value).exists()

    @translate_database_errors
    def list_events(self) -> list[Event]:
        return [_to_event(record) for record in self._events.order_by("-created_at")]

    def _save(self, record: orm.Event, slug: str) -> None:
        try:
            with self._db.atomic():
                record.save(using=self._db.alias)
        except IntegrityError as exc:
            logger.warning("Slug %r already taken: %s", slug, exc)
            raise SlugConflictError(slug) from exc


class DjangoBookingStore(BookingStore):
    """Booking store that checks event references through an EventStore."""

    def __init__(self, database: Database, events: EventStore) -> None:
        self._db = database
        self._event_store = events

    @property
    def _bookings(self):
        return orm.Booking.objects.using(self._db.alias)

    @translate_database_errors
    def create(self, attrs: Mapping[str, Any]) -> Booking:
        fields = clean_booking_fields(attrs)
        # Not atomic with the insert; an event removed in between is accepted.
        if not self._event_store.exists(fields.event_id):
            raise EventReferenceMissingError(str(fields.event_id))
        record = self._bookings.create(event_id=fields.event_id.value, email=fields.email.value)
        return _to_booking(record)

    @translate_database_errors
    def list_for_event(self, event_id: EventId) -> list[Booking]:
        records = self._bookings.filter(event_id=event_id.value).order_by("-created_at")
        return [_to_booking(record) for record in records]


def _field_values(fields: EventFields) -> dict[str, Any]:
    return {
        "title": fields.title,
        "slug": fields.slug,
        "description": fields.description,
        "overview": fields.overview,
        "image": fields.image,
        "venue": fields.venue,
        "location": fields.location,
        "date": fields.date,
        "time": fields.time,
        "mode": fields.mode,
        "audience": fields.audience,
        "agenda": list(fields.agenda),
        "organizer": fields.organizer,
        "tags": list(fields.tags),
    }


def _to_event(record: orm.Event) -> Event:
    return Event(
        id=EventId(value=record.id),
        title=record.title,
        slug=record.slug,
        description=record.description,
        overview=record.overview,
        image=record.image,
        venue=record.venue,
        location=record.location,
        date=record.date,
        time=record.time,
        mode=record.mode,
        audience=record.audience,
        agenda=tuple(record.agenda),
        organizer=record.organizer,
        tags=tuple(record.tags),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _to_booking(record: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(value=record.id),
        event_id=EventId(value=record.event_id),
        email=EmailAddress(value=record.email),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
