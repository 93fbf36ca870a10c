"""Wires stores and services around a single Database handle."""

from dataclasses import dataclass

from events.services import BookingService, EventService
from events.stores import Database, DjangoBookingStore, DjangoEventStore


@dataclass(frozen=True)
class Services:
    """Services shared by every request handler."""

    database: Database
    events: EventService
    bookings: BookingService


def build_services(database: Database) -> Services:
    event_store = DjangoEventStore(database)
    booking_store = DjangoBookingStore(database, event_store)
    return Services(
        database=database,
        events=EventService(event_store),
        bookings=BookingService(booking_store, event_store),
    )
