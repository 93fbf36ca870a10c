from events.stores.database import Database
from events.stores.django_store import DjangoBookingStore, DjangoEventStore
from events.stores.interfaces import BookingStore, EventStore

__all__ = [
    "Database",
    "EventStore",
    "BookingStore",
    "DjangoEventStore",
    "DjangoBookingStore",
]
