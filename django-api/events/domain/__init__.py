from events.domain.models import Booking, Event
from events.domain.value_objects import BookingId, EmailAddress, EventId

__all__ = [
    "Event",
    "Booking",
    "EventId",
    "BookingId",
    "EmailAddress",
]
