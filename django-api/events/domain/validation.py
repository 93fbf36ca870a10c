"""Validation and normalization pipelines run by the stores before writing.

Each pipeline takes the raw attribute mapping of a request and either returns
a typed bundle of cleaned fields or raises ValidationError.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as dateutil_parser
from django.utils.dateparse import parse_date, parse_datetime

from events.domain.errors import ValidationError
from events.domain.models import Event
from events.domain.slugs import slugify
from events.domain.value_objects import EmailAddress, EventId

REQUIRED_TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

_PARSE_DEFAULT = datetime(1970, 1, 1)


@dataclass(frozen=True)
class EventFields:
    """Cleaned attributes ready to be written as an Event."""

    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: datetime
    time: str
    mode: str
    audience: str
    agenda: tuple[str, ...]
    organizer: str
    tags: tuple[str, ...]


@dataclass(frozen=True)
class BookingFields:
    """Cleaned attributes ready to be written as a Booking."""

    event_id: EventId
    email: EmailAddress


def clean_event_fields(attrs: Mapping[str, Any], current: Event | None = None) -> EventFields:
    """Run the event pipeline over ``attrs``.

    ``current`` is the stored event when replacing one; its slug is kept
    unless the title changed.

    Raises:
        ValidationError: If any field is missing or malformed.
    """
    text = {field: _require_text(attrs, field) for field in REQUIRED_TEXT_FIELDS}
    agenda = _require_string_list(attrs, "agenda")
    tags = _require_string_list(attrs, "tags")
    date = _parse_instant(text["date"])

    if not TIME_PATTERN.match(text["time"]):
        raise ValidationError("time", "Invalid time format. Expected HH:MM in 24-hour format.")

    if current is None or not current.slug or current.title != text["title"]:
        slug = slugify(text["title"])
    else:
        slug = current.slug
    if not slug:
        raise ValidationError("title", "Title must contain at least one letter or digit.")

    return EventFields(
        title=text["title"],
        slug=slug,
        description=text["description"],
        overview=text["overview"],
        image=text["image"],
        venue=text["venue"],
        location=text["location"],
        date=date,
        time=text["time"],
        mode=text["mode"],
        audience=text["audience"],
        agenda=agenda,
        organizer=text["organizer"],
        tags=tags,
    )


def clean_booking_fields(attrs: Mapping[str, Any]) -> BookingFields:
    """Run the booking pipeline over ``attrs``.

    The referenced event is not looked up here; the booking store does that.

    Raises:
        ValidationError: If the email or event id is missing or malformed.
    """
    raw_email = attrs.get("email")
    if not isinstance(raw_email, str) or not raw_email.strip():
        raise ValidationError("email", "Email is required.")
    try:
        email = EmailAddress.normalize(raw_email)
    except ValueError:
        raise ValidationError("email", "Invalid email format.") from None

    raw_event_id = attrs.get("eventId")
    if raw_event_id is None or (isinstance(raw_event_id, str) and not raw_event_id.strip()):
        raise ValidationError("eventId", "Event ID is required.")
    try:
        event_id = EventId.from_string(str(raw_event_id).strip())
    except ValueError:
        raise ValidationError("eventId", "Event ID is not a valid identifier.") from None

    return BookingFields(event_id=event_id, email=email)


def _require_text(attrs: Mapping[str, Any], field: str) -> str:
    value = attrs.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, f'Field "{field}" is required and must be a non-empty string.')
    return value.strip()


def _require_string_list(attrs: Mapping[str, Any], field: str) -> tuple[str, ...]:
    value = attrs.get(field)
    if (
        not isinstance(value, (list, tuple))
        or not value
        or any(not isinstance(item, str) or not item.strip() for item in value)
    ):
        raise ValidationError(field, f'Field "{field}" must be a non-empty array of non-empty strings.')
    return tuple(item.strip() for item in value)


def _parse_instant(value: str) -> datetime:
    """Parse a date or date-time; naive values are read as UTC.

    ISO-8601 is tried first. Other spellings such as ``2025/11/07`` or
    ``Nov 7, 2025`` go through dateutil; missing parts default to the start
    of the year, month or day.
    """
    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is not None:
                parsed = datetime(day.year, day.month, day.day)
            else:
                parsed = dateutil_parser.parse(value, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        parsed = None
    if parsed is None:
        raise ValidationError("date", "Invalid date format. Expected a valid date string.")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
