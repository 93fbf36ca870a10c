"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic

Read handlers never expose internal error details. The create handlers
return the exception message in the 500 body; this API is an internal tool.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from django.apps import apps
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain.errors import (
    EventNotFoundError,
    EventReferenceMissingError,
    InvalidSlugError,
    SlugConflictError,
    ValidationError,
)
from events.handlers.serializers import BookingSerializer, EventSerializer
from events.services import BookingService, EventService

logger = logging.getLogger(__name__)

LIST_FIELDS = ("agenda", "tags")


class MalformedBodyError(Exception):
    """Raised when a request body cannot be read as key/value pairs."""


class ServiceView(APIView):
    """Base view resolving services from the app's container.

    Services can be injected with ``as_view(event_service=...)``.
    """

    parser_classes = [FormParser, MultiPartParser, JSONParser]
    event_service: EventService | None = None
    booking_service: BookingService | None = None

    def get_event_service(self) -> EventService:
        return self.event_service or apps.get_app_config("events").services.events

    def get_booking_service(self) -> BookingService:
        return self.booking_service or apps.get_app_config("events").services.bookings


class EventListView(ServiceView):
    """Handler for GET and POST /api/events"""

    def get(self, request: Request) -> Response:
        try:
            events = self.get_event_service().list_events()
        except Exception:
            logger.exception("Failed to list events")
            return _error("Failed to fetch events. Please try again later.", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"message": "Events fetched successfully", "events": EventSerializer(events, many=True).data},
            status=status.HTTP_200_OK,
        )

    def post(self, request: Request) -> Response:
        try:
            attrs = _form_attrs(request)
        except MalformedBodyError:
            return _message("Invalid Form Data", status.HTTP_400_BAD_REQUEST)

        try:
            event = self.get_event_service().create_event(attrs)
        except ValidationError as exc:
            logger.warning("Rejected event: %s", exc)
            return _message(exc.message, status.HTTP_400_BAD_REQUEST)
        except SlugConflictError as exc:
            return _message(exc.message, status.HTTP_409_CONFLICT)
        except Exception as exc:
            logger.exception("Event creation failed")
            return Response(
                {"message": "Event Creation Failed", "error": str(exc) or "Unknown Error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {"message": "Event created successfully", "event": EventSerializer(event).data},
            status=status.HTTP_201_CREATED,
        )


class EventDetailView(ServiceView):
    """Handler for GET and PUT /api/events/{slug}"""

    def get(self, request: Request, slug: str) -> Response:
        try:
            event = self.get_event_service().get_event_by_slug(slug)
        except InvalidSlugError as exc:
            return _error(exc.message, status.HTTP_404_NOT_FOUND)
        except EventNotFoundError:
            return _error(f"Event with {slug} not found", status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("Failed to fetch event %r", slug)
            return _error("Failed to fetch event. Please try again later.", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"message": "Event fetched successfully", "event": EventSerializer(event).data},
            status=status.HTTP_200_OK,
        )

    def put(self, request: Request, slug: str) -> Response:
        try:
            attrs = _form_attrs(request)
        except MalformedBodyError:
            return _message("Invalid Form Data", status.HTTP_400_BAD_REQUEST)

        try:
            event = self.get_event_service().replace_event(slug, attrs)
        except (InvalidSlugError, EventNotFoundError):
            return _message(f"Event with {slug} not found", status.HTTP_404_NOT_FOUND)
        except ValidationError as exc:
            logger.warning("Rejected update of %r: %s", slug, exc)
            return _message(exc.message, status.HTTP_400_BAD_REQUEST)
        except SlugConflictError as exc:
            return _message(exc.message, status.HTTP_409_CONFLICT)
        except Exception as exc:
            logger.exception("Event update failed for %r", slug)
            return Response(
                {"message": "Event Update Failed", "error": str(exc) or "Unknown Error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {"message": "Event updated successfully", "event": EventSerializer(event).data},
            status=status.HTTP_200_OK,
        )


class EventBookingListView(ServiceView):
    """Handler for GET /api/events/{slug}/bookings"""

    def get(self, request: Request, slug: str) -> Response:
        try:
            bookings = self.get_booking_service().list_bookings(slug)
        except InvalidSlugError as exc:
            return _error(exc.message, status.HTTP_404_NOT_FOUND)
        except EventNotFoundError:
            return _error(f"Event with {slug} not found", status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("Failed to list bookings for %r", slug)
            return _error("Failed to fetch bookings. Please try again later.", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"message": "Bookings fetched successfully", "bookings": BookingSerializer(bookings, many=True).data},
            status=status.HTTP_200_OK,
        )


class BookingCreateView(ServiceView):
    """Handler for POST /api/bookings"""

    def post(self, request: Request) -> Response:
        try:
            attrs = _form_attrs(request)
        except MalformedBodyError:
            return _message("Invalid Form Data", status.HTTP_400_BAD_REQUEST)

        try:
            booking = self.get_booking_service().create_booking(attrs)
        except ValidationError as exc:
            logger.warning("Rejected booking: %s", exc)
            return _message(exc.message, status.HTTP_400_BAD_REQUEST)
        except EventReferenceMissingError as exc:
            return _message(exc.message, status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("Booking creation failed")
            return _message("Booking Creation Failed", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"message": "Booking created successfully", "booking": BookingSerializer(booking).data},
            status=status.HTTP_201_CREATED,
        )


def _error(message: str, status_code: int) -> Response:
    return Response({"error": message}, status=status_code)


def _message(message: str, status_code: int) -> Response:
    return Response({"message": message}, status=status_code)


def _form_attrs(request: Request) -> dict[str, Any]:
    """Flatten the request body into an attribute mapping.

    Form bodies give one value per key, except agenda and tags which collect
    repeated keys. A single JSON array string is decoded into a list.
    """
    try:
        data = request.data
    except (ParseError, UnsupportedMediaType) as exc:
        raise MalformedBodyError(str(exc)) from exc

    if not isinstance(data, Mapping):
        raise MalformedBodyError("Body must be a set of key/value pairs")
    if not hasattr(data, "getlist"):
        return dict(data)

    attrs: dict[str, Any] = {key: data.get(key) for key in data.keys()}
    for field in LIST_FIELDS:
        if field in data:
            attrs[field] = _decode_list(data.getlist(field))
    return attrs


def _decode_list(values: list[str]) -> Any:
    if len(values) == 1 and values[0].strip().startswith("["):
        try:
            return json.loads(values[0])
        except json.JSONDecodeError:
            return values
    return values
