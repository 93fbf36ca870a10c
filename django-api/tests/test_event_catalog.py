"""Integration tests for the event and booking HTTP API.

Run with: pytest tests/test_event_catalog.py -v
"""

import json
import uuid
from unittest.mock import create_autospec
from urllib.parse import urlencode

import pytest
from rest_framework.test import APIClient, APIRequestFactory

from events.domain.errors import DatabaseUnavailableError
from events.handlers import EventBookingListView, EventDetailView, EventListView
from events.services import BookingService, EventService


@pytest.mark.django_db
class TestEventCreate:
    """Tests for POST /api/events"""

    def test_create_event_from_form(self, api_client: APIClient, event_attrs):
        """Given a valid multipart form, returns 201 with the event."""
        response = api_client.post("/api/events", event_attrs, format="multipart")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Event created successfully"
        assert body["event"]["slug"] == "cloud-native-summit-2025"
        assert body["event"]["agenda"] == ["Keynote", "Workshops"]
        assert body["event"]["date"] == "2025-11-07T00:00:00Z"

    def test_create_event_with_json_array_strings(self, api_client: APIClient, event_attrs):
        """Given agenda and tags as JSON array strings, decodes them."""
        event_attrs["agenda"] = json.dumps(["Keynote", "Panel"])
        event_attrs["tags"] = json.dumps(["cloud"])

        response = api_client.post("/api/events", event_attrs, format="multipart")

        assert response.status_code == 201
        assert response.json()["event"]["agenda"] == ["Keynote", "Panel"]
        assert response.json()["event"]["tags"] == ["cloud"]

    def test_create_event_from_json(self, api_client: APIClient, event_attrs):
        response = api_client.post("/api/events", event_attrs, format="json")

        assert response.status_code == 201

    def test_create_event_invalid_time(self, api_client: APIClient, event_attrs):
        """Given time 9:30, returns 400 with the validation message."""
        event_attrs["time"] = "9:30"

        response = api_client.post("/api/events", event_attrs, format="multipart")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid time format. Expected HH:MM in 24-hour format."}

    def test_create_event_missing_agenda(self, api_client: APIClient, event_attrs):
        del event_attrs["agenda"]

        response = api_client.post("/api/events", event_attrs, format="multipart")

        assert response.status_code == 400
        assert "agenda" in response.json()["message"]

    def test_create_event_duplicate_title(self, api_client: APIClient, event_attrs):
        """Given an event with the same title exists, returns 409."""
        api_client.post("/api/events", event_attrs, format="multipart")

        response = api_client.post("/api/events", event_attrs, format="multipart")

        assert response.status_code == 409
        assert "cloud-native-summit-2025" in response.json()["message"]

    def test_create_event_malformed_body(self, api_client: APIClient):
        """Given a body that cannot be parsed, returns 400."""
        response = api_client.post("/api/events", data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid Form Data"}

    def test_create_event_unexpected_failure(self, event_attrs):
        """Given the service fails, returns 500 with the error message."""
        service = create_autospec(EventService, instance=True)
        service.create_event.side_effect = DatabaseUnavailableError()
        view = EventListView.as_view(event_service=service)

        response = view(APIRequestFactory().post("/api/events", event_attrs, format="multipart"))

        assert response.status_code == 500
        assert response.data == {
            "message": "Event Creation Failed",
            "error": "DATABASE_UNAVAILABLE: Database is unavailable",
        }

    def test_create_event_from_urlencoded_form(self, api_client: APIClient, event_attrs):
        """Given repeated agenda and tags keys in a urlencoded body, collects them."""
        body = urlencode(event_attrs, doseq=True)

        response = api_client.post("/api/events", body, content_type="application/x-www-form-urlencoded")

        assert response.status_code == 201
        assert response.json()["event"]["agenda"] == ["Keynote", "Workshops"]
        assert response.json()["event"]["tags"] == ["cloud", "kubernetes"]

    def test_create_event_with_long_text_fields(self, api_client: APIClient, event_attrs):
        """Given text longer than 255 characters, stores it unchanged."""
        event_attrs["title"] = "Cloud Native Summit " * 20
        event_attrs["description"] = "x" * 5000
        event_attrs["image"] = "https://cdn.example.com/" + "a" * 400 + ".png"

        response = api_client.post("/api/events", event_attrs, format="multipart")

        assert response.status_code == 201
        event = response.json()["event"]
        assert event["title"] == event_attrs["title"].strip()
        assert len(event["slug"]) > 255
        assert event["description"] == event_attrs["description"]


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{slug}"""

    def test_get_event_returns_details(self, api_client: APIClient, event_attrs):
        """Given event exists, returns its attributes exactly."""
        created = api_client.post("/api/events", event_attrs, format="multipart").json()["event"]

        response = api_client.get("/api/events/cloud-native-summit-2025")

        assert response.status_code == 200
        assert response.json() == {"message": "Event fetched successfully", "event": created}
        assert created["title"] == event_attrs["title"]
        assert created["time"] == "09:30"
        assert created["tags"] == ["cloud", "kubernetes"]

    def test_get_event_slug_is_case_insensitive(self, api_client: APIClient, event_attrs):
        api_client.post("/api/events", event_attrs, format="multipart")

        response = api_client.get("/api/events/Cloud-Native-Summit-2025")

        assert response.status_code == 200

    def test_get_event_not_found(self, api_client: APIClient):
        """Given event does not exist, returns 404."""
        response = api_client.get("/api/events/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Event with nope not found"}

    def test_get_event_invalid_slug(self, api_client: APIClient):
        """Given a slug with invalid characters, returns 404."""
        response = api_client.get("/api/events/bad_slug!")

        assert response.status_code == 404
        assert response.json() == {"error": "Invalid or missing slug parameter"}

    def test_get_event_unexpected_failure(self):
        """Given the service fails, returns 500 without internal details."""
        service = create_autospec(EventService, instance=True)
        service.get_event_by_slug.side_effect = RuntimeError("connection string leaked")
        view = EventDetailView.as_view(event_service=service)

        response = view(APIRequestFactory().get("/api/events/anything"), slug="anything")

        assert response.status_code == 500
        assert response.data == {"error": "Failed to fetch event. Please try again later."}

    def test_get_event_missing_slug(self, api_client: APIClient):
        """Given no slug after the trailing slash, returns 404 as JSON."""
        response = api_client.get("/api/events/")

        assert response.status_code == 404
        assert response.json() == {"error": "Invalid or missing slug parameter"}


@pytest.mark.django_db
class TestEventReplace:
    """Tests for PUT /api/events/{slug}"""

    def test_replace_event(self, api_client: APIClient, event_attrs):
        """Given a new title, replaces the fields and moves the slug."""
        created = api_client.post("/api/events", event_attrs, format="multipart").json()["event"]
        event_attrs.update(title="Cloud Native Summit 2026", time="10:00", tags=["cloud"])

        response = api_client.put("/api/events/cloud-native-summit-2025", event_attrs, format="multipart")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Event updated successfully"
        assert body["event"]["id"] == created["id"]
        assert body["event"]["slug"] == "cloud-native-summit-2026"
        assert body["event"]["time"] == "10:00"
        assert body["event"]["tags"] == ["cloud"]
        assert api_client.get("/api/events/cloud-native-summit-2025").status_code == 404
        assert api_client.get("/api/events/cloud-native-summit-2026").status_code == 200

    def test_replace_event_not_found(self, api_client: APIClient, event_attrs):
        response = api_client.put("/api/events/nope", event_attrs, format="multipart")

        assert response.status_code == 404
        assert response.json() == {"message": "Event with nope not found"}

    def test_replace_event_invalid_time(self, api_client: APIClient, event_attrs):
        """Given an invalid field, returns 400 and leaves the event unchanged."""
        api_client.post("/api/events", event_attrs, format="multipart")

        response = api_client.put(
            "/api/events/cloud-native-summit-2025", {**event_attrs, "time": "25:00"}, format="multipart"
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid time format. Expected HH:MM in 24-hour format."}
        assert api_client.get("/api/events/cloud-native-summit-2025").json()["event"]["time"] == "09:30"

    def test_replace_event_into_taken_slug(self, api_client: APIClient, event_attrs):
        """Given a title whose slug belongs to another event, returns 409."""
        api_client.post("/api/events", event_attrs, format="multipart")
        api_client.post("/api/events", {**event_attrs, "title": "Edge Day"}, format="multipart")

        response = api_client.put("/api/events/edge-day", event_attrs, format="multipart")

        assert response.status_code == 409
        assert "cloud-native-summit-2025" in response.json()["message"]

    def test_replace_event_unexpected_failure(self, event_attrs):
        service = create_autospec(EventService, instance=True)
        service.replace_event.side_effect = DatabaseUnavailableError()
        view = EventDetailView.as_view(event_service=service)

        response = view(APIRequestFactory().put("/api/events/any", event_attrs, format="multipart"), slug="any")

        assert response.status_code == 500
        assert response.data == {
            "message": "Event Update Failed",
            "error": "DATABASE_UNAVAILABLE: Database is unavailable",
        }


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events(self, api_client: APIClient, event_attrs):
        api_client.post("/api/events", event_attrs, format="multipart")
        api_client.post("/api/events", {**event_attrs, "title": "Edge Day"}, format="multipart")

        response = api_client.get("/api/events")

        assert response.status_code == 200
        assert {event["slug"] for event in response.json()["events"]} == {"cloud-native-summit-2025", "edge-day"}

    def test_list_events_empty_catalog(self, api_client: APIClient):
        """Given no events, returns empty list."""
        response = api_client.get("/api/events")

        assert response.status_code == 200
        assert response.json()["events"] == []


@pytest.mark.django_db
class TestBookingCreate:
    """Tests for POST /api/bookings"""

    def test_create_booking(self, api_client: APIClient, event_attrs):
        event = api_client.post("/api/events", event_attrs, format="multipart").json()["event"]

        response = api_client.post(
            "/api/bookings", {"eventId": event["id"], "email": " A@B.COM "}, format="multipart"
        )

        assert response.status_code == 201
        booking = response.json()["booking"]
        assert booking["email"] == "a@b.com"
        assert booking["eventId"] == event["id"]

    def test_create_booking_unknown_event(self, api_client: APIClient):
        response = api_client.post(
            "/api/bookings", {"eventId": str(uuid.uuid4()), "email": "a@b.com"}, format="multipart"
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Cannot create booking: referenced event does not exist."}

    def test_create_booking_invalid_email(self, api_client: APIClient, event_attrs):
        event = api_client.post("/api/events", event_attrs, format="multipart").json()["event"]

        response = api_client.post(
            "/api/bookings", {"eventId": event["id"], "email": "nobody"}, format="multipart"
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email format."}


@pytest.mark.django_db
class TestEventBookingList:
    """Tests for GET /api/events/{slug}/bookings"""

    def test_list_bookings_for_event(self, api_client: APIClient, event_attrs):
        """Given bookings on two events, returns only this event's bookings."""
        event = api_client.post("/api/events", event_attrs, format="multipart").json()["event"]
        other = api_client.post("/api/events", {**event_attrs, "title": "Edge Day"}, format="multipart").json()["event"]
        api_client.post("/api/bookings", {"eventId": event["id"], "email": "a@b.com"}, format="multipart")
        api_client.post("/api/bookings", {"eventId": other["id"], "email": "c@d.com"}, format="multipart")

        response = api_client.get("/api/events/cloud-native-summit-2025/bookings")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Bookings fetched successfully"
        assert [booking["email"] for booking in body["bookings"]] == ["a@b.com"]
        assert body["bookings"][0]["eventId"] == event["id"]

    def test_list_bookings_empty(self, api_client: APIClient, event_attrs):
        api_client.post("/api/events", event_attrs, format="multipart")

        response = api_client.get("/api/events/cloud-native-summit-2025/bookings")

        assert response.status_code == 200
        assert response.json()["bookings"] == []

    def test_list_bookings_unknown_event(self, api_client: APIClient):
        response = api_client.get("/api/events/nope/bookings")

        assert response.status_code == 404
        assert response.json() == {"error": "Event with nope not found"}

    def test_list_bookings_unexpected_failure(self):
        service = create_autospec(BookingService, instance=True)
        service.list_bookings.side_effect = RuntimeError("connection string leaked")
        view = EventBookingListView.as_view(booking_service=service)

        response = view(APIRequestFactory().get("/api/events/any/bookings"), slug="any")

        assert response.status_code == 500
        assert response.data == {"error": "Failed to fetch bookings. Please try again later."}
