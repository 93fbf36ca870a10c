"""Pytest configuration and shared fixtures."""

import uuid
from datetime import datetime, timezone

import pytest
from rest_framework.test import APIClient

from events.domain import Event, EventId


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def event_attrs() -> dict:
    """Valid raw attributes for an event, as a form would send them."""
    return {
        "title": "Cloud Native Summit 2025",
        "description": "Two days of talks on running software in the cloud.",
        "overview": "Keynotes, deep dives and hands-on labs.",
        "image": "/images/event1.png",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "2025-11-07",
        "time": "09:30",
        "mode": "hybrid",
        "audience": "Developers",
        "agenda": ["Keynote", "Workshops"],
        "organizer": "Cloud Native Foundation",
        "tags": ["cloud", "kubernetes"],
    }


@pytest.fixture
def domain_event() -> Event:
    created = datetime(2025, 1, 2, 12, 0, tzinfo=timezone.utc)
    return Event(
        id=EventId(value=uuid.uuid4()),
        title="Cloud Native Summit 2025",
        slug="cloud-native-summit-2025",
        description="Two days of talks on running software in the cloud.",
        overview="Keynotes, deep dives and hands-on labs.",
        image="/images/event1.png",
        venue="Moscone Center",
        location="San Francisco, CA",
        date=datetime(2025, 11, 7, tzinfo=timezone.utc),
        time="09:30",
        mode="hybrid",
        audience="Developers",
        agenda=("Keynote", "Workshops"),
        organizer="Cloud Native Foundation",
        tags=("cloud", "kubernetes"),
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def event_store():
    from events.stores import Database, DjangoEventStore

    return DjangoEventStore(Database())


@pytest.fixture
def booking_store(event_store):
    from events.stores import Database, DjangoBookingStore

    return DjangoBookingStore(Database(), event_store)
