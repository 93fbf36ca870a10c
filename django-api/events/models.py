"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py
and the write pipelines in domain/validation.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.TextField()
    slug = models.TextField(unique=True)
    description = models.TextField()
    overview = models.TextField()
    image = models.TextField()
    venue = models.TextField()
    location = models.TextField()
    date = models.DateTimeField()
    time = models.CharField(max_length=5)
    mode = models.TextField()
    audience = models.TextField()
    agenda = models.JSONField(default=list)
    organizer = models.TextField()
    tags = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "events"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="events_created_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """Persistence model for bookings.

    The event reference is indexed but carries no database constraint; the
    booking store checks it before inserting.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        Event,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="bookings",
    )
    email = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "bookings"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} - {self.event_id}"
