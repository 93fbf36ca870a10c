"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from typing import Self
from uuid import UUID

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EmailAddress:
    """Lowercased email address matching local@domain.tld."""

    value: str

    def __post_init__(self) -> None:
        if not EMAIL_PATTERN.match(self.value):
            raise ValueError(f"{self.value} is not a valid email address")
        if self.value != self.value.strip().lower():
            raise ValueError("Email address must be normalized")

    @classmethod
    def normalize(cls, raw: str) -> Self:
        """Trim and lowercase ``raw`` before validating it."""
        return cls(value=raw.strip().lower())

    def __str__(self) -> str:
        return self.value
