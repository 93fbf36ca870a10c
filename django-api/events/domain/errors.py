"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_SLUG = "INVALID_SLUG"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SLUG_CONFLICT = "SLUG_CONFLICT"
    EVENT_REFERENCE_MISSING = "EVENT_REFERENCE_MISSING"
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.identifier = identifier


class InvalidSlugError(DomainError):
    """Raised when a slug is missing or has characters outside [a-z0-9-]."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SLUG,
            message="Invalid or missing slug parameter",
        )


class ValidationError(DomainError):
    """Raised when a field is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)
        self.field = field


class SlugConflictError(DomainError):
    """Raised when another event already owns the slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.SLUG_CONFLICT,
            message=f'An event with slug "{slug}" already exists.',
        )
        self.slug = slug


class EventReferenceMissingError(DomainError):
    """Raised when a booking references an event that does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_REFERENCE_MISSING,
            message="Cannot create booking: referenced event does not exist.",
        )
        self.event_id = event_id


class DatabaseUnavailableError(DomainError):
    """Raised when the database cannot be reached."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DATABASE_UNAVAILABLE,
            message="Database is unavailable",
        )
