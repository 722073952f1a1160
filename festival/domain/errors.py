"""Domain error codes for the festival module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    SCHEDULE_CONFLICT = "SCHEDULE_CONFLICT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    OCCUPANCY_UNDERFLOW = "OCCUPANCY_UNDERFLOW"
    CONCURRENT_UPDATE = "CONCURRENT_UPDATE"
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    PAYMENT_FAILED = "PAYMENT_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised for malformed or logically conflicting input."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_FAILED) -> None:
        super().__init__(code=code, message=message)


class ScheduleConflictError(ValidationError):
    """Raised when two selected workshops share a time slot."""

    def __init__(self, first_title: str, second_title: str) -> None:
        super().__init__(
            f'Selected workshops "{first_title}" and "{second_title}" occur at the same time.',
            code=ErrorCode.SCHEDULE_CONFLICT,
        )


class CapacityError(DomainError):
    """Raised when a booking would exceed a resource's capacity."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CAPACITY_EXCEEDED, message=message)


class OccupancyUnderflowError(DomainError):
    """Raised when releasing more seats than are booked."""

    def __init__(self, table_number: int) -> None:
        super().__init__(
            code=ErrorCode.OCCUPANCY_UNDERFLOW,
            message=f"Cannot remove more seats than currently booked for table {table_number}.",
        )


class ConcurrencyError(DomainError):
    """Raised when an optimistic update keeps losing to concurrent writers."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONCURRENT_UPDATE, message=message)


class ConfigurationError(DomainError):
    """Raised when required event or package configuration is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFIGURATION_MISSING, message=message)


class NotFoundError(DomainError):
    """Base for references to records that do not exist."""


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found",
        )


class ResourceNotFoundError(NotFoundError):
    """Raised when a workshop, social event, table or add-on is not found."""

    def __init__(self, kind: str, reference) -> None:
        super().__init__(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"{kind.capitalize()} {reference} not found",
        )


class InvalidIdError(DomainError):
    """Raised when an ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message="Invalid ID format",
        )


class PaymentError(DomainError):
    """Raised when the payment processor rejects a request."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.PAYMENT_FAILED, message=message)
