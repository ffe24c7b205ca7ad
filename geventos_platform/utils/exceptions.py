"""
Custom exceptions for the GEventos platform.
"""

from typing import Any, Dict, Optional, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the platform."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INTEGRITY_FAULT = "INTEGRITY_FAULT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Business logic errors
    VENUE_IN_USE = "VENUE_IN_USE"
    AREA_NOT_IN_VENUE = "AREA_NOT_IN_VENUE"
    INVALID_TICKET_STATE = "INVALID_TICKET_STATE"

    # Concurrency errors
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
    OPTIMISTIC_LOCK_FAILURE = "OPTIMISTIC_LOCK_FAILURE"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class GeventosError(Exception):
    """Base exception class for the GEventos platform."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        retry_after: Optional[int] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []
        self.retry_after = retry_after
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.suggestions:
            result["suggestions"] = self.suggestions

        if self.retry_after:
            result["retry_after"] = self.retry_after

        return result


class ValidationError(GeventosError):
    """Exception raised for malformed client input."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, List[str]]] = None, **kwargs):
        details = kwargs.pop("details", None)
        if field_errors:
            details = {**(details or {}), "field_errors": field_errors}
        super().__init__(
            message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            **kwargs
        )
        self.field_errors = field_errors or {}


class NotFoundError(GeventosError):
    """Base exception for resource not found errors."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_id: Optional[Any] = None, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id} if resource_type else None,
            **kwargs
        )


class EventNotFoundError(NotFoundError):
    """Exception raised when an event is not found."""

    def __init__(self, event_id: int, **kwargs):
        super().__init__(
            f"Event {event_id} not found",
            resource_type="event",
            resource_id=event_id,
            suggestions=["Check the event ID"],
            **kwargs
        )


class VenueNotFoundError(NotFoundError):
    """Exception raised when a venue is not found."""

    def __init__(self, venue_id: int, **kwargs):
        super().__init__(
            f"Venue {venue_id} not found",
            resource_type="venue",
            resource_id=venue_id,
            **kwargs
        )


class AreaNotFoundError(NotFoundError):
    """Exception raised when an area is not found, or is outside the event's venue."""

    def __init__(self, area_id: int, event_id: Optional[int] = None, **kwargs):
        message = f"Area {area_id} not found"
        if event_id is not None:
            message = f"Area {area_id} not found or does not belong to event {event_id}"
        super().__init__(
            message,
            resource_type="area",
            resource_id=area_id,
            **kwargs
        )


class SeatNotFoundError(NotFoundError):
    """Exception raised when a seat is not found."""

    def __init__(self, seat_id: int, **kwargs):
        super().__init__(
            f"Seat {seat_id} not found",
            resource_type="seat",
            resource_id=seat_id,
            **kwargs
        )


class TicketNotFoundError(NotFoundError):
    """Exception raised when a ticket is not found by ID or QR code."""

    def __init__(self, ticket_ref: Any, **kwargs):
        super().__init__(
            f"Ticket {ticket_ref} not found",
            resource_type="ticket",
            resource_id=ticket_ref,
            **kwargs
        )


class ConfigNotFoundError(NotFoundError):
    """Exception raised when no configuration row exists."""

    def __init__(self, **kwargs):
        super().__init__("Configuration not found", resource_type="config", **kwargs)


class AuthenticationError(GeventosError):
    """Exception raised for authentication failures."""

    def __init__(self, message: str = "Could not validate credentials", **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.UNAUTHORIZED,
            suggestions=["Check your credentials", "Login again"],
            **kwargs
        )


class AuthorizationError(GeventosError):
    """Exception raised for authorization failures."""

    def __init__(self, message: str = "Access denied", required_roles: Optional[List[str]] = None, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.FORBIDDEN,
            details={"required_roles": required_roles} if required_roles else None,
            suggestions=["Contact an administrator for access"],
            **kwargs
        )


class BusinessLogicError(GeventosError):
    """Base exception for business rule violations."""
    pass


class VenueInUseError(BusinessLogicError):
    """Exception raised when deleting a venue that events still reference."""

    def __init__(self, venue_id: int, event_count: int, **kwargs):
        super().__init__(
            f"Cannot delete venue {venue_id}: it is referenced by {event_count} events",
            error_code=ErrorCode.VENUE_IN_USE,
            details={"venue_id": venue_id, "event_count": event_count},
            suggestions=["Move or delete the events first"],
            **kwargs
        )


class AreaNotInVenueError(BusinessLogicError):
    """Exception raised when an area is used with an event held elsewhere."""

    def __init__(self, area_id: int, venue_id: int, **kwargs):
        super().__init__(
            f"Area {area_id} does not exist or does not belong to venue {venue_id}",
            error_code=ErrorCode.AREA_NOT_IN_VENUE,
            details={"area_id": area_id, "venue_id": venue_id},
            **kwargs
        )


class InvalidTicketStateError(BusinessLogicError):
    """Exception raised when checking in a ticket that is not active."""

    def __init__(self, ticket_id: int, current_state: str, **kwargs):
        super().__init__(
            f"Ticket {ticket_id} cannot be checked in: it is {current_state}",
            error_code=ErrorCode.INVALID_TICKET_STATE,
            details={"ticket_id": ticket_id, "current_state": current_state},
            **kwargs
        )


class IntegrityFaultError(GeventosError):
    """Internal invariant violated. Reported to clients as an opaque server error."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.INTEGRITY_FAULT,
            **kwargs
        )

    def to_dict(self) -> Dict[str, Any]:
        """Hide internal detail from API responses."""
        return {
            "error_code": ErrorCode.INTERNAL_ERROR.value,
            "message": "An internal error occurred",
        }


class ConcurrencyError(GeventosError):
    """Exception raised for concurrency-related issues."""

    def __init__(self, message: str, retry_after: int = 1, **kwargs):
        kwargs.setdefault("error_code", ErrorCode.CONCURRENCY_CONFLICT)
        super().__init__(
            message,
            retry_after=retry_after,
            suggestions=["Reload the latest version", "Reapply your changes and retry"],
            **kwargs
        )


class OptimisticLockError(ConcurrencyError):
    """Exception raised when optimistic locking fails."""

    def __init__(self, resource_type: str, resource_id: Any, expected_version: Optional[int] = None, **kwargs):
        details = {"resource_type": resource_type, "resource_id": resource_id}
        if expected_version is not None:
            details["expected_version"] = expected_version
        super().__init__(
            f"{resource_type} {resource_id} was modified by another transaction",
            details=details,
            error_code=ErrorCode.OPTIMISTIC_LOCK_FAILURE,
            **kwargs
        )


class ExternalServiceError(GeventosError):
    """Exception raised for external service failures."""

    def __init__(self, service_name: str, message: str, **kwargs):
        details = kwargs.pop("details", None) or {}
        super().__init__(
            f"{service_name} service error: {message}",
            error_code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            details={"service_name": service_name, **details},
            suggestions=["Try again later", "Contact support if problem persists"],
            **kwargs
        )
