"""Error types raised by the calendar core.

Every failure the core can report derives from CalendarError, so a
renderer can catch one type and show `message`. None of them is fatal:
validation and lookup errors leave state untouched, persistence errors
leave the in-memory collection authoritative.
"""

from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base exception for the calendar core.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code.
        details: Optional additional context about the error.
    """

    default_message = "Calendar error"
    default_code = "CALENDAR_ERROR"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "code": self.code,
            "detail": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(CalendarError):
    """Rejected event data (empty title, missing date, bad colour, bad times)."""

    default_message = "Invalid event"
    default_code = "VALIDATION_ERROR"


class NotFound(CalendarError):
    """No event with the requested id."""

    default_message = "Event not found"
    default_code = "NOT_FOUND"

    def __init__(self, event_id: str, **kwargs: Any) -> None:
        self.event_id = event_id
        details = kwargs.pop("details", None) or {}
        details["id"] = event_id
        super().__init__(kwargs.pop("message", None) or f"Event '{event_id}' not found",
                         details=details, **kwargs)


class PersistenceUnavailable(CalendarError):
    """The Store collaborator could not read or write the event file."""

    default_message = "Event storage unavailable"
    default_code = "PERSISTENCE_UNAVAILABLE"


class UnknownAction(CalendarError):
    """A renderer dispatched an action id that is not registered."""

    default_message = "Unknown action"
    default_code = "UNKNOWN_ACTION"
