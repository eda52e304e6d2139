from typing import Optional


class CalendarApiError(Exception):
    """Base class for every failure surfaced by the calendar gateway."""

    def __init__(self, message: str, operation: Optional[str] = None, event_id: Optional[str] = None):
        self.message = message
        self.operation = operation
        self.event_id = event_id
        super().__init__(message)

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.event_id:
            context.append(f"event_id={self.event_id}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class CredentialError(CalendarApiError):
    """Service account key could not be loaded, scoped or delegated."""


class TransportError(CalendarApiError):
    """The remote call failed at the network or server level."""


class RemoteApiError(CalendarApiError):
    """The Calendar API rejected the request."""

    def __init__(self, message: str, status_code: int = 400, reason: Optional[str] = None,
                 operation: Optional[str] = None, event_id: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        super().__init__(message, operation=operation, event_id=event_id)


class EventNotFound(RemoteApiError):
    def __init__(self, event_id: str, operation: Optional[str] = None):
        super().__init__("Event not found", status_code=404, reason="notFound",
                         operation=operation, event_id=event_id)


class MalformedTimestamp(CalendarApiError, ValueError):
    def __init__(self, field: str, value: Optional[str]):
        self.field = field
        self.value = value
        super().__init__(f"Malformed timestamp for '{field}': {value!r}")
