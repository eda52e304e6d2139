import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httplib2
from google.auth.exceptions import RefreshError
from google.auth.exceptions import TransportError as AuthTransportError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from gcal_api.config import CalendarApiConfig
from gcal_api.errors import (
    CredentialError,
    EventNotFound,
    RemoteApiError,
    TransportError,
)
from gcal_api.lib.shared.models.calendar import EventRequest
from gcal_api.models import MissingEventPolicy
from gcal_api.services.calendar.credentials import authorized_http, load_credentials
from gcal_api.services.calendar.mapper import build_event_body

logger = logging.getLogger(__name__)

# Statuses the Calendar API uses for an unknown or already deleted event.
MISSING_STATUSES = (404, 410)


class CalendarService:
    """
    Gateway to one Google Calendar, authenticated as a service account
    impersonating a workspace user.

    Every operation is a single blocking round trip, or a get followed by a
    mutation for delete/update. Remote failures are translated into the
    gcal_api error types and propagated, nothing is retried.
    """

    def __init__(self, config: CalendarApiConfig,
                 credentials_loader: Callable[[CalendarApiConfig], Any] = load_credentials,
                 service_builder: Callable[..., Any] = build):
        self.config = config
        self.creds = None
        self._credentials_loader = credentials_loader
        self._service_builder = service_builder
        self._lock = threading.Lock()

    def authenticate(self) -> bool:
        """Load credentials once for the process lifetime. Raises CredentialError."""
        if self.creds is not None:
            return True
        with self._lock:
            if self.creds is None:
                self.creds = self._credentials_loader(self.config)
        return True

    @property
    def is_authenticated(self) -> bool:
        return self.creds is not None

    def _events(self):
        # A fresh Resource per call: httplib2.Http is not safe to share between threads
        self.authenticate()
        http = authorized_http(self.creds, self.config.application_name)
        service = self._service_builder('calendar', 'v3', http=http, cache_discovery=False)
        return service.events()

    def _execute(self, request, operation: str, event_id: Optional[str] = None) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            status = e.resp.status
            reason = e.reason
            if status >= 500:
                raise TransportError(f"Calendar API unavailable ({status}): {reason}",
                                     operation=operation, event_id=event_id) from e
            if status == 401:
                # Our own token or delegation was refused, not the caller's request
                raise CredentialError(f"Calendar API refused our credentials: {reason}",
                                      operation=operation, event_id=event_id) from e
            raise RemoteApiError(f"Calendar API rejected the request: {reason}", status_code=status,
                                 reason=reason, operation=operation, event_id=event_id) from e
        except RefreshError as e:
            raise CredentialError(f"Could not obtain an access token: {e}",
                                  operation=operation, event_id=event_id) from e
        except (httplib2.HttpLib2Error, AuthTransportError, OSError) as e:
            raise TransportError(f"Calendar API request failed: {e}",
                                 operation=operation, event_id=event_id) from e

    def _get_existing(self, events, event_id: str, operation: str) -> Optional[Dict[str, Any]]:
        """Fetch an event, returning None when the remote reports it missing."""
        try:
            return self._execute(
                events.get(calendarId=self.config.calendar_id, eventId=event_id),
                operation, event_id,
            )
        except RemoteApiError as e:
            if e.status_code not in MISSING_STATUSES:
                raise
        if self.config.missing_event_policy == MissingEventPolicy.RAISE:
            raise EventNotFound(event_id, operation=operation)
        logger.warning("Event %s not found, skipping %s", event_id, operation)
        return None

    def list_upcoming(self) -> List[Dict[str, Any]]:
        """List the next page of upcoming events, recurring events expanded."""
        events = self._events()
        now = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        result = self._execute(
            events.list(
                calendarId=self.config.calendar_id,
                timeMin=now,
                maxResults=self.config.page_size,
                orderBy='startTime',
                singleEvents=True,
            ),
            "list_upcoming",
        )

        items = result.get('items', [])
        if not items:
            logger.info("No upcoming events found.")
        for event in items:
            start = event.get('start', {})
            logger.info("%s (%s)", event.get('summary'), start.get('dateTime', start.get('date')))
        return items

    def create_event(self, request: EventRequest) -> str:
        body = build_event_body(request, self.config)
        events = self._events()
        created = self._execute(
            events.insert(
                calendarId=self.config.calendar_id,
                body=body,
                sendNotifications=True,
                conferenceDataVersion=1,
            ),
            "create_event",
        )
        logger.info("Event created: %s", created.get('htmlLink'))
        return created['id']

    def delete_event(self, event_id: str) -> None:
        events = self._events()
        if self._get_existing(events, event_id, "delete_event") is None:
            return
        self._execute(
            events.delete(calendarId=self.config.calendar_id, eventId=event_id, sendNotifications=True),
            "delete_event", event_id,
        )
        logger.info("Event deleted: %s", event_id)

    def update_event(self, event_id: str, request: EventRequest) -> None:
        body = build_event_body(request, self.config, clear_conference=True)
        events = self._events()
        if self._get_existing(events, event_id, "update_event") is None:
            return
        self._execute(
            events.update(
                calendarId=self.config.calendar_id,
                eventId=event_id,
                body=body,
                sendNotifications=True,
                conferenceDataVersion=1,
            ),
            "update_event", event_id,
        )
        logger.info("Event updated: %s", event_id)
