import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from gcal_api.config import CalendarApiConfig
from gcal_api.errors import EventNotFound, RemoteApiError
from gcal_api.lib.shared.models.calendar import EventRequest
from gcal_api.mocks.store import MockDataStore
from gcal_api.models import MissingEventPolicy
from gcal_api.services.calendar.mapper import build_event_body, event_datetime

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("summary", "location", "description", "start", "end", "attendees", "reminders")


class DummyCalendarService:
    """Drop-in replacement for CalendarService that never leaves the process."""

    def __init__(self, config: CalendarApiConfig):
        self.config = config
        self.store = MockDataStore(config.mock_store_path)
        logger.info("📅 DummyCalendarService Initialized (Mock Data)")

    def authenticate(self) -> bool:
        return True

    @property
    def is_authenticated(self) -> bool:
        return True

    def list_upcoming(self) -> List[Dict[str, Any]]:
        now = datetime.now(timezone.utc)
        upcoming = [e for e in self.store.get_calendar_events() if event_datetime(e["end"]) > now]
        upcoming.sort(key=lambda e: event_datetime(e["start"]))
        return upcoming[:self.config.page_size]

    def create_event(self, request: EventRequest) -> str:
        body = build_event_body(request, self.config)
        self._check_time_range(body, "create_event")

        event_id = f"mock_{uuid4().hex[:12]}"
        event = {
            "id": event_id,
            "status": "confirmed",
            "htmlLink": f"https://calendar.google.com/calendar/event?eid={event_id}",
            **body,
        }
        self._apply_conference(event, body)
        self.store.put_event(event)
        return event_id

    def delete_event(self, event_id: str) -> None:
        if not self._exists(event_id, "delete_event"):
            return
        self.store.remove_event(event_id)

    def update_event(self, event_id: str, request: EventRequest) -> None:
        body = build_event_body(request, self.config, clear_conference=True)
        if not self._exists(event_id, "update_event"):
            return
        self._check_time_range(body, "update_event", event_id)

        event = self.store.get_event(event_id)
        for key in MUTABLE_FIELDS:
            if key in body:
                event[key] = body[key]
            else:
                event.pop(key, None)
        self._apply_conference(event, body)
        self.store.put_event(event)

    def _exists(self, event_id: str, operation: str) -> bool:
        if self.store.get_event(event_id) is not None:
            return True
        if self.config.missing_event_policy == MissingEventPolicy.RAISE:
            raise EventNotFound(event_id, operation=operation)
        logger.warning("Event %s not found, skipping %s", event_id, operation)
        return False

    @staticmethod
    def _check_time_range(body: Dict[str, Any], operation: str, event_id: str = None) -> None:
        # Same rejection the Calendar API gives for end <= start
        if event_datetime(body["end"]) <= event_datetime(body["start"]):
            raise RemoteApiError("The specified time range is empty.", status_code=400,
                                 reason="timeRangeEmpty", operation=operation, event_id=event_id)

    @staticmethod
    def _apply_conference(event: Dict[str, Any], body: Dict[str, Any]) -> None:
        if "conferenceData" not in body:
            return
        if body["conferenceData"] is None:
            event.pop("conferenceData", None)
            event.pop("hangoutLink", None)
            return
        code = uuid4().hex[:10]
        link = f"https://meet.google.com/{code[:3]}-{code[3:7]}-{code[7:]}"
        event["hangoutLink"] = link
        event["conferenceData"] = {
            **body["conferenceData"],
            "entryPoints": [{"entryPointType": "video", "uri": link}],
        }
