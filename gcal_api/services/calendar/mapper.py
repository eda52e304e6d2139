"""
Translates an inbound EventRequest into a Calendar API v3 event resource.
"""
import re
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from typing import Any, Dict, List, Optional

from gcal_api.config import CalendarApiConfig
from gcal_api.errors import MalformedTimestamp
from gcal_api.lib.shared.models.calendar import EventRequest

DATE_ONLY = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
DATE_TIME = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|([+-])(\d{2}):(\d{2}))?",
    re.ASCII,
)


def parse_event_time(value: Optional[str], timezone: Optional[str], field: str) -> Dict[str, Any]:
    """
    Build an EventDateTime resource from an RFC 3339 string.

    The timestamp is validated locally and passed through unchanged, the
    timezone is never defaulted. A bare ``YYYY-MM-DD`` becomes an all-day
    ``date`` rather than a ``dateTime``.
    """
    if not value or not value.strip():
        raise MalformedTimestamp(field, value)
    value = value.strip()

    date_match = DATE_ONLY.fullmatch(value)
    if date_match:
        year, month, day = (int(g) for g in date_match.groups())
        try:
            datetime(year, month, day)
        except ValueError:
            raise MalformedTimestamp(field, value)
        event_time = {"date": value}
    else:
        match = DATE_TIME.fullmatch(value)
        if not match:
            raise MalformedTimestamp(field, value)
        year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
        try:
            datetime(year, month, day, hour, minute, second)
        except ValueError:
            raise MalformedTimestamp(field, value)
        if match.group(9) and (int(match.group(10)) > 23 or int(match.group(11)) > 59):
            raise MalformedTimestamp(field, value)
        event_time = {"dateTime": value}

    if timezone is not None:
        event_time["timeZone"] = timezone
    return event_time


def event_datetime(event_time: Dict[str, Any]) -> datetime:
    """Timezone-aware instant of an EventDateTime resource, naive values read as UTC."""
    raw = event_time.get("dateTime") or event_time.get("date")
    date_match = DATE_ONLY.fullmatch(raw)
    if date_match:
        return datetime(*(int(g) for g in date_match.groups()), tzinfo=dt_timezone.utc)

    match = DATE_TIME.fullmatch(raw)
    if not match:
        raise ValueError(f"Not an RFC 3339 timestamp: {raw!r}")
    fraction = match.group(7)
    micros = int(fraction[1:7].ljust(6, "0")) if fraction else 0
    tz = dt_timezone.utc
    if match.group(9):
        offset = timedelta(hours=int(match.group(10)), minutes=int(match.group(11)))
        tz = dt_timezone(-offset if match.group(9) == "-" else offset)
    return datetime(*(int(g) for g in match.groups()[:6]), micros, tzinfo=tz)


def build_attendees(emails: List[str]) -> List[Dict[str, str]]:
    return [{"email": email} for email in emails]


def build_reminders(config: CalendarApiConfig) -> Dict[str, Any]:
    policy = config.reminder_policy
    return {
        "useDefault": policy.use_default,
        "overrides": [{"method": policy.method, "minutes": policy.minutes}],
    }


def build_conference_data(config: CalendarApiConfig) -> Dict[str, Any]:
    policy = config.conference_policy
    return {
        "createRequest": {
            "requestId": policy.request_id,
            "conferenceSolutionKey": {"type": policy.solution_type},
        }
    }


def build_event_body(request: EventRequest, config: CalendarApiConfig, *, clear_conference: bool = False) -> Dict[str, Any]:
    """
    Map an EventRequest onto the event resource sent to insert/update.

    Args:
        request: inbound event description
        config: supplies the fixed reminder and conferencing policies
        clear_conference: set on the update path, so that a request without
            ``meeting`` explicitly nulls any conference already attached

    Returns:
        A dict ready to be passed as ``body=`` to the events resource.
    """
    body: Dict[str, Any] = {}
    for key in ("summary", "location", "description"):
        value = getattr(request, key)
        if value is not None:
            body[key] = value

    body["start"] = parse_event_time(request.start_date_time, request.time_zone, "eventStartDateTime")
    body["end"] = parse_event_time(request.end_date_time, request.time_zone, "eventEndDateTime")
    body["attendees"] = build_attendees(request.attendees)
    body["reminders"] = build_reminders(config)

    if request.meeting:
        body["conferenceData"] = build_conference_data(config)
    elif clear_conference:
        body["conferenceData"] = None

    return body
