import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response

from gcal_api.dependencies import get_calendar_service
from gcal_api.lib.shared.models.calendar import EventRequest
from gcal_api.services.calendar.service import CalendarService

logger = logging.getLogger(__name__)

# Sync handlers: FastAPI runs them in its threadpool, the Google client blocks
router = APIRouter(prefix="/api/google-calendar-api", tags=["calendar"])


@router.get("")
def get_calendar_events(calendar_service: CalendarService = Depends(get_calendar_service)) -> List[Dict[str, Any]]:
    logger.info("Entering get_calendar_events()")
    events = calendar_service.list_upcoming()
    logger.info("Leaving get_calendar_events()")
    return events


@router.post("")
def create_calendar_event(event_request: EventRequest, calendar_service: CalendarService = Depends(get_calendar_service)) -> str:
    logger.info("Entering create_calendar_event()")
    event_id = calendar_service.create_event(event_request)
    logger.info("Leaving create_calendar_event()")
    return event_id


@router.put("/{event_id}")
def update_calendar_event(event_id: str, event_request: EventRequest, calendar_service: CalendarService = Depends(get_calendar_service)):
    logger.info("Entering update_calendar_event()")
    calendar_service.update_event(event_id, event_request)
    logger.info("Leaving update_calendar_event()")
    return Response(status_code=200)


@router.delete("/{event_id}")
def delete_calendar_event(event_id: str, calendar_service: CalendarService = Depends(get_calendar_service)):
    logger.info("Entering delete_calendar_event()")
    calendar_service.delete_event(event_id)
    logger.info("Leaving delete_calendar_event()")
    return Response(status_code=200)
