from fastapi import Request
from gcal_api.config import CalendarApiConfig
from gcal_api.services.calendar.service import CalendarService

def get_config(request: Request) -> CalendarApiConfig:
    return request.app.state.config

def get_calendar_service(request: Request) -> CalendarService:
    return request.app.state.calendar_service
