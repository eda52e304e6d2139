import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gcal_api.config import CalendarApiConfig
from gcal_api.dependencies import get_calendar_service, get_config
from gcal_api.errors import (
    CalendarApiError,
    CredentialError,
    EventNotFound,
    MalformedTimestamp,
    RemoteApiError,
    TransportError,
)
from gcal_api.mocks.calendar import DummyCalendarService
from gcal_api.services.calendar.routers import router as calendar_router
from gcal_api.services.calendar.service import CalendarService

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger(__name__)


# --- Lifecycle Events ---
@asynccontextmanager
async def startup_event(app: FastAPI):
    app.state.config = CalendarApiConfig()
    logger.info("🌍 Environment: %s", app.state.config.env.value)

    if app.state.config.use_mock_data:
        logger.info("🎭 STARTING IN DEMO MODE (Mock Data)")
        app.state.calendar_service = DummyCalendarService(app.state.config)
    else:
        app.state.calendar_service = CalendarService(app.state.config)

    # Eager authentication; a failure here is retried on the first request
    try:
        if app.state.calendar_service.authenticate():
            logger.info("Calendar Service authenticated.")
    except CredentialError as e:
        logger.error("❌ Calendar authentication failed at startup: %s", e)

    try:
        yield
    finally:
        app.state.calendar_service = None
        logger.info('Services has been shutdown.')


app = FastAPI(
    title="Google Calendar API",
    description="REST facade over the Google Calendar API",
    version="0.1.0",
    lifespan=startup_event
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calendar_router)


# --- Error Mapping ---
def error_status(exc: CalendarApiError) -> int:
    if isinstance(exc, EventNotFound):
        return 404
    if isinstance(exc, MalformedTimestamp):
        return 400
    if isinstance(exc, RemoteApiError):
        return exc.status_code if 400 <= exc.status_code < 500 else 400
    if isinstance(exc, TransportError):
        return 502
    if isinstance(exc, CredentialError):
        return 503
    return 500


@app.exception_handler(CalendarApiError)
async def calendar_api_error_handler(request: Request, exc: CalendarApiError):
    status_code = error_status(exc)
    if status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc)
    else:
        logger.warning("%s: %s", type(exc).__name__, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


# --- Endpoints ---
@app.get("/health")
async def health_check(config: CalendarApiConfig = Depends(get_config), calendar_service: CalendarService = Depends(get_calendar_service)):
    return {
        "status": "healthy",
        "env": config.env.value,
        "use_mock_data": config.use_mock_data,
        "authenticated": calendar_service.is_authenticated,
    }

@app.get("/config-status")
async def get_config_status(config: CalendarApiConfig = Depends(get_config)):
    return config.summary()


def main():
    uvicorn.run(
        "gcal_api.api:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
    )


if __name__ == "__main__":
    main()
