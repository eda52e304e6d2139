from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from gcal_api.api import app
from gcal_api.config import CalendarApiConfig
from gcal_api.services.calendar.service import CalendarService

@pytest.fixture
def test_config(monkeypatch):
    """Test environment configuration, pointed at a fixed calendar and user."""
    monkeypatch.setenv("GCAL_ENV", "test")
    monkeypatch.setenv("GCAL_CALENDAR_ID", "team-calendar@group.calendar.google.com")
    monkeypatch.setenv("GCAL_DELEGATED_USER", "workspace-user@example.com")
    monkeypatch.delenv("GCAL_MISSING_EVENT_POLICY", raising=False)
    monkeypatch.delenv("GCAL_PAGE_SIZE", raising=False)
    return CalendarApiConfig()

@pytest.fixture
def google_service():
    """Stands in for the discovery Resource returned by googleapiclient.discovery.build."""
    return MagicMock(name="calendar_v3")

@pytest.fixture
def events(google_service):
    return google_service.events.return_value

@pytest.fixture
def credentials_loader():
    return MagicMock(name="load_credentials", return_value=MagicMock(name="credentials"))

@pytest.fixture
def calendar_service(test_config, google_service, credentials_loader):
    builder = MagicMock(name="build", return_value=google_service)
    return CalendarService(test_config, credentials_loader=credentials_loader, service_builder=builder)

@pytest.fixture
def client(test_config):
    """TestClient over the app in demo mode (GCAL_ENV=test forces mock data)."""
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
