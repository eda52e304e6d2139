import os
from pathlib import Path

from gcal_api.models import ConferencePolicy, Environment, MissingEventPolicy, ReminderPolicy

DEFAULT_MOCK_STORE_PATH = str(Path(__file__).parent / "data" / "mock_store.json")


class CalendarApiConfig:
    def __init__(self):
        # Determine Environment
        env_str = os.getenv("GCAL_ENV", "dev").lower()
        try:
            self.env = Environment(env_str)
        except ValueError:
            self.env = Environment.DEV

        self.service_account_file = os.getenv("GCAL_SERVICE_ACCOUNT_FILE", "service-account.json")
        self.calendar_id = os.getenv("GCAL_CALENDAR_ID", "primary")
        self.delegated_user = os.getenv("GCAL_DELEGATED_USER") or None
        self.application_name = os.getenv("GCAL_APPLICATION_NAME", "google-calendar-api")
        self.scopes = ["https://www.googleapis.com/auth/calendar"]
        self.page_size = int(os.getenv("GCAL_PAGE_SIZE", 10))

        policy_str = os.getenv("GCAL_MISSING_EVENT_POLICY", "ignore").lower()
        try:
            self.missing_event_policy = MissingEventPolicy(policy_str)
        except ValueError:
            self.missing_event_policy = MissingEventPolicy.IGNORE

        self.reminder_policy = ReminderPolicy(
            method=os.getenv("GCAL_REMINDER_METHOD", "popup"),
            minutes=int(os.getenv("GCAL_REMINDER_MINUTES", 2)),
        )
        self.conference_policy = ConferencePolicy(
            solution_type=os.getenv("GCAL_CONFERENCE_TYPE", "hangoutsMeet"),
            request_id=os.getenv("GCAL_CONFERENCE_REQUEST_ID", "sample123"),
        )
        self.mock_store_path = os.getenv("GCAL_MOCK_STORE_PATH", DEFAULT_MOCK_STORE_PATH)

        # Environment Configuration
        if self.env == Environment.TEST:
            self.use_mock_data = True
        elif self.env == Environment.DEV:
            self.use_mock_data = os.getenv("USE_MOCK_DATA", "false").lower() == "true"
        else: # PROD
            self.use_mock_data = False

    def summary(self) -> dict:
        """Non-secret view of the configuration, safe to return over HTTP."""
        return {
            "env": self.env.value,
            "use_mock_data": self.use_mock_data,
            "calendar_id": self.calendar_id,
            "delegated_user": self.delegated_user,
            "application_name": self.application_name,
            "page_size": self.page_size,
            "missing_event_policy": self.missing_event_policy.value,
        }
