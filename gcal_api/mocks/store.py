import copy
import json
import logging
import os
import threading
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class MockDataStore:
    def __init__(self, data_path: str):
        self.data_path = data_path
        self._lock = threading.Lock()
        self._events: Dict[str, Dict[str, Any]] = {
            event["id"]: event for event in self._load_data().get("calendar_events", [])
        }

    def _load_data(self) -> Dict[str, Any]:
        """Loads the seed JSON data from disk."""
        abs_path = os.path.abspath(self.data_path)
        if not os.path.exists(abs_path):
            logger.warning("⚠️ Mock Data not found at %s", abs_path)
            return {"calendar_events": []}

        try:
            with open(abs_path, 'r') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("❌ Error loading mock data: %s", e)
            return {"calendar_events": []}

    def get_calendar_events(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(event) for event in self._events.values()]

    def get_event(self, event_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            event = self._events.get(event_id)
            return copy.deepcopy(event) if event else None

    def put_event(self, event: Dict[str, Any]) -> None:
        with self._lock:
            self._events[event["id"]] = copy.deepcopy(event)

    def remove_event(self, event_id: str) -> bool:
        with self._lock:
            return self._events.pop(event_id, None) is not None
