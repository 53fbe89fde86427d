"""
Mock Google Calendar client for running without Google authentication.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from pendulum import DateTime

from ..domain.exceptions import DataSourceError
from ..domain.models import CalendarEvent


class MockCalendarClient:
    """
    Mock client that simulates Google Calendar API responses.

    Events are loaded from mock_calendar_data.json. Each entry names a day
    offset and local times instead of absolute instants, so the data always
    falls into the requested window:

        {"calendarId": "...", "day": 0, "start": "09:00", "end": "09:30", ...}
    """

    def __init__(self, data_file: Path | None = None, timezone: str = "Europe/Berlin"):
        """
        Initialize the mock client.

        Args:
            data_file: Optional path to a JSON fixture
            timezone: Timezone reported for every calendar
        """
        self.data_file = data_file or Path(__file__).parent / "mock_calendar_data.json"
        self.timezone = timezone
        self._load_calendar_data()

    def _load_calendar_data(self):
        """Load mock calendar data from JSON file."""
        if not self.data_file.exists():
            self.calendar_events: List[Dict[str, Any]] = []
            return

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                self.calendar_events = json.load(f)
        except (OSError, ValueError) as exc:
            raise DataSourceError(f"Could not load mock data {self.data_file}: {exc}") from exc

    def get_calendar_timezone(self, calendar_id: str) -> str:
        return self.timezone

    def list_events(
        self,
        calendar_id: str,
        time_min: DateTime,
        time_max: DateTime
    ) -> List[CalendarEvent]:
        """
        Materialize the fixture events of a calendar inside the window.

        Args:
            calendar_id: Calendar identifier
            time_min: Start of the time window
            time_max: End of the time window

        Returns:
            Events ordered by start time
        """
        first_day = time_min.in_timezone(self.timezone).start_of("day")
        items = []

        for entry in self.calendar_events:
            if entry.get("calendarId") != calendar_id:
                continue

            item, start, end = self._to_api_item(entry, first_day)
            # Check if event overlaps with requested time range
            if start < time_max and end > time_min:
                items.append(item)

        items.sort(key=lambda item: item["start"].get("dateTime") or item["start"]["date"])
        return [CalendarEvent.from_api(item) for item in items]

    def _to_api_item(
        self, entry: Dict[str, Any], first_day: DateTime
    ) -> Tuple[Dict[str, Any], DateTime, DateTime]:
        """Build a Google-shaped event resource and the instants it spans."""
        day = first_day.add(days=int(entry.get("day", 0)))

        item: Dict[str, Any] = {
            "summary": entry.get("summary", ""),
            "description": entry.get("description", ""),
            "creator": {"email": entry.get("creator", ""), "self": entry.get("creatorSelf", False)},
            "attendees": entry.get("attendees", []),
        }

        if entry.get("allDay"):
            next_day = day.add(days=1)
            item["start"] = {"date": day.to_date_string()}
            item["end"] = {"date": next_day.to_date_string()}
            return item, day, next_day

        start = self._at(day, entry["start"])
        end = self._at(day, entry["end"])
        item["start"] = {"dateTime": start.to_rfc3339_string()}
        item["end"] = {"dateTime": end.to_rfc3339_string()}

        if "originalStart" in entry:
            original = self._at(day, entry["originalStart"])
            item["originalStartTime"] = {"dateTime": original.to_rfc3339_string()}

        return item, start, end

    @staticmethod
    def _at(day: DateTime, hh_mm: str) -> DateTime:
        hour, minute = (int(part) for part in hh_mm.split(":"))
        return day.set(hour=hour, minute=minute)

    def test_connection(self) -> Dict[str, Any]:
        """
        Mock connection test.

        Returns:
            Mock calendar metadata
        """
        return {
            "id": "mock.user@example.com",
            "summary": "Mock User",
            "timeZone": self.timezone
        }
