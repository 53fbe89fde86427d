"""
Google Calendar REST API client for fetching calendar data.
"""

from typing import Any, Dict, List
from urllib.parse import quote

import requests
from pendulum import DateTime

from ..domain.exceptions import DataSourceError
from ..domain.models import CalendarEvent


class GoogleCalendarClient:
    """
    Client for Google Calendar API v3 read operations.

    Uses ``calendars.get`` for the calendar timezone and ``events.list`` for
    the expanded event instances of a time window.
    """

    CALENDAR_API_ENDPOINT = "https://www.googleapis.com/calendar/v3"

    def __init__(self, access_token: str, timeout: int = 30):
        """
        Initialize the Calendar API client.

        Args:
            access_token: Valid Google OAuth access token
            timeout: Request timeout in seconds
        """
        self.access_token = access_token
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json"
        }

    def get_calendar_timezone(self, calendar_id: str) -> str:
        """
        Get the IANA timezone of a calendar.

        Raises:
            DataSourceError: If the API call fails or returns no timezone
        """
        data = self._get(f"/calendars/{quote(calendar_id, safe='')}")

        timezone = data.get("timeZone")
        if not timezone:
            raise DataSourceError(f"Calendar {calendar_id} has no timezone")

        return timezone

    def list_events(
        self,
        calendar_id: str,
        time_min: DateTime,
        time_max: DateTime
    ) -> List[CalendarEvent]:
        """
        List the single event instances of a calendar within [time_min, time_max).

        Deleted events are excluded and recurring series are expanded by the
        API; all result pages are followed.

        Args:
            calendar_id: Calendar identifier (usually the owner's email)
            time_min: Start of the time window
            time_max: End of the time window

        Returns:
            Events ordered by start time

        Raises:
            DataSourceError: If the API call fails
        """
        path = f"/calendars/{quote(calendar_id, safe='')}/events"
        params: Dict[str, Any] = {
            "showDeleted": "false",
            "singleEvents": "true",
            "orderBy": "startTime",
            "timeMin": time_min.to_rfc3339_string(),
            "timeMax": time_max.to_rfc3339_string(),
        }

        events: List[CalendarEvent] = []

        while True:
            data = self._get(path, params=params)

            for item in data.get("items", []):
                events.append(CalendarEvent.from_api(item))

            page_token = data.get("nextPageToken")
            if not page_token:
                break
            params["pageToken"] = page_token

        return events

    def test_connection(self) -> Dict[str, Any]:
        """
        Test the connection and authentication by fetching the primary calendar.

        Returns:
            Calendar metadata

        Raises:
            DataSourceError: If connection test fails
        """
        return self._get("/calendars/primary")

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        url = f"{self.CALENDAR_API_ENDPOINT}{path}"

        try:
            response = requests.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            raise DataSourceError(f"Failed to fetch {path} from Google Calendar: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Invalid JSON from Google Calendar for {path}: {e}") from e
