"""
Tests for the CalendarStatsService orchestration layer.
"""

from typing import Dict, List

import pendulum
import pytest

from calstats.domain.aggregator import SlotAggregator
from calstats.domain.classifier import EventClassifier
from calstats.domain.exceptions import DataSourceError
from calstats.domain.models import Attendee, CalendarEvent, Category, WindowPolicy
from calstats.domain.slot_generator import SlotGenerator
from calstats.services.calendar_stats import CalendarStatsService, WindowSettings


class StubCalendarClient:
    """Minimal stub matching CalendarClientProtocol."""

    def __init__(self, events: Dict[str, List[CalendarEvent]], timezone: str = "Europe/Berlin"):
        self._events = events
        self._timezone = timezone
        self.calls: List[Dict[str, str]] = []

    def get_calendar_timezone(self, calendar_id):
        if calendar_id not in self._events:
            raise DataSourceError(f"Calendar not found: {calendar_id}")
        return self._timezone

    def list_events(self, calendar_id, time_min, time_max):
        self.calls.append(
            {
                "calendar_id": calendar_id,
                "start": time_min.to_datetime_string(),
                "end": time_max.to_datetime_string(),
            }
        )
        return self._events[calendar_id]


def _meeting(viewer: str) -> CalendarEvent:
    return CalendarEvent(
        title="Sync",
        start_time="2024-11-25T09:00:00+01:00",
        end_time="2024-11-25T10:00:00+01:00",
        attendees=[Attendee(email=viewer, response_status="accepted")],
    )


def _build_service(client: StubCalendarClient, **window) -> CalendarStatsService:
    return CalendarStatsService(
        calendar_client=client,
        slot_generator=SlotGenerator(),
        aggregator=SlotAggregator(EventClassifier()),
        window=WindowSettings(start="2024/11/25 07:00:00", **window),
    )


def test_summarize_queries_generated_window():
    """Events are fetched for exactly the generated window."""
    client = StubCalendarClient({"a@example.com": [_meeting("a@example.com")]})
    service = _build_service(client)

    summary = service.summarize("a@example.com")

    assert client.calls == [
        {
            "calendar_id": "a@example.com",
            "start": "2024-11-25 07:00:00",
            "end": "2024-12-02 07:00:00",
        }
    ]
    assert summary.viewer == "a@example.com"
    assert summary.timezone == "Europe/Berlin"
    assert summary.total_slots == 10
    assert summary.free_slots == 9
    assert summary.hours(Category.MEETING) == 1.0


def test_business_days_window():
    client = StubCalendarClient({"a@example.com": []})
    service = _build_service(client, policy=WindowPolicy.BUSINESS_DAYS, days=3)

    summary = service.summarize("a@example.com")

    assert summary.total_slots == 6
    assert summary.free_slots == 6
    assert client.calls[0]["end"] == "2024-11-28 07:00:00"


def test_window_uses_calendar_timezone():
    """Slots are generated in the calendar's own timezone."""
    client = StubCalendarClient({"a@example.com": []}, timezone="America/New_York")
    service = _build_service(client)

    window = service.build_window("America/New_York")

    assert window.start == pendulum.parse("2024-11-25 07:00", tz="America/New_York")
    assert window.slots[0].start.timezone_name == "America/New_York"


def test_summarize_all_is_sequential_and_fails_fast():
    """Processing stops at the first failing calendar."""
    client = StubCalendarClient(
        {
            "a@example.com": [_meeting("a@example.com")],
            "c@example.com": [],
        }
    )
    service = _build_service(client)
    summaries = []

    with pytest.raises(DataSourceError):
        for summary in service.summarize_all(["a@example.com", "b@example.com", "c@example.com"]):
            summaries.append(summary)

    assert [summary.viewer for summary in summaries] == ["a@example.com"]
    assert [call["calendar_id"] for call in client.calls] == ["a@example.com"]


def test_default_start_is_today():
    client = StubCalendarClient({"a@example.com": []})
    service = CalendarStatsService(
        calendar_client=client,
        slot_generator=SlotGenerator(),
        aggregator=SlotAggregator(EventClassifier()),
    )

    window = service.build_window("Europe/Berlin")

    assert window.start.date() == pendulum.now("Europe/Berlin").date()
    assert window.start.hour == 7
