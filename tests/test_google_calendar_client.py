"""
Tests for the Google Calendar REST client.
"""

from typing import Any, Dict, List

import pendulum
import pytest
import requests

from calstats.adapters.google_calendar_client import GoogleCalendarClient
from calstats.domain.exceptions import DataSourceError


class FakeResponse:
    def __init__(self, payload: Dict[str, Any], status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        return self._payload


class FakeGet:
    """Replays queued responses and records the requests made."""

    def __init__(self, responses: List[FakeResponse]):
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    def __call__(self, url, headers=None, params=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "params": dict(params or {}), "timeout": timeout})
        return self.responses.pop(0)


def _event_item(summary: str, start: str, end: str) -> Dict[str, Any]:
    return {
        "summary": summary,
        "start": {"dateTime": start},
        "end": {"dateTime": end},
        "creator": {"email": "me@x.com", "self": True},
        "attendees": [{"email": "me@x.com", "responseStatus": "accepted", "self": True}],
    }


def test_get_calendar_timezone(monkeypatch):
    fake_get = FakeGet([FakeResponse({"id": "me@x.com", "timeZone": "Europe/Berlin"})])
    monkeypatch.setattr(requests, "get", fake_get)

    client = GoogleCalendarClient(access_token="token")

    assert client.get_calendar_timezone("me@x.com") == "Europe/Berlin"
    assert fake_get.requests[0]["url"] == "https://www.googleapis.com/calendar/v3/calendars/me%40x.com"
    assert fake_get.requests[0]["headers"]["Authorization"] == "Bearer token"


def test_missing_timezone_is_an_error(monkeypatch):
    monkeypatch.setattr(requests, "get", FakeGet([FakeResponse({"id": "me@x.com"})]))

    with pytest.raises(DataSourceError):
        GoogleCalendarClient(access_token="token").get_calendar_timezone("me@x.com")


def test_list_events_follows_pages(monkeypatch):
    fake_get = FakeGet([
        FakeResponse({
            "items": [_event_item("First", "2024-11-25T09:00:00+01:00", "2024-11-25T09:30:00+01:00")],
            "nextPageToken": "page-2",
        }),
        FakeResponse({
            "items": [
                _event_item("Second", "2024-11-26T09:00:00+01:00", "2024-11-26T10:00:00+01:00"),
                {"summary": "Holiday", "start": {"date": "2024-11-27"}, "end": {"date": "2024-11-28"}},
            ],
        }),
    ])
    monkeypatch.setattr(requests, "get", fake_get)

    time_min = pendulum.parse("2024-11-25 07:00", tz="Europe/Berlin")
    events = GoogleCalendarClient(access_token="token").list_events(
        "me@x.com", time_min, time_min.add(days=7)
    )

    assert [event.title for event in events] == ["First", "Second", "Holiday"]
    assert events[0].creator_is_self
    assert events[0].attendees[0].response_status == "accepted"
    assert events[2].all_day

    first_params = fake_get.requests[0]["params"]
    assert first_params["singleEvents"] == "true"
    assert first_params["showDeleted"] == "false"
    assert first_params["orderBy"] == "startTime"
    assert first_params["timeMin"] == "2024-11-25T07:00:00+01:00"
    assert "pageToken" not in first_params
    assert fake_get.requests[1]["params"]["pageToken"] == "page-2"


def test_http_error_raises_data_source_error(monkeypatch):
    monkeypatch.setattr(requests, "get", FakeGet([FakeResponse({}, status_code=404)]))

    with pytest.raises(DataSourceError, match="404"):
        GoogleCalendarClient(access_token="token").get_calendar_timezone("nobody@x.com")


def test_connection_error_raises_data_source_error(monkeypatch):
    def failing_get(*args, **kwargs):
        raise requests.exceptions.ConnectionError("network down")

    monkeypatch.setattr(requests, "get", failing_get)

    with pytest.raises(DataSourceError, match="network down"):
        GoogleCalendarClient(access_token="token").test_connection()
