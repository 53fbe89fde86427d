"""
Application service for computing calendar statistics.

The service coordinates fetching calendar data via a calendar client adapter
and delegates slot generation and aggregation to the domain layer. This keeps
the CLI thin and allows the calendar dependency to be replaced in tests via a
simple protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Protocol

from pendulum import DateTime

from ..domain.aggregator import SlotAggregator
from ..domain.models import CalendarEvent, CalendarSummary, SlotWindow, WindowPolicy
from ..domain.slot_generator import SlotGenerator, default_start


class CalendarClientProtocol(Protocol):
    """Protocol describing the calendar client behaviour needed by the service."""

    def get_calendar_timezone(self, calendar_id: str) -> str:
        """Return the IANA timezone of the calendar."""

    def list_events(
        self,
        calendar_id: str,
        time_min: DateTime,
        time_max: DateTime,
    ) -> List[CalendarEvent]:
        """Return expanded, non-deleted events ordered by start time."""


@dataclass(frozen=True)
class WindowSettings:
    """Reporting window parameters shared by every calendar of a run."""
    start: str | None = None
    start_hour: int = 7
    policy: WindowPolicy = WindowPolicy.ELAPSED_HOURS
    duration_hours: int = 24 * 7
    days: int = 7

    def build(self, generator: SlotGenerator, timezone: str) -> SlotWindow:
        """Generate the slots of this window in the given timezone."""
        start = self.start or default_start(timezone, self.start_hour)

        return generator.generate(
            timezone,
            start,
            policy=self.policy,
            duration_hours=self.duration_hours,
            days=self.days,
        )


class CalendarStatsService:
    """
    Orchestrates calendar retrieval, slot generation and aggregation.

    Calendars are processed one after another; nothing but the immutable
    settings is shared between them.
    """

    def __init__(
        self,
        calendar_client: CalendarClientProtocol,
        slot_generator: SlotGenerator,
        aggregator: SlotAggregator,
        window: WindowSettings | None = None,
    ) -> None:
        self._calendar_client = calendar_client
        self._slot_generator = slot_generator
        self._aggregator = aggregator
        self._window = window or WindowSettings()

    def build_window(self, timezone: str) -> SlotWindow:
        """Generate the slots of the reporting window in the given timezone."""
        return self._window.build(self._slot_generator, timezone)

    def summarize(self, calendar_id: str) -> CalendarSummary:
        """
        Compute the summary of one calendar.

        Raises:
            CalstatsError: On any failure; nothing is skipped
        """
        timezone = self._calendar_client.get_calendar_timezone(calendar_id)
        window = self.build_window(timezone)

        events = self._calendar_client.list_events(
            calendar_id,
            time_min=window.start,
            time_max=window.end,
        )

        return self._aggregator.aggregate(
            viewer=calendar_id,
            timezone=timezone,
            slots=window.slots,
            events=events,
        )

    def summarize_all(self, calendar_ids: Iterable[str]) -> Iterator[CalendarSummary]:
        """Yield summaries one calendar at a time, stopping at the first error."""
        for calendar_id in calendar_ids:
            yield self.summarize(calendar_id)
