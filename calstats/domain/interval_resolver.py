"""
Resolution of the effective interval of a calendar event.
"""

from typing import Optional

import pendulum
from pendulum import DateTime

from .exceptions import MalformedEventTime
from .models import CalendarEvent, EventInterval


class EventIntervalResolver:
    """
    Computes a single canonical (start, end) pair for an event.

    Calendar data exposes up to two candidate start times (the declared start
    and, for recurring instances, the original start) and no duration field:

    - nominal duration = declared end - declared start
    - effective start = the later of declared start and original start
    - effective end = effective start + nominal duration

    All-day events have no time of day and are never resolved.
    """

    def resolve(self, event: CalendarEvent) -> Optional[EventInterval]:
        """
        Resolve the effective interval of an event.

        Args:
            event: The event to resolve

        Returns:
            EventInterval, or None for all-day events

        Raises:
            MalformedEventTime: If a timestamp is missing or cannot be parsed
        """
        if event.all_day:
            return None

        declared_start = self._parse(event.start_time, "start", event)
        declared_end = self._parse(event.end_time, "end", event)
        duration = declared_end - declared_start

        start = declared_start
        if event.original_start_time:
            original_start = self._parse(event.original_start_time, "original start", event)
            if original_start > start:
                start = original_start

        return EventInterval(start=start, end=start + duration, duration=duration)

    @staticmethod
    def _parse(value: Optional[str], field_name: str, event: CalendarEvent) -> DateTime:
        if not value:
            raise MalformedEventTime(f"Event {event.title!r} has no {field_name} time")

        try:
            dt = pendulum.parse(value)
        except ValueError as exc:
            raise MalformedEventTime(
                f"Event {event.title!r} has an invalid {field_name} time: {value!r}"
            ) from exc

        if not isinstance(dt, DateTime):
            raise MalformedEventTime(
                f"Event {event.title!r} {field_name} time is not a date-time: {value!r}"
            )

        return dt
