"""
Generation of half-day working slots.

This is pure domain logic: no API calls, no I/O.
"""

from typing import List, Sequence

import pendulum
from pendulum import DateTime

from .exceptions import ConfigError, InvalidStartTime, InvalidTimezone
from .models import Slot, SlotWindow, WindowPolicy

START_FORMAT = "YYYY/MM/DD HH:mm:ss"


def default_start(timezone: str, start_hour: int = 7) -> str:
    """Return today's date at the given hour, formatted for ``generate``."""
    return pendulum.now(resolve_timezone(timezone)).set(
        hour=start_hour, minute=0, second=0, microsecond=0
    ).format(START_FORMAT)


def resolve_timezone(timezone: str):
    """
    Resolve an IANA timezone identifier.

    Raises:
        InvalidTimezone: If the identifier is unknown
    """
    try:
        return pendulum.timezone(timezone)
    except (ValueError, KeyError) as exc:
        raise InvalidTimezone(f"Unknown timezone: {timezone!r}") from exc


class SlotGenerator:
    """
    Produces the ordered Morning/Afternoon slots of every working day.

    Each working day starts at the time of day of the window start and is
    split into two slots of ``slot_hours`` each, so the default 07:00 start
    models a 07:00-19:00 working day.
    """

    def __init__(self, exclude_weekdays: Sequence[int] = (5, 6), slot_hours: int = 6):
        if len(set(exclude_weekdays)) >= 7:
            raise ConfigError("At least one weekday must remain a working day")
        self.exclude_weekdays = tuple(exclude_weekdays)
        self.slot_hours = slot_hours

    def generate(
        self,
        timezone: str,
        start: str,
        *,
        policy: WindowPolicy = WindowPolicy.ELAPSED_HOURS,
        duration_hours: int = 24 * 7,
        days: int = 7,
    ) -> SlotWindow:
        """
        Generate the slots of the reporting window.

        Args:
            timezone: IANA timezone of the calendar
            start: Window start as ``YYYY/MM/DD HH:mm:ss`` local time
            policy: How weekends interact with the window length
            duration_hours: Window length for ELAPSED_HOURS
            days: Number of working days for BUSINESS_DAYS

        Returns:
            SlotWindow with the slots and the instants to query events for

        Raises:
            InvalidTimezone: If the timezone cannot be resolved
            InvalidStartTime: If the start string cannot be parsed
            ConfigError: If the window length is not positive
        """
        tz = resolve_timezone(timezone)
        window_start = self._parse_start(start, tz)

        if policy == WindowPolicy.BUSINESS_DAYS:
            if days <= 0:
                raise ConfigError(f"Day count must be positive, got {days}")
            slots, window_end = self._business_day_slots(window_start, days)
        else:
            if duration_hours <= 0:
                raise ConfigError(f"Duration must be positive, got {duration_hours}")
            # Whole days use civil arithmetic, matching how days are stepped
            window_end = window_start.add(days=duration_hours // 24, hours=duration_hours % 24)
            slots = self._elapsed_slots(window_start, window_end)

        # The event query must cover every generated slot
        if slots and slots[-1].end > window_end:
            window_end = slots[-1].end

        return SlotWindow(start=window_start, end=window_end, slots=slots)

    def _parse_start(self, start: str, tz) -> DateTime:
        try:
            return pendulum.from_format(start, START_FORMAT, tz=tz)
        except ValueError as exc:
            raise InvalidStartTime(
                f"Start time {start!r} does not match format {START_FORMAT}"
            ) from exc

    def _elapsed_slots(self, window_start: DateTime, window_end: DateTime) -> List[Slot]:
        slots: List[Slot] = []
        current = window_start

        while current < window_end:
            slots.extend(self._day_slots(current))
            current = current.add(days=1)

        return slots

    def _business_day_slots(self, window_start: DateTime, days: int):
        slots: List[Slot] = []
        current = window_start
        remaining = days

        while remaining > 0:
            day_slots = self._day_slots(current)
            if day_slots:
                slots.extend(day_slots)
                remaining -= 1
            current = current.add(days=1)

        return slots, current

    def _day_slots(self, day_start: DateTime) -> List[Slot]:
        """Return the two slots of a day, or nothing for excluded weekdays."""
        if self._is_excluded(day_start):
            return []

        midday = day_start.add(hours=self.slot_hours)
        day_end = midday.add(hours=self.slot_hours)
        day_label = day_start.format("ddd MMM D")

        return [
            Slot(label=f"{day_label} Morning", start=day_start, end=midday),
            Slot(label=f"{day_label} Afternoon", start=midday, end=day_end),
        ]

    def _is_excluded(self, dt: DateTime) -> bool:
        # pendulum: 0=Monday, 6=Sunday
        return dt.day_of_week in self.exclude_weekdays
