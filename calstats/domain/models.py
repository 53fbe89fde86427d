"""
Domain models for slots, calendar events and the aggregated summary.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from pendulum import DateTime


class Category(str, Enum):
    """
    Event categories, declared in report column order.
    """
    PERSONAL = "personal"
    IGNORED = "ignored"
    DECLINED = "declined"
    NOT_ACCEPTED = "not accepted"
    HIRING = "hiring"
    MEETING = "meeting"


# Categories whose time counts toward meeting load and slot occupancy
COUNTED_CATEGORIES = (Category.HIRING, Category.MEETING)


class WindowPolicy(str, Enum):
    """
    How the reporting window interacts with weekends.

    ELAPSED_HOURS: the window is a fixed number of hours; weekend days use up
        time but produce no slots.
    BUSINESS_DAYS: the window is a number of working days; weekend days are
        skipped without counting toward the budget.
    """
    ELAPSED_HOURS = "elapsed_hours"
    BUSINESS_DAYS = "business_days"


@dataclass(frozen=True)
class Slot:
    """
    One half-day window in the calendar owner's timezone.

    Invariant: start must be before end.
    """
    label: str
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Slot start {self.start} must be before end {self.end}")

    def overlaps(self, start: DateTime, end: DateTime) -> bool:
        """
        Check if [start, end) overlaps this slot.

        Touching endpoints do not count as overlap.
        """
        return start < self.end and end > self.start

    def duration(self) -> timedelta:
        """Return the slot length."""
        return self.end - self.start


@dataclass(frozen=True)
class SlotWindow:
    """
    Generated slots together with the instants used to query events.
    """
    start: DateTime
    end: DateTime
    slots: List[Slot]


@dataclass(frozen=True)
class Attendee:
    """An attendee entry of a calendar event."""
    email: str
    response_status: str = ""
    is_self: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Attendee":
        return cls(
            email=data.get("email", ""),
            response_status=data.get("responseStatus", ""),
            is_self=bool(data.get("self", False)),
        )


@dataclass(frozen=True)
class CalendarEvent:
    """
    A single (already expanded) calendar event instance.

    Timestamps are kept as the raw RFC 3339 strings delivered by the data
    source; the interval resolver is responsible for parsing them.
    """
    title: str = ""
    description: str = ""
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    original_start_time: Optional[str] = None
    all_day: bool = False
    creator_email: str = ""
    creator_is_self: bool = False
    attendees: List[Attendee] = field(default_factory=list)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "CalendarEvent":
        """
        Build an event from a Google Calendar API event resource.

        Args:
            item: Event resource as returned by ``events.list``

        Returns:
            CalendarEvent instance
        """
        start = item.get("start") or {}
        end = item.get("end") or {}
        original = item.get("originalStartTime") or {}
        creator = item.get("creator") or {}

        # All-day events carry a "date" instead of a "dateTime"
        all_day = "dateTime" not in start and "date" in start

        return cls(
            title=item.get("summary", ""),
            description=item.get("description", ""),
            start_time=start.get("dateTime"),
            end_time=end.get("dateTime"),
            original_start_time=original.get("dateTime"),
            all_day=all_day,
            creator_email=creator.get("email", ""),
            creator_is_self=bool(creator.get("self", False)),
            attendees=[Attendee.from_api(a) for a in item.get("attendees", [])],
        )

    def created_by(self, email: str) -> bool:
        """Check whether the event was created by the given identity."""
        if self.creator_is_self:
            return True
        return bool(self.creator_email) and self.creator_email.lower() == email.lower()

    def attendee_record(self, email: str) -> Optional[Attendee]:
        """Return the attendee entry for the given email, if any."""
        for attendee in self.attendees:
            if attendee.email.lower() == email.lower():
                return attendee
        return None


@dataclass(frozen=True)
class EventInterval:
    """The effective interval of an event after reconciling start times."""
    start: DateTime
    end: DateTime
    duration: timedelta


@dataclass
class SlotUsage:
    """
    Per-slot accumulation of overlapping event time.
    """
    slot: Slot
    durations: Dict[Category, timedelta] = field(default_factory=dict)
    occupied: bool = False

    def hours(self, category: Category) -> float:
        """Return the time spent in a category within this slot, in hours."""
        return self.durations.get(category, timedelta()).total_seconds() / 3600


@dataclass
class CalendarSummary:
    """
    Aggregated statistics for one calendar over the reporting window.
    """
    viewer: str
    timezone: str
    free_slots: int = 0
    totals: Dict[Category, timedelta] = field(default_factory=dict)
    meeting_duration: timedelta = field(default_factory=timedelta)
    slot_usages: List[SlotUsage] = field(default_factory=list)
    workweek: timedelta = field(default_factory=lambda: timedelta(hours=40))

    @property
    def total_slots(self) -> int:
        return len(self.slot_usages)

    @property
    def occupied_slots(self) -> int:
        return sum(1 for usage in self.slot_usages if usage.occupied)

    def hours(self, category: Category) -> float:
        """Return the total time spent in a category, in hours."""
        return self.totals.get(category, timedelta()).total_seconds() / 3600

    @property
    def meeting_hours(self) -> float:
        return self.meeting_duration.total_seconds() / 3600

    @property
    def load_percent(self) -> int:
        """Counted time as a whole percentage of the reference workweek (floored)."""
        return (self.meeting_duration * 100) // self.workweek
