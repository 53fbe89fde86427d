"""
Aggregation of classified events into per-slot and per-category statistics.
"""

from datetime import timedelta
from typing import List, Sequence, Tuple

from rich.console import Console

from .classifier import EventClassifier
from .interval_resolver import EventIntervalResolver
from .models import (
    COUNTED_CATEGORIES,
    CalendarEvent,
    CalendarSummary,
    EventInterval,
    Slot,
    SlotUsage,
)


class SlotAggregator:
    """
    Intersects events with slots and accumulates the calendar summary.

    Algorithm:
    1. Resolve every event to its effective interval (all-day events drop out)
    2. For each slot, find events whose interval overlaps it
    3. Classify each overlapping event and add its full duration to its category
    4. Counted categories (hiring, meeting) add to meeting time and occupy the slot
    5. Slots left unoccupied are counted as free
    """

    def __init__(
        self,
        classifier: EventClassifier,
        resolver: EventIntervalResolver | None = None,
        *,
        workweek_hours: int = 40,
        verbose: bool = False,
        console: Console | None = None,
    ):
        self.classifier = classifier
        self.resolver = resolver or EventIntervalResolver()
        self.workweek = timedelta(hours=workweek_hours)
        self.verbose = verbose
        self.console = console or Console(stderr=True)

    def aggregate(
        self,
        viewer: str,
        timezone: str,
        slots: Sequence[Slot],
        events: Sequence[CalendarEvent],
    ) -> CalendarSummary:
        """
        Build the summary for one calendar.

        Args:
            viewer: Email address of the calendar owner
            timezone: Timezone of the calendar
            slots: Generated slots, in order
            events: Events of the reporting window

        Returns:
            CalendarSummary

        Raises:
            MalformedEventTime: If any event has an unparseable timestamp
        """
        resolved = self._resolve_all(events)
        summary = CalendarSummary(viewer=viewer, timezone=timezone, workweek=self.workweek)

        for slot in slots:
            if self.verbose:
                self.console.print(f"[bold]{slot.label}[/bold]")

            usage = SlotUsage(slot=slot)

            for event, interval in resolved:
                if not slot.overlaps(interval.start, interval.end):
                    continue

                category = self.classifier.classify(viewer, event)
                summary.totals[category] = summary.totals.get(category, timedelta()) + interval.duration
                usage.durations[category] = usage.durations.get(category, timedelta()) + interval.duration

                if self.verbose:
                    self.console.print(
                        f"\t{event.title} ({category.value}, "
                        f"{interval.start.format('HH:mm:ss')}->{interval.end.format('HH:mm:ss')})",
                        markup=False,
                    )

                if category in COUNTED_CATEGORIES:
                    summary.meeting_duration += interval.duration
                    usage.occupied = True

            if not usage.occupied:
                summary.free_slots += 1

            summary.slot_usages.append(usage)

        return summary

    def _resolve_all(
        self,
        events: Sequence[CalendarEvent],
    ) -> List[Tuple[CalendarEvent, EventInterval]]:
        resolved: List[Tuple[CalendarEvent, EventInterval]] = []

        for event in events:
            interval = self.resolver.resolve(event)
            if interval is not None:
                resolved.append((event, interval))

        return resolved
