"""
Event categorization.

Rules are evaluated in strict priority order; the first matching rule
decides the category and no later rule is evaluated.
"""

from dataclasses import dataclass, field
from typing import Callable, Tuple

from .models import CalendarEvent, Category
from .patterns import PatternMatcher

DEFAULT_HIRING_MARKERS = ("https://hire.lever.co/interviews",)


@dataclass(frozen=True)
class ClassifierSettings:
    """Configuration passed to the classifier at construction time."""
    ignore_patterns: PatternMatcher = field(default_factory=PatternMatcher)
    hiring_markers: Tuple[str, ...] = DEFAULT_HIRING_MARKERS


Rule = Callable[[str, CalendarEvent], bool]


class EventClassifier:
    """
    Assigns exactly one Category to an event, from the viewer's perspective.

    Priority:
    1. hiring       - description contains a recruiting interview link
    2. personal     - created by the viewer, with no other attendees
    3. ignored      - title matches an ignore pattern
    4. declined     - viewer declined
    5. not accepted - viewer responded with anything but "accepted"
    6. meeting      - everything else
    """

    def __init__(self, settings: ClassifierSettings | None = None):
        self.settings = settings or ClassifierSettings()
        self.rules: Tuple[Tuple[Category, Rule], ...] = (
            (Category.HIRING, self._is_hiring),
            (Category.PERSONAL, self._is_personal),
            (Category.IGNORED, self._is_ignored),
            (Category.DECLINED, self._is_declined),
            (Category.NOT_ACCEPTED, self._is_not_accepted),
        )

    def classify(self, viewer: str, event: CalendarEvent) -> Category:
        """
        Classify an event.

        Args:
            viewer: Email address of the calendar owner
            event: The event to classify

        Returns:
            The first matching Category, MEETING if no rule matches
        """
        for category, rule in self.rules:
            if rule(viewer, event):
                return category
        return Category.MEETING

    def _is_hiring(self, viewer: str, event: CalendarEvent) -> bool:
        description = event.description or ""
        return any(marker in description for marker in self.settings.hiring_markers)

    def _is_personal(self, viewer: str, event: CalendarEvent) -> bool:
        if not event.created_by(viewer):
            return False
        if not event.attendees:
            return True
        return (
            len(event.attendees) == 1
            and event.attendees[0].email.lower() == viewer.lower()
        )

    def _is_ignored(self, viewer: str, event: CalendarEvent) -> bool:
        return self.settings.ignore_patterns.matches(event.title)

    def _is_declined(self, viewer: str, event: CalendarEvent) -> bool:
        attendee = event.attendee_record(viewer)
        return attendee is not None and attendee.response_status == "declined"

    def _is_not_accepted(self, viewer: str, event: CalendarEvent) -> bool:
        attendee = event.attendee_record(viewer)
        if attendee is None or not attendee.response_status:
            return False
        return attendee.response_status != "accepted"
