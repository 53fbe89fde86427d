"""
Domain layer - Pure business logic without external dependencies.
"""

from .aggregator import SlotAggregator
from .classifier import ClassifierSettings, EventClassifier
from .interval_resolver import EventIntervalResolver
from .models import (
    COUNTED_CATEGORIES,
    Attendee,
    CalendarEvent,
    CalendarSummary,
    Category,
    EventInterval,
    Slot,
    SlotUsage,
    SlotWindow,
    WindowPolicy,
)
from .patterns import PatternMatcher
from .slot_generator import SlotGenerator

__all__ = [
    "COUNTED_CATEGORIES",
    "Attendee",
    "CalendarEvent",
    "CalendarSummary",
    "Category",
    "ClassifierSettings",
    "EventClassifier",
    "EventInterval",
    "EventIntervalResolver",
    "PatternMatcher",
    "Slot",
    "SlotAggregator",
    "SlotGenerator",
    "SlotUsage",
    "SlotWindow",
    "WindowPolicy",
]
