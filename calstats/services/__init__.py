"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .calendar_stats import CalendarClientProtocol, CalendarStatsService, WindowSettings

__all__ = ["CalendarClientProtocol", "CalendarStatsService", "WindowSettings"]
