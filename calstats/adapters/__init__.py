"""
Adapters layer - External integrations (Google Calendar API, files, CSV).
"""

from .csv_report import CsvReportWriter, summary_row
from .google_authenticator import GoogleAuthenticator
from .google_calendar_client import GoogleCalendarClient
from .ignore_list import load_ignore_patterns
from .mock_calendar_client import MockCalendarClient

__all__ = [
    "CsvReportWriter",
    "GoogleAuthenticator",
    "GoogleCalendarClient",
    "MockCalendarClient",
    "load_ignore_patterns",
    "summary_row",
]
