"""
CSV output of calendar summaries.
"""

import csv
from typing import List, TextIO

from ..domain.exceptions import OutputError
from ..domain.models import CalendarSummary, Category

HEADER = (
    ["email", "tz", "free slots"]
    + [category.value for category in Category]
    + ["meeting hours", "% meetings"]
)


def summary_row(summary: CalendarSummary) -> List[str]:
    """
    Format a summary as a CSV row.

    Hours use one decimal place; the load is an integer percentage.
    """
    row = [summary.viewer, summary.timezone, str(summary.free_slots)]
    row.extend(f"{summary.hours(category):.1f}" for category in Category)
    row.append(f"{summary.meeting_hours:.1f}")
    row.append(f"{summary.load_percent}%")
    return row


class CsvReportWriter:
    """
    Writes one CSV row per calendar, flushing after every row so that
    already written rows survive a later failure.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.writer = csv.writer(stream)

    def write_header(self) -> None:
        self._write(HEADER)

    def write_summary(self, summary: CalendarSummary) -> None:
        self._write(summary_row(summary))

    def _write(self, row: List[str]) -> None:
        try:
            self.writer.writerow(row)
            self.stream.flush()
        except (OSError, csv.Error) as exc:
            raise OutputError(f"Error writing CSV: {exc}") from exc
