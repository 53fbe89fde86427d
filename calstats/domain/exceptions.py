"""
Domain-specific exception hierarchy for the calstats application.

Every error is fatal: the CLI aborts the whole run on the first one.
"""


class CalstatsError(Exception):
    """Base class for all application-level errors."""


class ConfigError(CalstatsError):
    """Raised for invalid configuration, flags or ignore-list files."""


class TimezoneError(CalstatsError):
    """Raised when a timezone cannot be used."""


class InvalidTimezone(TimezoneError):
    """Raised when an IANA timezone identifier cannot be resolved."""


class TimeParseError(CalstatsError):
    """Raised when a slot or event timestamp cannot be parsed."""


class InvalidStartTime(TimeParseError):
    """Raised when the configured window start is not in the expected format."""


class MalformedEventTime(TimeParseError):
    """Raised when an event carries a missing or unparseable timestamp."""


class DataSourceError(CalstatsError):
    """Raised when calendar data cannot be fetched or parsed."""


class AuthenticationError(CalstatsError):
    """Raised when authentication or token handling fails."""


class OutputError(CalstatsError):
    """Raised when the report cannot be written."""
