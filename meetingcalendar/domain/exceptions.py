"""
Domain-specific exception hierarchy for the meeting calendar.
"""


class CalendarError(Exception):
    """Base class for all calendar errors."""


class InvalidDurationError(CalendarError, ValueError):
    """Raised when a meeting is given a negative duration."""


class InvalidTimezoneError(CalendarError, ValueError):
    """Raised when a timezone name is not a known IANA identifier."""
