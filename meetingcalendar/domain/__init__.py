"""
Domain layer - Pure calendar logic without external dependencies.
"""

from .calendar_store import CalendarStore
from .exceptions import CalendarError, InvalidDurationError, InvalidTimezoneError
from .models import Meeting, TimeRange

__all__ = [
    "CalendarStore",
    "CalendarError",
    "InvalidDurationError",
    "InvalidTimezoneError",
    "Meeting",
    "TimeRange",
]
