"""
Domain models for meetings and the time ranges they occupy.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from functools import total_ordering
from zoneinfo import ZoneInfoNotFoundError

import pendulum
from pendulum import DateTime

from .exceptions import InvalidDurationError, InvalidTimezoneError


def validate_timezone(name: str) -> str:
    """
    Check that ``name`` is a known IANA timezone identifier.

    Returns:
        The name unchanged

    Raises:
        InvalidTimezoneError: If the timezone database does not know it
    """
    try:
        pendulum.timezone(name)
    except (ValueError, ZoneInfoNotFoundError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: {name!r}") from exc
    return name


def zoned(day: date, at: time, timezone: str) -> DateTime:
    """Anchor a local date and wall-clock time to an absolute instant."""
    return pendulum.datetime(
        day.year,
        day.month,
        day.day,
        at.hour,
        at.minute,
        at.second,
        at.microsecond,
        tz=timezone,
    )


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable half-open range [start, end) of instants.

    Invariant: start must not be after end. Empty ranges (start == end) are
    allowed and describe zero-duration meetings.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start time {self.start} must not be after end time {self.end}")

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=(self.end - self.start).total_seconds())

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int(self.duration.total_seconds() / 60)

    def is_empty(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "TimeRange") -> bool:
        """
        Check if this range overlaps with another.

        Touching ranges do not overlap. Equal ranges always do, even when empty.
        """
        if self.start == other.start and self.end == other.end:
            return True
        return self.start < other.end and other.start < self.end

    def in_timezone(self, timezone: str) -> "TimeRange":
        """The same range expressed in another timezone, for display."""
        return TimeRange(start=self.start.in_timezone(timezone), end=self.end.in_timezone(timezone))

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('HH:mm')}"


@total_ordering
@dataclass(frozen=True)
class Meeting:
    """
    One scheduled event.

    The absolute ``interval`` and the wall-clock ``end_time`` are derived once
    from date, start time, duration and timezone. Meetings sort by start time,
    then subject, then duration.
    """
    subject: str
    date: date
    start_time: time
    duration: timedelta
    timezone: str = "UTC"
    end_time: time = field(init=False, compare=False, repr=False)
    interval: TimeRange = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        if self.duration < timedelta(0):
            raise InvalidDurationError(
                f"Meeting '{self.subject}' has negative duration {self.duration}"
            )

        # pendulum.Duration is accepted but stored as a plain timedelta
        duration = timedelta(seconds=self.duration.total_seconds())
        object.__setattr__(self, "duration", duration)

        end_time = (datetime.combine(self.date, self.start_time) + duration).time()
        object.__setattr__(self, "end_time", end_time)

        # Instants are kept in UTC so comparisons never depend on wall-clock
        # time around DST transitions
        start = zoned(self.date, self.start_time, self.timezone).in_timezone("UTC")
        end = start + duration
        object.__setattr__(self, "interval", TimeRange(start=start, end=end))

    def sort_key(self) -> tuple:
        return (self.start_time, self.subject, self.duration)

    def __lt__(self, other: "Meeting") -> bool:
        if not isinstance(other, Meeting):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def format_display(self) -> str:
        """
        Format the meeting for display.
        Format: HH:MM – HH:MM | Subject (N Min.)
        """
        minutes = int(self.duration.total_seconds() // 60)
        return (
            f"{self.start_time.strftime('%H:%M')} – {self.end_time.strftime('%H:%M')}"
            f" | {self.subject} ({minutes} Min.)"
        )
