"""
In-memory meeting calendar: conflict detection and free-slot calculation.

This is pure domain logic (no I/O). All dates and wall-clock times are
interpreted in the single timezone the store is created with.
"""

import bisect
import logging
import threading
from datetime import date, time, timedelta
from typing import Dict, Iterator, List, Optional, Tuple

from .models import Meeting, TimeRange, validate_timezone, zoned

logger = logging.getLogger(__name__)


class CalendarStore:
    """
    Owns all meetings, grouped by date and kept sorted per date.

    Invariant: no two meetings stored on the same date overlap. The only
    mutation is ``add_meeting``, which checks and inserts under one lock.
    """

    def __init__(self, timezone: str):
        self._timezone = validate_timezone(timezone)
        self._meetings: Dict[date, List[Meeting]] = {}
        self._lock = threading.RLock()

    @property
    def timezone(self) -> str:
        return self._timezone

    def add_meeting(
        self,
        subject: str,
        date: date,
        start_time: time,
        duration: timedelta
    ) -> bool:
        """
        Schedule a meeting unless it overlaps an existing one on that date.

        Returns:
            True if the meeting was stored, False if it was rejected

        Raises:
            InvalidDurationError: If duration is negative
        """
        meeting = Meeting(subject, date, start_time, duration, self._timezone)

        with self._lock:
            if self._overlaps_any(meeting):
                logger.debug("Rejected %r: overlaps an existing meeting", meeting)
                return False

            bisect.insort(self._meetings.setdefault(date, []), meeting)

        logger.debug("Added %r", meeting)
        return True

    def has_overlapping_meeting(
        self,
        date: date,
        start_time: time,
        duration: timedelta
    ) -> bool:
        """Check whether the proposed span overlaps any meeting on that date."""
        candidate = Meeting("New Meeting", date, start_time, duration, self._timezone)

        with self._lock:
            return self._overlaps_any(candidate)

    def find_overlapping_meetings(
        self,
        date: date,
        start_time: time,
        duration: timedelta
    ) -> Tuple[Meeting, ...]:
        """Return the meetings on that date whose span overlaps the proposed one."""
        candidate = Meeting("New Meeting", date, start_time, duration, self._timezone)

        with self._lock:
            return tuple(
                meeting for meeting in self._meetings.get(date, [])
                if meeting.interval.overlaps(candidate.interval)
            )

    def _overlaps_any(self, candidate: Meeting) -> bool:
        return any(
            meeting.interval.overlaps(candidate.interval)
            for meeting in self._meetings.get(candidate.date, [])
        )

    def get_meetings_for_date(self, date: date) -> Tuple[Meeting, ...]:
        """Return the meetings of a date in canonical order (empty if none)."""
        with self._lock:
            return tuple(self._meetings.get(date, []))

    def get_available_timeslots(
        self,
        date: date,
        min_duration: Optional[timedelta] = None
    ) -> List[TimeRange]:
        """
        Calculate the free time ranges of a day.

        Algorithm:
        1. Put a cursor at local midnight
        2. For each meeting in order, emit [cursor, meeting start) if the
           meeting starts after the cursor, then move the cursor to the
           meeting end (never backward)
        3. Emit [cursor, next local midnight) if anything is left

        Zero-length gaps are never emitted. Zero-duration meetings occupy
        nothing and do not split a gap.

        Args:
            date: The day to inspect
            min_duration: Drop free ranges shorter than this

        Returns:
            List of TimeRange objects in chronological order
        """
        day_start = zoned(date, time.min, self._timezone).in_timezone("UTC")
        day_end = zoned(date + timedelta(days=1), time.min, self._timezone).in_timezone("UTC")

        free_ranges: List[TimeRange] = []
        cursor = day_start

        # Canonical order is by wall-clock start, which can differ from
        # instant order around a DST gap
        intervals = sorted(
            (meeting.interval for meeting in self.get_meetings_for_date(date)),
            key=lambda r: r.start
        )

        for interval in intervals:
            if interval.is_empty():
                continue

            if cursor < interval.start:
                free_ranges.append(TimeRange(start=cursor, end=interval.start))

            # Stored meetings never overlap, so the end only moves forward
            assert interval.end > cursor, f"{interval} ends before {cursor}"
            cursor = max(cursor, interval.end)

        if cursor < day_end:
            free_ranges.append(TimeRange(start=cursor, end=day_end))

        if min_duration is not None:
            free_ranges = [
                free for free in free_ranges
                if free.duration >= min_duration
            ]

        return free_ranges

    def dates(self) -> List[date]:
        """Return every date holding at least one meeting, in order."""
        with self._lock:
            return sorted(self._meetings)

    def items(self) -> List[Tuple[date, Tuple[Meeting, ...]]]:
        """Snapshot of (date, meetings) pairs in date order."""
        with self._lock:
            return [(day, tuple(self._meetings[day])) for day in sorted(self._meetings)]

    def get_meetings_between(
        self,
        start_date: date,
        end_date: date
    ) -> Dict[date, Tuple[Meeting, ...]]:
        """
        Snapshot of the meetings from start_date to end_date (both inclusive).

        Only dates with meetings are present. Week and month views build on this.
        """
        return {
            day: meetings for day, meetings in self.items()
            if start_date <= day <= end_date
        }

    def __iter__(self) -> Iterator[Tuple[date, Tuple[Meeting, ...]]]:
        return iter(self.items())

    def __contains__(self, day: object) -> bool:
        with self._lock:
            return day in self._meetings

    def __len__(self) -> int:
        with self._lock:
            return sum(len(meetings) for meetings in self._meetings.values())

    def __repr__(self) -> str:
        return f"CalendarStore(timezone={self._timezone!r}, meetings={len(self)})"
