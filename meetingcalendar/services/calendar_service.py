"""
Application service for booking meetings and querying free time.

The service wraps a ``CalendarStore`` with the configuration-facing concerns:
loading configured meeting entries, logging booking outcomes, and translating
minute-based options into domain durations. This keeps the CLI thin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Iterable, List

from ..config import AppConfig, MeetingEntry
from ..domain.calendar_store import CalendarStore
from ..domain.models import Meeting, TimeRange

logger = logging.getLogger(__name__)


@dataclass
class BookingReport:
    """Outcome of booking a batch of meeting entries."""
    accepted: List[MeetingEntry] = field(default_factory=list)
    rejected: List[MeetingEntry] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.rejected)


class CalendarService:
    """
    Orchestrates bookings and day queries against a single calendar.
    """

    def __init__(self, calendar: CalendarStore) -> None:
        self._calendar = calendar

    @classmethod
    def from_config(cls, config: AppConfig) -> "CalendarService":
        """Build a calendar in the configured timezone and book its meetings."""
        service = cls(CalendarStore(timezone=config.timezone))
        report = service.load_entries(config.meetings)

        for entry in report.rejected:
            logger.warning(
                "Configured meeting '%s' on %s at %s overlaps another meeting and was skipped",
                entry.subject,
                entry.date,
                entry.start,
            )

        return service

    @property
    def calendar(self) -> CalendarStore:
        return self._calendar

    def book(
        self,
        subject: str,
        day: date,
        start_time: time,
        duration: timedelta,
    ) -> bool:
        """Book a meeting; False means it overlaps an existing one."""
        booked = self._calendar.add_meeting(subject, day, start_time, duration)

        if booked:
            logger.debug("Booked '%s' on %s at %s", subject, day, start_time)
        else:
            logger.info("Could not book '%s' on %s at %s: time is taken", subject, day, start_time)

        return booked

    def load_entries(self, entries: Iterable[MeetingEntry]) -> BookingReport:
        """
        Book each entry in turn.

        Entries are applied in the given order, so of two overlapping entries
        the first one wins.
        """
        report = BookingReport()

        for entry in entries:
            if self.book(entry.subject, entry.date, entry.start, entry.get_duration()):
                report.accepted.append(entry)
            else:
                report.rejected.append(entry)

        return report

    def meetings(self, day: date) -> List[Meeting]:
        return list(self._calendar.get_meetings_for_date(day))

    def free_slots(self, day: date, min_duration_minutes: int = 0) -> List[TimeRange]:
        """Free ranges of a day, dropping those shorter than the minimum."""
        min_duration = timedelta(minutes=min_duration_minutes) if min_duration_minutes else None
        return self._calendar.get_available_timeslots(day, min_duration=min_duration)

    def find_conflicts(
        self,
        day: date,
        start_time: time,
        duration: timedelta,
    ) -> List[Meeting]:
        """Meetings that would collide with the proposed span."""
        return list(self._calendar.find_overlapping_meetings(day, start_time, duration))
