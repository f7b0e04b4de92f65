"""
Service layer helpers that orchestrate configuration and domain logic.
"""

from .calendar_service import BookingReport, CalendarService

__all__ = ["BookingReport", "CalendarService"]
