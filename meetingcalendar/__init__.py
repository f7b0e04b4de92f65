"""
meetingcalendar - single-timezone meeting calendar with conflict detection.
"""

__version__ = "0.1.0"
