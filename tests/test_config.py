"""
Tests for YAML configuration loading.
"""

from datetime import date, time, timedelta

import pytest
from pydantic import ValidationError

from meetingcalendar.config import AppConfig, DefaultsConfig, MeetingEntry


def _write(tmp_path, content: str):
    config_path = tmp_path / "calendar.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_load_from_yaml(self, tmp_path):
        config_path = _write(tmp_path, """
timezone: Europe/Berlin
defaults:
  duration_minutes: 45
meetings:
  - subject: Standup
    date: 2024-03-04
    start: "09:00"
    duration_minutes: 15
""")

        config = AppConfig.load_from_yaml(config_path)

        assert config.timezone == "Europe/Berlin"
        assert config.defaults.duration_minutes == 45
        assert config.defaults.min_slot_minutes == 0
        assert len(config.meetings) == 1
        entry = config.meetings[0]
        assert entry.date == date(2024, 3, 4)
        assert entry.start == time(9, 0)
        assert entry.get_duration() == timedelta(minutes=15)

    def test_unquoted_start_time_is_read_as_clock_time(self, tmp_path):
        """YAML turns 10:30 into 630; it still means half past ten."""
        config_path = _write(tmp_path, """
meetings:
  - subject: Review
    date: 2024-03-04
    start: 10:30
    duration_minutes: 30
""")

        config = AppConfig.load_from_yaml(config_path)

        assert config.meetings[0].start == time(10, 30)

    def test_defaults_when_file_is_empty(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config.timezone == "UTC"
        assert config.meetings == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises_value_error(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "timezone: [unclosed"))

    def test_non_mapping_root_raises(self, tmp_path):
        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(_write(tmp_path, "- just\n- a list\n"))

    def test_unknown_timezone_is_rejected(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Atlantis/Capital")

    def test_meetings_on(self):
        config = AppConfig(meetings=[
            MeetingEntry(subject="A", date=date(2024, 3, 4), start=time(9, 0), duration_minutes=15),
            MeetingEntry(subject="B", date=date(2024, 3, 5), start=time(9, 0), duration_minutes=15),
        ])

        assert [entry.subject for entry in config.meetings_on(date(2024, 3, 5))] == ["B"]


class TestMeetingEntry:
    """Tests for MeetingEntry validation."""

    def test_zero_duration_is_allowed(self):
        entry = MeetingEntry(subject="Reminder", date=date(2024, 3, 4), start=time(9, 0), duration_minutes=0)

        assert entry.get_duration() == timedelta(0)

    def test_negative_duration_is_rejected(self):
        with pytest.raises(ValidationError, match="must not be negative"):
            MeetingEntry(subject="Broken", date=date(2024, 3, 4), start=time(9, 0), duration_minutes=-5)

    def test_string_values_are_parsed(self):
        entry = MeetingEntry(subject="Standup", date="2024-03-04", start="09:15", duration_minutes=15)

        assert entry.date == date(2024, 3, 4)
        assert entry.start == time(9, 15)


class TestDefaultsConfig:
    """Tests for DefaultsConfig validation."""

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            DefaultsConfig(duration_minutes=0)

    def test_min_slot_must_not_be_negative(self):
        with pytest.raises(ValidationError, match="must not be negative"):
            DefaultsConfig(min_slot_minutes=-1)

    def test_get_min_slot(self):
        assert DefaultsConfig(min_slot_minutes=20).get_min_slot() == timedelta(minutes=20)
