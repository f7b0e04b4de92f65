"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date, time, timedelta
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import validate_timezone


class DefaultsConfig(BaseModel):
    """Default settings for queries."""
    duration_minutes: int = 30
    min_slot_minutes: int = 0

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure the default meeting duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @field_validator("min_slot_minutes")
    @classmethod
    def validate_min_slot(cls, value: int) -> int:
        if value < 0:
            raise ValueError("min_slot_minutes must not be negative")
        return value

    def get_min_slot(self) -> timedelta:
        return timedelta(minutes=self.min_slot_minutes)


class MeetingEntry(BaseModel):
    """A meeting to book when the calendar is loaded."""
    subject: str
    date: date
    start: time
    duration_minutes: int

    @field_validator("start", mode="before")
    @classmethod
    def parse_sexagesimal_start(cls, value):
        """YAML 1.1 reads unquoted 10:30 as the base-60 integer 630."""
        if isinstance(value, int) and not isinstance(value, bool):
            hours, minutes = divmod(value, 60)
            return time(hour=hours, minute=minutes)
        return value

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Zero-length meetings are allowed, negative ones are not."""
        if value < 0:
            raise ValueError(f"duration_minutes must not be negative, got {value}")
        return value

    def get_duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "UTC"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    meetings: List[MeetingEntry] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA identifier."""
        return validate_timezone(value)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a calendar.yaml file. See calendar.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def meetings_on(self, day: date) -> List[MeetingEntry]:
        """Return the configured entries for one date."""
        return [entry for entry in self.meetings if entry.date == day]


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for calendar.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "calendar.yaml"

    if not config_path.exists():
        # Try in the project root (parent of meetingcalendar/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "calendar.yaml"

    return config_path
