"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .domain.classifier import DEFAULT_HIRING_MARKERS
from .domain.exceptions import ConfigError
from .domain.models import WindowPolicy

CONFIG_FILENAME = "calstats.yaml"


class WindowConfig(BaseModel):
    """Default reporting window."""
    policy: WindowPolicy = WindowPolicy.ELAPSED_HOURS
    start_hour: int = 7
    duration_hours: int = 24 * 7
    days: int = 7

    @field_validator("start_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("duration_hours", "days")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure the window length is positive."""
        if value <= 0:
            raise ValueError("window length must be greater than zero")
        return value


class WorkdayConfig(BaseModel):
    """Shape of the working day and the reference workweek."""
    slot_hours: int = 6
    workweek_hours: int = 40

    @field_validator("slot_hours")
    @classmethod
    def validate_slot_hours(cls, value: int) -> int:
        """Two slots must fit into one day."""
        if not 1 <= value <= 12:
            raise ValueError(f"slot_hours must be between 1 and 12, got {value}")
        return value

    @field_validator("workweek_hours")
    @classmethod
    def validate_workweek(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("workweek_hours must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    credentials_file: Path = Path("credentials.json")
    token_file: Optional[Path] = None
    ignorelist: Path = Path("ignorelist")
    calendars: List[str] = Field(default_factory=list)
    exclude_days: List[int] = Field(default_factory=lambda: [5, 6])  # Saturday, Sunday
    window: WindowConfig = Field(default_factory=WindowConfig)
    workday: WorkdayConfig = Field(default_factory=WorkdayConfig)
    hiring_markers: List[str] = Field(default_factory=lambda: list(DEFAULT_HIRING_MARKERS))

    @field_validator("exclude_days")
    @classmethod
    def validate_exclude_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"exclude_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        if len(deduped) == 7:
            raise ValueError("exclude_days cannot exclude every day of the week")
        return deduped

    @field_validator("hiring_markers")
    @classmethod
    def validate_hiring_markers(cls, value: List[str]) -> List[str]:
        """Drop empty markers, they would match every description."""
        markers = [marker for marker in value if marker.strip()]
        if not markers:
            raise ValueError("hiring_markers must contain at least one non-empty marker")
        return markers

    @field_validator("calendars")
    @classmethod
    def validate_calendars(cls, value: List[str]) -> List[str]:
        return [calendar.strip() for calendar in value if calendar.strip()]

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
            ConfigError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {config_path}:\n{exc}") from exc

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """
        Load the explicit config file, or the default one if it exists.

        An explicitly requested file must exist; without one, built-in
        defaults are used when no default file is found.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)

        return cls()

    def get_token_file(self) -> Path:
        """Get the OAuth token cache path."""
        if self.token_file is not None:
            return self.token_file.expanduser()
        return Path.home() / ".calstats_token.json"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for calstats.yaml in current directory
    config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        # Try in the project root (parent of calstats/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILENAME

    return config_path
