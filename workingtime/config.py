"""
Configuration management using Pydantic.
"""

import re
from pathlib import Path
from typing import Dict, FrozenSet

import pendulum
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .domain.models import WorkingWindow

_DAY_MONTH_RE = re.compile(r"^(\d{2})-(\d{2})$")


class WorkingTimeConfig(BaseModel):
    """
    Working time configuration.

    Weekday indices run from 0 (Sunday) to 6 (Saturday).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    working_days: Dict[int, str] = Field(alias="workingDays")
    weekends: FrozenSet[int] = Field(default_factory=frozenset)
    holidays: FrozenSet[str] = Field(default_factory=frozenset)
    max_iterations: int = Field(default=3660, alias="maxIterations")

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: Dict[int, str]) -> Dict[int, str]:
        """Ensure weekdays are in range and every window parses."""
        invalid_days = sorted(day for day in value if day not in range(7))
        if invalid_days:
            raise ValueError(f"working_days keys must be between 0 and 6, got {invalid_days}")
        for day, window in value.items():
            try:
                WorkingWindow.parse(window)
            except ValueError as exc:
                raise ValueError(f"Invalid working window for weekday {day}: {exc}") from exc
        return value

    @field_validator("weekends")
    @classmethod
    def validate_weekends(cls, value: FrozenSet[int]) -> FrozenSet[int]:
        """Ensure weekend weekdays are in valid range."""
        invalid_days = sorted(day for day in value if day not in range(7))
        if invalid_days:
            raise ValueError(f"weekends must be between 0 and 6, got {invalid_days}")
        return value

    @field_validator("holidays")
    @classmethod
    def validate_holidays(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        """Ensure every holiday is a real DD-MM day (29-02 allowed)."""
        for holiday in value:
            match = _DAY_MONTH_RE.match(holiday)
            try:
                if not match:
                    raise ValueError("expected DD-MM")
                pendulum.date(2000, int(match.group(2)), int(match.group(1)))
            except ValueError as exc:
                raise ValueError(f"Invalid holiday '{holiday}': {exc}") from exc
        return value

    @field_validator("max_iterations")
    @classmethod
    def validate_max_iterations(cls, value: int) -> int:
        """Ensure the walk bound is positive."""
        if value <= 0:
            raise ValueError("max_iterations must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_has_working_weekday(self) -> "WorkingTimeConfig":
        """At least one configured weekday must not be a weekend."""
        if not set(self.working_days) - set(self.weekends):
            raise ValueError("Configuration has no working weekday: every configured day is a weekend")
        return self

    def windows(self) -> Dict[int, WorkingWindow]:
        """Get parsed working windows keyed by weekday."""
        return {day: WorkingWindow.parse(window) for day, window in self.working_days.items()}

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "WorkingTimeConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            WorkingTimeConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a workingtime.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for workingtime.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "workingtime.yaml"

    if not config_path.exists():
        # Try in the project root (parent of workingtime/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "workingtime.yaml"

    return config_path
