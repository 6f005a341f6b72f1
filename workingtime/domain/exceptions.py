"""
Domain-specific exception hierarchy for the working time engine.
"""


class WorkingTimeError(Exception):
    """Base class for all working time errors."""


class InvalidArgumentError(WorkingTimeError, ValueError):
    """Raised when a date or time string does not match an accepted format."""


class ConfigurationGapError(WorkingTimeError, KeyError):
    """Raised when a weekday has no working window but one is required."""

    def __init__(self, weekday: int) -> None:
        self.weekday = weekday
        super().__init__(f"No working window configured for weekday {weekday}")

    def __str__(self) -> str:
        return self.args[0]


class ConfigurationInvalidError(WorkingTimeError, ValueError):
    """Raised when the configuration can never yield a working day."""
