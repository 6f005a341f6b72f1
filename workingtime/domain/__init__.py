"""
Domain layer - Pure calendar logic without I/O.
"""

from .dates import validate_date
from .exceptions import (
    ConfigurationGapError,
    ConfigurationInvalidError,
    InvalidArgumentError,
    WorkingTimeError,
)
from .models import WorkingWindow

__all__ = [
    "ConfigurationGapError",
    "ConfigurationInvalidError",
    "InvalidArgumentError",
    "WorkingTimeError",
    "WorkingWindow",
    "validate_date",
]
