"""
workingtime - working hours aware calendar arithmetic.
"""

from .config import WorkingTimeConfig
from .domain.exceptions import (
    ConfigurationGapError,
    ConfigurationInvalidError,
    InvalidArgumentError,
    WorkingTimeError,
)
from .domain.working_time import WorkingTime

__version__ = "1.0.0"

__all__ = [
    "ConfigurationGapError",
    "ConfigurationInvalidError",
    "InvalidArgumentError",
    "WorkingTime",
    "WorkingTimeConfig",
    "WorkingTimeError",
    "__version__",
]
