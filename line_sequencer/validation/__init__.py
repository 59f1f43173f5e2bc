"""Input validation and schedule checks."""

from .errors import ConfigurationError
from .input_validator import build_config, validate_problem
from .schedule_validator import ScheduleValidator, ScheduleViolation, validate_schedule

__all__ = [
    "ConfigurationError",
    "build_config",
    "validate_problem",
    "ScheduleValidator",
    "ScheduleViolation",
    "validate_schedule",
]
