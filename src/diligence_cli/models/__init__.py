"""Diligence CLI domain models.

Pydantic models for tasks, recurrence rules and configuration.
"""

from .config_models import AppConfig, OutputConfig, RecurrenceConfig, StorageConfig
from .recurrence import (
    RecurrenceEndType,
    RecurrencePattern,
    RecurrenceSpec,
    WeekdayDecodeError,
    decode_weekdays,
    encode_weekdays,
    parse_weekday_names,
    weekday_code,
)
from .task import Task, TaskCreate, TaskFilters

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskFilters",
    # Recurrence models
    "RecurrencePattern",
    "RecurrenceEndType",
    "RecurrenceSpec",
    "WeekdayDecodeError",
    "decode_weekdays",
    "encode_weekdays",
    "parse_weekday_names",
    "weekday_code",
    # Config models
    "AppConfig",
    "StorageConfig",
    "RecurrenceConfig",
    "OutputConfig",
]
