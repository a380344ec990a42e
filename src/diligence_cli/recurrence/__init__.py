"""Recurrence engine: next-date calculation, end conditions, instance generation."""

from .calculator import next_date, next_weekday_date
from .end_conditions import has_ended
from .engine import (
    generate_recurring_instances,
    next_due_date,
    recurrence_description,
    recurrence_has_ended,
)
from .formatter import describe
from .generator import (
    DEFAULT_INSTANCE_CAP,
    GenerationResult,
    InstanceBuffer,
    InstanceSink,
    generate_instances,
)

__all__ = [
    "next_date",
    "next_weekday_date",
    "has_ended",
    "describe",
    "generate_instances",
    "generate_recurring_instances",
    "next_due_date",
    "recurrence_has_ended",
    "recurrence_description",
    "GenerationResult",
    "InstanceBuffer",
    "InstanceSink",
    "DEFAULT_INSTANCE_CAP",
]
