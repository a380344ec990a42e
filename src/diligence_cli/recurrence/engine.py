"""Public entry points of the recurrence engine."""

from __future__ import annotations

from datetime import datetime

from diligence_cli.models.recurrence import RecurrenceSpec
from diligence_cli.models.task import Task
from diligence_cli.recurrence.calculator import next_date
from diligence_cli.recurrence.end_conditions import has_ended
from diligence_cli.recurrence.formatter import DEFAULT_DATE_FORMAT, describe
from diligence_cli.recurrence.generator import generate_recurring_instances


def next_due_date(task: Task, now: datetime | None = None) -> datetime | None:
    """Next occurrence of a recurring task counted from ``now``."""
    if not task.is_recurring:
        return None
    return next_date(task.recurrence, now or datetime.now())


def recurrence_has_ended(task: Task, now: datetime | None = None) -> bool:
    """Whether a template's recurrence has terminated."""
    if not task.is_recurring:
        return False
    return has_ended(task.recurrence, now)


def recurrence_description(
    spec: RecurrenceSpec, date_format: str = DEFAULT_DATE_FORMAT
) -> str:
    return describe(spec, date_format=date_format)


__all__ = [
    "next_due_date",
    "recurrence_has_ended",
    "generate_recurring_instances",
    "recurrence_description",
]
