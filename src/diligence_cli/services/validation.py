"""Validation of new tasks and recurrence settings."""

from __future__ import annotations

from datetime import datetime

from diligence_cli.models import RecurrenceSpec, TaskCreate
from diligence_cli.models.exceptions import TaskValidationError
from diligence_cli.models.recurrence import RecurrenceEndType

MAX_TITLE_LENGTH = 500


def validate_recurrence(
    spec: RecurrenceSpec, due_date: datetime | None, now: datetime | None = None
) -> None:
    """Check that a repeating rule can actually produce occurrences.

    Raises:
        TaskValidationError: On the first problem found
    """
    if not spec.repeats:
        return
    if now is None:
        now = datetime.now()

    if due_date is None:
        raise TaskValidationError("Recurring tasks must have a due date")
    if spec.interval < 1:
        raise TaskValidationError("Recurrence interval must be at least 1")
    if spec.end_type == RecurrenceEndType.AFTER_COUNT and not spec.end_count:
        raise TaskValidationError("An occurrence count is required to end after N")
    if spec.end_type == RecurrenceEndType.ON_DATE:
        if spec.end_date is None:
            raise TaskValidationError("An end date is required to end on a date")
        if spec.end_date <= now:
            raise TaskValidationError("Recurrence end date must be in the future")
    if any(code < 1 or code > 7 for code in spec.weekdays):
        raise TaskValidationError("Weekday codes must be between 1 and 7")


def validate_task(task_data: TaskCreate, now: datetime | None = None) -> None:
    """Validate a task before it is stored.

    Raises:
        TaskValidationError: If the title, amount or recurrence is invalid
    """
    title = task_data.title.strip()
    if not title:
        raise TaskValidationError("Task title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise TaskValidationError(
            f"Task title cannot exceed {MAX_TITLE_LENGTH} characters"
        )
    if task_data.amount is not None and task_data.amount < 0:
        raise TaskValidationError("Amount cannot be negative")

    validate_recurrence(task_data.recurrence, task_data.due_date, now)
