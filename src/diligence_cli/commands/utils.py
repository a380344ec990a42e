"""Helpers shared by the task commands."""

from __future__ import annotations

from typing import Any

from diligence_cli.models import RecurrenceSpec, Task, parse_weekday_names
from diligence_cli.models.recurrence import RecurrenceEndType, RecurrencePattern
from diligence_cli.recurrence import recurrence_description
from diligence_cli.services.config_service import get_config_service
from diligence_cli.utils.dates import parse_date

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def resolve_output(output: str | None) -> str:
    """Explicit ``--output`` value, else the configured default."""
    if output is None:
        return get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format '{output}' (choose from {', '.join(OUTPUT_FORMATS)})"
        )
    return output


def task_summary(task: Task) -> dict[str, Any]:
    """Flat, display-oriented view of a task."""
    date_format = get_config_service().config.output.date_format
    return {
        "id": task.id,
        "title": task.title,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "is_completed": task.is_completed,
        "is_recurring": task.is_recurring,
        "is_recurring_instance": task.is_recurring_instance,
        "recurrence_text": (
            recurrence_description(task.recurrence, date_format)
            if task.is_recurring
            else None
        ),
        "amount": task.amount,
    }


def task_detail(task: Task) -> dict[str, Any]:
    """Full view of a task, including its recurrence rule."""
    data = task.model_dump(mode="json")
    data.update(task_summary(task))
    return data


def build_recurrence(
    recur: str | None,
    *,
    interval: int = 1,
    on: str | None = None,
    ends_after: int | None = None,
    ends_on: str | None = None,
) -> RecurrenceSpec:
    """Build a recurrence rule from command-line options.

    Raises:
        ValueError: If an option cannot be parsed or the combination is invalid
    """
    if recur is None:
        if on or ends_after or ends_on:
            raise ValueError("--on, --ends-after and --ends-on require --recur")
        return RecurrenceSpec()

    try:
        pattern = RecurrencePattern(recur.lower())
    except ValueError:
        choices = ", ".join(p.value for p in RecurrencePattern)
        raise ValueError(f"Unknown pattern '{recur}' (choose from {choices})") from None

    if ends_after is not None and ends_on is not None:
        raise ValueError("Use either --ends-after or --ends-on, not both")

    fields: dict[str, Any] = {"pattern": pattern, "interval": interval}
    if on:
        fields["weekdays"] = parse_weekday_names(on)
    if ends_after is not None:
        fields["end_type"] = RecurrenceEndType.AFTER_COUNT
        fields["end_count"] = ends_after
    elif ends_on is not None:
        fields["end_type"] = RecurrenceEndType.ON_DATE
        fields["end_date"] = parse_date(ends_on, inclusive=True)
    return RecurrenceSpec(**fields)
