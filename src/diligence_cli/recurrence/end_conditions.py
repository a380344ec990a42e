"""Recurrence termination checks."""

from __future__ import annotations

from datetime import datetime

from diligence_cli.models.recurrence import RecurrenceEndType, RecurrenceSpec


def has_ended(spec: RecurrenceSpec, now: datetime | None = None) -> bool:
    """Return True once a recurrence rule has reached its end condition.

    ``on_date`` rules are evaluated against the wall clock (``now``), not
    against the occurrence being generated.

    Args:
        spec: Recurrence rule of the template task
        now: Evaluation instant, defaults to ``datetime.now()``
    """
    if spec.end_type == RecurrenceEndType.NEVER:
        return False

    if spec.end_type == RecurrenceEndType.AFTER_COUNT:
        if spec.end_count is None:
            return False
        return spec.current_count >= spec.end_count

    if spec.end_type == RecurrenceEndType.ON_DATE:
        if spec.end_date is None:
            return False
        if now is None:
            now = datetime.now()
        return now > spec.end_date

    return False
