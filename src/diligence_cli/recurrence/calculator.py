"""Next occurrence calculation for recurrence rules."""

from __future__ import annotations

from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from diligence_cli.models.recurrence import (
    WEEKEND_CODES,
    RecurrencePattern,
    RecurrenceSpec,
    weekday_code,
)


def next_date(spec: RecurrenceSpec, reference: datetime | None) -> datetime | None:
    """Calculate the occurrence following ``reference``.

    Args:
        spec: Recurrence rule
        reference: Date to step from (the generator's cursor)

    Returns:
        The next occurrence, or None if the rule never repeats or there is
        no reference date.
    """
    if reference is None:
        return None

    pattern = spec.pattern
    interval = spec.interval

    if pattern == RecurrencePattern.NEVER:
        return None

    if pattern == RecurrencePattern.DAILY:
        return reference + timedelta(days=interval)

    if pattern == RecurrencePattern.WEEKDAYS:
        candidate = reference + timedelta(days=1)
        while weekday_code(candidate) in WEEKEND_CODES:
            candidate += timedelta(days=1)
        return candidate

    if pattern == RecurrencePattern.WEEKLY:
        if spec.weekdays:
            return next_weekday_date(spec.weekdays, reference)
        return reference + timedelta(weeks=interval)

    if pattern == RecurrencePattern.BIWEEKLY:
        return reference + timedelta(weeks=2 * interval)

    if pattern == RecurrencePattern.MONTHLY:
        return reference + relativedelta(months=interval)

    if pattern == RecurrencePattern.YEARLY:
        return reference + relativedelta(years=interval)

    if pattern == RecurrencePattern.CUSTOM:
        if spec.weekdays:
            return next_weekday_date(spec.weekdays, reference)
        return reference + timedelta(days=interval)

    return None


def next_weekday_date(weekdays: tuple[int, ...], reference: datetime) -> datetime | None:
    """Find the next date whose weekday code is in ``weekdays``.

    Codes are compared numerically (Sunday=1 ... Saturday=7), so a reference
    on Saturday always wraps into the following week.
    """
    if not weekdays:
        return None

    current = weekday_code(reference)
    ordered = sorted(weekdays)

    for code in ordered:
        if code > current:
            return reference + timedelta(days=code - current)

    return reference + timedelta(days=7 - current + ordered[0])
