"""Human-readable recurrence descriptions."""

from __future__ import annotations

import calendar

from diligence_cli.models.recurrence import (
    RecurrenceEndType,
    RecurrencePattern,
    RecurrenceSpec,
)

DEFAULT_DATE_FORMAT = "%b %d, %Y"

# Units for "every N <unit>" phrasing, singular form first.
_INTERVAL_UNITS = {
    RecurrencePattern.DAILY: ("Daily", "days"),
    RecurrencePattern.WEEKLY: ("Weekly", "weeks"),
    RecurrencePattern.MONTHLY: ("Monthly", "months"),
    RecurrencePattern.YEARLY: ("Yearly", "years"),
}


def weekday_name(code: int, *, abbreviated: bool = False) -> str:
    """Localized name for a Sunday-first weekday code."""
    # calendar.day_name is Monday-first: Monday=0 ... Sunday=6
    index = (code - 2) % 7
    return calendar.day_abbr[index] if abbreviated else calendar.day_name[index]


def _every(pattern: RecurrencePattern, interval: int) -> str:
    single, unit = _INTERVAL_UNITS[pattern]
    return single if interval == 1 else f"Every {interval} {unit}"


def describe(spec: RecurrenceSpec, *, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a recurrence rule as a sentence, e.g. "Weekly on Monday, Friday"."""
    pattern = spec.pattern
    if pattern == RecurrencePattern.NEVER:
        return "Does not repeat"

    if pattern == RecurrencePattern.WEEKDAYS:
        description = "Every weekday (Monday through Friday)"
    elif pattern == RecurrencePattern.BIWEEKLY:
        description = "Every 2 weeks"
    elif pattern == RecurrencePattern.WEEKLY and spec.weekdays:
        names = ", ".join(weekday_name(code) for code in spec.weekdays)
        description = f"{_every(pattern, spec.interval)} on {names}"
    elif pattern == RecurrencePattern.CUSTOM:
        if spec.weekdays:
            names = ", ".join(weekday_name(c, abbreviated=True) for c in spec.weekdays)
            description = f"Custom pattern on {names}"
        else:
            description = f"Every {spec.interval} days"
    else:
        description = _every(pattern, spec.interval)

    if spec.end_type == RecurrenceEndType.AFTER_COUNT and spec.end_count is not None:
        noun = "occurrence" if spec.end_count == 1 else "occurrences"
        description += f", ending after {spec.end_count} {noun}"
    elif spec.end_type == RecurrenceEndType.ON_DATE and spec.end_date is not None:
        description += f", ending on {spec.end_date.strftime(date_format)}"

    return description
