"""Recurrence rule models.

A ``RecurrenceSpec`` is an immutable description of how a task repeats.
Weekday sets use Sunday-first codes (1=Sunday, 2=Monday, ..., 7=Saturday)
and are persisted as an opaque JSON list of integers.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SUNDAY = 1
MONDAY = 2
TUESDAY = 3
WEDNESDAY = 4
THURSDAY = 5
FRIDAY = 6
SATURDAY = 7

WEEKEND_CODES = frozenset({SUNDAY, SATURDAY})

# Short names accepted on the command line, mapped to weekday codes.
WEEKDAY_ALIASES: dict[str, int] = {
    "sun": SUNDAY,
    "mon": MONDAY,
    "tue": TUESDAY,
    "wed": WEDNESDAY,
    "thu": THURSDAY,
    "fri": FRIDAY,
    "sat": SATURDAY,
}


class RecurrencePattern(StrEnum):
    """Frequency pattern of a recurring task."""

    NEVER = "never"
    DAILY = "daily"
    WEEKDAYS = "weekdays"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _PATTERN_NAMES[self]


_PATTERN_NAMES = {
    RecurrencePattern.NEVER: "Never",
    RecurrencePattern.DAILY: "Daily",
    RecurrencePattern.WEEKDAYS: "Weekdays (Mon-Fri)",
    RecurrencePattern.WEEKLY: "Weekly",
    RecurrencePattern.BIWEEKLY: "Every 2 weeks",
    RecurrencePattern.MONTHLY: "Monthly",
    RecurrencePattern.YEARLY: "Yearly",
    RecurrencePattern.CUSTOM: "Custom",
}


class RecurrenceEndType(StrEnum):
    """When a recurring task stops generating instances."""

    NEVER = "never"
    AFTER_COUNT = "after_count"
    ON_DATE = "on_date"

    @property
    def display_name(self) -> str:
        return {
            RecurrenceEndType.NEVER: "Never",
            RecurrenceEndType.AFTER_COUNT: "After occurrences",
            RecurrenceEndType.ON_DATE: "On date",
        }[self]


class WeekdayDecodeError(ValueError):
    """Raised when a stored weekday set cannot be decoded."""

    def __init__(self, raw: object, reason: str):
        super().__init__(f"Invalid weekday data {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


def weekday_code(value: datetime) -> int:
    """Return the Sunday-first weekday code (1..7) of a date."""
    return value.isoweekday() % 7 + 1


def normalize_weekdays(codes: Iterable[int]) -> tuple[int, ...]:
    """Sort and de-duplicate weekday codes, rejecting values outside 1..7."""
    result = set()
    for code in codes:
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"weekday code must be an integer, got {code!r}")
        if not SUNDAY <= code <= SATURDAY:
            raise ValueError(f"weekday code must be between 1 and 7, got {code}")
        result.add(code)
    return tuple(sorted(result))


def encode_weekdays(codes: Iterable[int]) -> str:
    """Encode a weekday set for storage."""
    return json.dumps(list(normalize_weekdays(codes)))


def decode_weekdays(raw: str | bytes | None) -> tuple[int, ...]:
    """Decode a stored weekday set.

    Empty input means "no weekdays configured" and decodes to ``()``.

    Raises:
        WeekdayDecodeError: If the stored value is corrupt.
    """
    if raw is None:
        return ()
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not raw.strip():
        return ()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise WeekdayDecodeError(raw, f"not valid JSON ({e.msg})") from e

    if not isinstance(data, list):
        raise WeekdayDecodeError(raw, "expected a list of integers")

    try:
        return normalize_weekdays(data)
    except ValueError as e:
        raise WeekdayDecodeError(raw, str(e)) from e


def parse_weekday_names(value: str) -> tuple[int, ...]:
    """Parse a comma-separated list such as ``"mon,wed,fri"`` or ``"2,4,6"``."""
    codes = []
    for part in value.split(","):
        token = part.strip().lower()
        if not token:
            continue
        if token.isdigit():
            codes.append(int(token))
        elif token[:3] in WEEKDAY_ALIASES:
            codes.append(WEEKDAY_ALIASES[token[:3]])
        else:
            raise ValueError(f"Unknown weekday '{part.strip()}'")
    return normalize_weekdays(codes)


class RecurrenceSpec(BaseModel):
    """Immutable description of how a task repeats.

    Attributes:
        pattern: Frequency pattern
        interval: Positive multiplier ("every N days/weeks/...")
        weekdays: Sunday-first weekday codes used by weekly/custom patterns
        end_type: Termination condition
        end_count: Number of occurrences for ``after_count``
        end_date: Last allowed occurrence for ``on_date``
        current_count: Running number of instances generated so far
        generated_through: Most recent occurrence produced, if any
    """

    model_config = ConfigDict(frozen=True)

    pattern: RecurrencePattern = RecurrencePattern.NEVER
    interval: int = Field(default=1, ge=1)
    weekdays: tuple[int, ...] = ()
    end_type: RecurrenceEndType = RecurrenceEndType.NEVER
    end_count: int | None = Field(default=None, ge=1)
    end_date: datetime | None = None
    current_count: int = Field(default=0, ge=0)
    generated_through: datetime | None = None

    @field_validator("weekdays", mode="before")
    @classmethod
    def validate_weekdays(cls, v):
        if v is None:
            return ()
        if isinstance(v, (str, bytes)):
            return decode_weekdays(v)
        return normalize_weekdays(v)

    @model_validator(mode="after")
    def check_end_condition(self) -> RecurrenceSpec:
        if self.end_type == RecurrenceEndType.AFTER_COUNT and self.end_count is None:
            raise ValueError("end_count is required when end_type is 'after_count'")
        if self.end_type == RecurrenceEndType.ON_DATE and self.end_date is None:
            raise ValueError("end_date is required when end_type is 'on_date'")
        return self

    @property
    def repeats(self) -> bool:
        return self.pattern != RecurrencePattern.NEVER
