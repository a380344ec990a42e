"""Parsing of user-supplied dates."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from dateutil.parser import ParserError
from dateutil.parser import parse as parse_dt

_RELATIVE_PATTERN = re.compile(r"^\+(\d+)([dwm])$")


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def parse_date(
    value: str, *, now: datetime | None = None, inclusive: bool = False
) -> datetime:
    """Parse a date such as ``2024-01-31``, ``today``, ``tomorrow`` or ``+3d``.

    A value without a time of day resolves to midnight, or to the last
    instant of that day when ``inclusive`` is set. Explicit times are kept.
    Returned datetimes are naive; aware input is converted by dropping tzinfo.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if now is None:
        now = datetime.now()
    day_bound = end_of_day if inclusive else start_of_day
    text = value.strip().lower()

    if text == "today":
        return day_bound(now)
    if text == "tomorrow":
        return day_bound(now) + timedelta(days=1)

    match = _RELATIVE_PATTERN.match(text)
    if match:
        amount, unit = int(match.group(1)), match.group(2)
        days = {"d": 1, "w": 7, "m": 30}[unit] * amount
        return day_bound(now) + timedelta(days=days)

    try:
        parsed = parse_dt(value, default=start_of_day(now))
        if inclusive:
            # A different hour under the late default means no time was given.
            late = parse_dt(value, default=end_of_day(now))
            if late.hour != parsed.hour:
                parsed = late
    except (ParserError, OverflowError) as e:
        raise ValueError(f"Invalid date: '{value}'") from e
    return parsed.replace(tzinfo=None)
