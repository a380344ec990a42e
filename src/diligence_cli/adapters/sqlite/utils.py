"""Utility functions for SQLite adapter."""

from __future__ import annotations

from datetime import datetime
from typing import Any


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def to_db_datetime(value: datetime | None) -> str | None:
    """Serialize a datetime column value."""
    if value is None:
        return None
    return value.isoformat()


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse datetime from a stored column value."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
