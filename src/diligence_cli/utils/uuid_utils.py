"""UUID helpers: generation and short display."""

from __future__ import annotations

import re
import uuid

# Relaxed UUID pattern (any version)
UUID_RELAXED_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def generate_uuid() -> str:
    """Generate a new UUID4 as string."""
    return str(uuid.uuid4())


def is_full_uuid(value: str) -> bool:
    """Check if string is a full 36-character UUID."""
    if not isinstance(value, str):
        return False
    return len(value) == 36 and UUID_RELAXED_PATTERN.match(value) is not None


def shorten_uuid(value: str, length: int = 8) -> str:
    """Get the first ``length`` characters of a UUID for display."""
    return value[:length]
