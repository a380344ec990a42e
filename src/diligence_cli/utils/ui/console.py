"""Shared Rich consoles.

Commands and formatters print through the same console so output ordering
is preserved; ``highlight=False`` is for plain values such as the version.
"""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    return Console(highlight=highlight)
