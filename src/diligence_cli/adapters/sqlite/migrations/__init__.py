"""Schema migrations for the SQLite vault."""

from .runner import Migration, MigrationRunner, get_current_version

__all__ = ["Migration", "MigrationRunner", "get_current_version"]
