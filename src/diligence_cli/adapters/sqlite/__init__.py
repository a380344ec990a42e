"""SQLite adapter module - Local database storage implementation."""

from diligence_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from diligence_cli.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "SqliteTaskRepository",
    "get_connection",
]
