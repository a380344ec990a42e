"""Database connection management for the SQLite local vault.

A process-wide connection manager ensuring WAL mode, foreign key
enforcement and an up-to-date schema.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from diligence_cli.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from diligence_cli.adapters.sqlite.migrations.runner import MigrationRunner

MEMORY_DB = ":memory:"

MIGRATIONS = [
    initial_migration,
]


def default_db_path() -> Path:
    return Path(user_data_dir("diligence_cli")) / "diligence.db"


def create_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open and configure a new connection, applying pending migrations.

    ``":memory:"`` opens a private in-memory database.
    """
    is_memory = str(db_path) == MEMORY_DB
    is_new_database = False

    if not is_memory:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

    connection = sqlite3.connect(
        str(db_path),
        check_same_thread=False,
        timeout=30.0,  # Wait up to 30s for locks
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    if not is_memory:
        connection.execute("PRAGMA journal_mode = WAL")

    # Owner read/write only
    if is_new_database:
        os.chmod(db_path, 0o600)

    MigrationRunner(connection).migrate(MIGRATIONS)
    return connection


class DatabaseConnection:
    """Singleton connection manager for the local SQLite vault.

    Keeps a single connection per process and reopens it when a different
    database path is requested.
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            atexit.register(cls.close_connection)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create the database connection.

        Args:
            db_path: Path to database file. If None, uses default location.
        """
        instance = cls()
        path = default_db_path() if db_path is None else Path(db_path)

        if instance._connection is not None and instance._db_path == path:
            return instance._connection

        if instance._connection is not None:
            instance._connection.close()

        instance._connection = create_connection(path)
        instance._db_path = path
        return instance._connection

    @classmethod
    def close_connection(cls) -> None:
        """Close the database connection, committing pending work."""
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        finally:
            instance._connection = None
            instance._db_path = None


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Get the shared database connection."""
    return DatabaseConnection.get_connection(db_path)
