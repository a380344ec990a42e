"""Forward-only, version-numbered schema migrations for the SQLite vault.

Each migration is a list of SQL statements applied in its own transaction
together with its ``schema_version`` row, so a failing statement leaves
the schema exactly as it was.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from diligence_cli.utils.logger import get_logger

_CREATE_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    """One schema step.

    Attributes:
        version: Sequential version number, starting at 1
        description: Recorded in ``schema_version``
        statements: SQL executed in order
    """

    version: int
    description: str
    statements: tuple[str, ...]

    def apply(self, connection: sqlite3.Connection) -> None:
        for sql in self.statements:
            connection.execute(sql)


class MigrationRunner:
    """Applies pending migrations to a connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        with self.connection:
            self.connection.execute(_CREATE_VERSION_TABLE)

    def current_version(self) -> int:
        """Highest applied version, 0 for an empty database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def pending(self, migrations: Iterable[Migration]) -> list[Migration]:
        """Migrations newer than the current version, in version order.

        Raises:
            ValueError: If two migrations share a version number
        """
        ordered = sorted(migrations, key=lambda m: m.version)
        versions = [m.version for m in ordered]
        if len(set(versions)) != len(versions):
            raise ValueError(f"Duplicate migration versions in {versions}")
        current = self.current_version()
        return [m for m in ordered if m.version > current]

    def apply(self, migration: Migration) -> None:
        """Apply one migration atomically.

        Raises:
            ValueError: If the migration is not newer than the current version
            RuntimeError: If a statement fails; nothing is applied
        """
        current = self.current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than schema version {current}"
            )

        # DDL does not open an implicit transaction, so start one explicitly.
        self.connection.execute("BEGIN")
        try:
            migration.apply(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) "
                "VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now().isoformat()),
            )
        except Exception as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e
        self.connection.commit()

        get_logger().info(
            "applied migration %d: %s", migration.version, migration.description
        )

    def migrate(self, migrations: Iterable[Migration]) -> int:
        """Apply every pending migration, returning how many ran."""
        pending = self.pending(migrations)
        for migration in pending:
            self.apply(migration)
        return len(pending)


def get_current_version(connection: sqlite3.Connection) -> int:
    """Schema version of ``connection``."""
    return MigrationRunner(connection).current_version()
