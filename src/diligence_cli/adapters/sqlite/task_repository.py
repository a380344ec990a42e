"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any

from diligence_cli.adapters.sqlite.connection import get_connection
from diligence_cli.adapters.sqlite.utils import (
    parse_datetime,
    row_to_dict,
    to_db_datetime,
)
from diligence_cli.models import (
    RecurrenceSpec,
    Task,
    TaskCreate,
    TaskFilters,
    WeekdayDecodeError,
    decode_weekdays,
    encode_weekdays,
)
from diligence_cli.models.exceptions import AmbiguousTaskIdError, TaskNotFoundError
from diligence_cli.repositories import TaskRepository
from diligence_cli.utils.logger import get_logger
from diligence_cli.utils.uuid_utils import generate_uuid, is_full_uuid

_INSERT_COLUMNS = (
    "id",
    "title",
    "description",
    "is_completed",
    "due_date",
    "section_id",
    "created_at",
    "updated_at",
    "completed_at",
    "email_id",
    "email_subject",
    "email_sender",
    "gmail_url",
    "amount",
    "recurrence_pattern",
    "recurrence_interval",
    "recurrence_weekdays",
    "recurrence_end_type",
    "recurrence_end_count",
    "recurrence_end_date",
    "current_recurrence_count",
    "generated_through",
    "is_recurring_instance",
    "parent_recurring_task_id",
    "recurring_instance_date",
)

_INSERT_SQL = (
    f"INSERT INTO tasks ({', '.join(_INSERT_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in _INSERT_COLUMNS)})"
)


def _recurrence_columns(spec: RecurrenceSpec) -> dict[str, Any]:
    return {
        "recurrence_pattern": spec.pattern.value,
        "recurrence_interval": spec.interval,
        "recurrence_weekdays": encode_weekdays(spec.weekdays) if spec.weekdays else "",
        "recurrence_end_type": spec.end_type.value,
        "recurrence_end_count": spec.end_count,
        "recurrence_end_date": to_db_datetime(spec.end_date),
        "current_recurrence_count": spec.current_count,
        "generated_through": to_db_datetime(spec.generated_through),
    }


def task_to_row(task: Task) -> tuple:
    """Flatten a Task into the column order of ``_INSERT_COLUMNS``."""
    values = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "is_completed": int(task.is_completed),
        "due_date": to_db_datetime(task.due_date),
        "section_id": task.section_id,
        "created_at": to_db_datetime(task.created_at),
        "updated_at": to_db_datetime(task.updated_at),
        "completed_at": to_db_datetime(task.completed_at),
        "email_id": task.email_id,
        "email_subject": task.email_subject,
        "email_sender": task.email_sender,
        "gmail_url": task.gmail_url,
        "amount": task.amount,
        "is_recurring_instance": int(task.is_recurring_instance),
        "parent_recurring_task_id": task.parent_recurring_task_id,
        "recurring_instance_date": to_db_datetime(task.recurring_instance_date),
        **_recurrence_columns(task.recurrence),
    }
    return tuple(values[col] for col in _INSERT_COLUMNS)


def row_to_task(row: sqlite3.Row) -> Task:
    """Build a Task from a stored row.

    Raises:
        WeekdayDecodeError: If the stored weekday set is corrupt
    """
    data = row_to_dict(row)

    try:
        weekdays = decode_weekdays(data["recurrence_weekdays"])
    except WeekdayDecodeError:
        get_logger().error(
            "corrupt recurrence weekdays for task %s: %r",
            data["id"],
            data["recurrence_weekdays"],
        )
        raise

    spec = RecurrenceSpec(
        pattern=data["recurrence_pattern"],
        interval=data["recurrence_interval"],
        weekdays=weekdays,
        end_type=data["recurrence_end_type"],
        end_count=data["recurrence_end_count"],
        end_date=parse_datetime(data["recurrence_end_date"]),
        current_count=data["current_recurrence_count"],
        generated_through=parse_datetime(data["generated_through"]),
    )

    return Task(
        id=data["id"],
        title=data["title"],
        description=data["description"] or "",
        is_completed=bool(data["is_completed"]),
        due_date=parse_datetime(data["due_date"]),
        section_id=data["section_id"],
        created_at=parse_datetime(data["created_at"]),
        updated_at=parse_datetime(data["updated_at"]),
        completed_at=parse_datetime(data["completed_at"]),
        email_id=data["email_id"],
        email_subject=data["email_subject"],
        email_sender=data["email_sender"],
        gmail_url=data["gmail_url"],
        amount=data["amount"],
        recurrence=spec,
        is_recurring_instance=bool(data["is_recurring_instance"]),
        parent_recurring_task_id=data["parent_recurring_task_id"],
        recurring_instance_date=parse_datetime(data["recurring_instance_date"]),
    )


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Pre-opened connection (takes precedence over db_path)
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks with filtering."""
        query = "SELECT * FROM tasks WHERE 1 = 1"
        params: list[Any] = []

        if filters.kind == "templates":
            query += " AND is_recurring_instance = 0 AND recurrence_pattern != 'never'"
        elif filters.kind == "instances":
            query += " AND is_recurring_instance = 1"

        if filters.parent_id:
            query += " AND parent_recurring_task_id = ?"
            params.append(filters.parent_id)

        if filters.status == "active":
            query += " AND is_completed = 0"
        elif filters.status == "completed":
            query += " AND is_completed = 1"

        if filters.due_before:
            query += " AND due_date < ?"
            params.append(to_db_datetime(filters.due_before))

        query += " ORDER BY due_date IS NULL, due_date ASC, created_at ASC"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)

        cursor = self.connection.execute(query, params)
        return [row_to_task(row) for row in cursor.fetchall()]

    async def list_template_ids(self) -> list[str]:
        """IDs of recurring templates, without decoding their rows."""
        cursor = self.connection.execute(
            "SELECT id FROM tasks"
            " WHERE is_recurring_instance = 0 AND recurrence_pattern != 'never'"
            " ORDER BY due_date IS NULL, due_date ASC, created_at ASC"
        )
        return [row["id"] for row in cursor.fetchall()]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        cursor = self.connection.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
        row = cursor.fetchone()
        if not row:
            raise TaskNotFoundError(task_id)
        return row_to_task(row)

    async def resolve_id(self, id_or_prefix: str) -> str:
        """Resolve a full ID or unique prefix to a full ID."""
        if is_full_uuid(id_or_prefix):
            cursor = self.connection.execute(
                "SELECT id FROM tasks WHERE id = ?", (id_or_prefix,)
            )
            if cursor.fetchone() is None:
                raise TaskNotFoundError(id_or_prefix)
            return id_or_prefix

        cursor = self.connection.execute(
            "SELECT id FROM tasks WHERE substr(id, 1, ?) = ? LIMIT 5",
            (len(id_or_prefix), id_or_prefix),
        )
        matches = [row["id"] for row in cursor.fetchall()]

        if id_or_prefix in matches:
            return id_or_prefix
        if not matches:
            raise TaskNotFoundError(id_or_prefix)
        if len(matches) > 1:
            raise AmbiguousTaskIdError(id_or_prefix, matches)
        return matches[0]

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        now = datetime.now()
        task = Task(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            **task_data.model_dump(exclude={"recurrence"}),
            recurrence=task_data.recurrence,
        )
        with self.connection:
            self.connection.execute(_INSERT_SQL, task_to_row(task))
        return task

    async def update_recurrence(self, task_id: str, spec: RecurrenceSpec) -> Task:
        """Replace a task's recurrence rule."""
        columns = _recurrence_columns(spec)
        assignments = ", ".join(f"{col} = ?" for col in columns)
        with self.connection:
            cursor = self.connection.execute(
                f"UPDATE tasks SET {assignments}, updated_at = ? WHERE id = ?",
                (*columns.values(), datetime.now().isoformat(), task_id),
            )
        if cursor.rowcount == 0:
            raise TaskNotFoundError(task_id)
        return await self.get(task_id)

    async def complete(self, task_id: str) -> Task:
        """Mark a task as completed."""
        now = datetime.now().isoformat()
        with self.connection:
            cursor = self.connection.execute(
                """
                UPDATE tasks SET is_completed = 1, completed_at = ?, updated_at = ?
                WHERE id = ?
                """,
                (now, now, task_id),
            )
        if cursor.rowcount == 0:
            raise TaskNotFoundError(task_id)
        return await self.get(task_id)

    async def delete(self, task_id: str) -> bool:
        """Delete a task; its instances are removed by the foreign key cascade."""
        with self.connection:
            cursor = self.connection.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return cursor.rowcount > 0

    async def delete_many(self, task_ids: list[str]) -> int:
        """Delete several tasks in one transaction."""
        if not task_ids:
            return 0
        placeholders = ", ".join("?" for _ in task_ids)
        with self.connection:
            cursor = self.connection.execute(
                f"DELETE FROM tasks WHERE id IN ({placeholders})", task_ids
            )
        return cursor.rowcount

    async def save_generation(self, template: Task, instances: list[Task]) -> None:
        """Insert instances and update the template's counters atomically."""
        columns = {
            "current_recurrence_count": template.recurrence.current_count,
            "generated_through": to_db_datetime(template.recurrence.generated_through),
        }
        with self.connection:
            self.connection.executemany(
                _INSERT_SQL, [task_to_row(instance) for instance in instances]
            )
            cursor = self.connection.execute(
                """
                UPDATE tasks
                SET current_recurrence_count = ?, generated_through = ?, updated_at = ?
                WHERE id = ?
                """,
                (*columns.values(), datetime.now().isoformat(), template.id),
            )
            if cursor.rowcount == 0:
                raise TaskNotFoundError(template.id)
