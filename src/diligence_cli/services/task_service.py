"""Task service - Business logic for task operations.

This service layer sits between commands and repositories, providing
a clean API for task-related business logic.
"""

from __future__ import annotations

from datetime import datetime

from diligence_cli.models import RecurrenceSpec, Task, TaskCreate, TaskFilters
from diligence_cli.repositories import TaskRepository
from diligence_cli.services.validation import validate_task


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(
        self,
        *,
        kind: str = "all",
        parent_id: str | None = None,
        status: str | None = None,
        due_before: datetime | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """List tasks with filtering.

        Args:
            kind: "all", "templates" or "instances"
            parent_id: Only instances of this template
            status: Filter by status ("active", "completed", "all")
            due_before: Only tasks due before this date
            limit: Maximum number of results

        Returns:
            List of Task objects ordered by due date
        """
        filters = TaskFilters(
            kind=kind,
            parent_id=parent_id,
            status=status,
            due_before=due_before,
            limit=limit,
        )
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        """Get a task by full ID or unique ID prefix."""
        resolved = await self.repository.resolve_id(task_id)
        return await self.repository.get(resolved)

    async def add_task(
        self,
        title: str,
        *,
        description: str = "",
        due_date: datetime | None = None,
        section_id: str | None = None,
        amount: float | None = None,
        recurrence: RecurrenceSpec | None = None,
        now: datetime | None = None,
    ) -> Task:
        """Create a plain task or a recurring template.

        Raises:
            TaskValidationError: If the task or its recurrence is invalid
        """
        task_data = TaskCreate(
            title=title.strip(),
            description=description,
            due_date=due_date,
            section_id=section_id,
            amount=amount,
            recurrence=recurrence or RecurrenceSpec(),
        )
        validate_task(task_data, now)
        return await self.repository.add(task_data)


def get_task_service() -> TaskService:
    """Get TaskService backed by the configured repository."""
    from diligence_cli.services.config_service import get_task_repository

    return TaskService(get_task_repository())
