"""Repository abstraction layer for Diligence CLI.

Defines the abstract task repository (interface) following the ports and
adapters pattern, so the recurrence services stay independent of the
underlying storage mechanism.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from diligence_cli.models import RecurrenceSpec, Task, TaskCreate, TaskFilters


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks matching ``filters``, ordered by due date."""
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def list_template_ids(self) -> list[str]:
        """IDs of all recurring templates, by due date.

        Rows are not decoded, so a corrupt template still shows up here.
        """
        raise NotImplementedError(
            "TaskRepository.list_template_ids() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a task by its full ID.

        Raises:
            TaskNotFoundError: If no such task exists
            WeekdayDecodeError: If the stored weekday set is corrupt
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def resolve_id(self, id_or_prefix: str) -> str:
        """Resolve a full ID or unique ID prefix to a full task ID.

        Raises:
            TaskNotFoundError: If nothing matches
            AmbiguousTaskIdError: If the prefix matches several tasks
        """
        raise NotImplementedError(
            "TaskRepository.resolve_id() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a plain task or recurring template."""
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update_recurrence(self, task_id: str, spec: RecurrenceSpec) -> Task:
        """Replace the recurrence rule of a task."""
        raise NotImplementedError(
            "TaskRepository.update_recurrence() must be implemented by adapter"
        )

    @abstractmethod
    async def complete(self, task_id: str) -> Task:
        """Mark a task as completed."""
        raise NotImplementedError(
            "TaskRepository.complete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task. Returns False if it did not exist."""
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_many(self, task_ids: list[str]) -> int:
        """Delete several tasks, returning how many were removed."""
        raise NotImplementedError(
            "TaskRepository.delete_many() must be implemented by adapter"
        )

    @abstractmethod
    async def save_generation(self, template: Task, instances: list[Task]) -> None:
        """Persist generated instances and the template's recurrence counters.

        Implementations must write both in a single transaction so the
        template's ``current_count`` never drifts from stored instances.
        """
        raise NotImplementedError(
            "TaskRepository.save_generation() must be implemented by adapter"
        )

    async def list_instances(self, parent_id: str) -> list[Task]:
        """List all instances generated from a template, by due date."""
        return await self.list_all(TaskFilters(kind="instances", parent_id=parent_id))

    async def list_templates(self) -> list[Task]:
        """List all recurring templates."""
        return await self.list_all(TaskFilters(kind="templates"))
