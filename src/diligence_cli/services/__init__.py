"""Services module for Diligence CLI - Business logic layer."""

from .recurring_task_service import (
    CompletionResult,
    MaintenanceReport,
    RecurringTaskService,
)
from .task_service import TaskService
from .validation import validate_recurrence, validate_task

__all__ = [
    "TaskService",
    "RecurringTaskService",
    "MaintenanceReport",
    "CompletionResult",
    "validate_task",
    "validate_recurrence",
]
