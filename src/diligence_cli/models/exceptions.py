"""Custom exceptions for Diligence tasks."""


class DiligenceError(Exception):
    """Base exception for all Diligence task errors."""


class TaskNotFoundError(DiligenceError, LookupError):
    """Raised when no task matches an ID or ID prefix."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class AmbiguousTaskIdError(DiligenceError, LookupError):
    """Raised when an ID prefix matches more than one task."""

    def __init__(self, prefix: str, matches: list[str]):
        super().__init__(
            f"ID prefix '{prefix}' matches {len(matches)} tasks; use more characters"
        )
        self.prefix = prefix
        self.matches = matches


class TaskValidationError(DiligenceError, ValueError):
    """Raised when a task or its recurrence settings are invalid."""


class NotAnInstanceError(DiligenceError, ValueError):
    """Raised when an instance-only operation targets a template or plain task."""
