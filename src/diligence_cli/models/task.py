"""Task data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .recurrence import RecurrenceSpec


class Task(BaseModel):
    """Task model covering plain tasks, recurring templates and instances.

    Attributes:
        id: Unique identifier for the task
        title: Task title
        description: Notes about the task
        due_date: Optional due date
        is_completed: Completion status
        section_id: Section the task is filed under
        email_id: Source email message ID
        email_subject: Source email subject
        email_sender: Source email sender
        gmail_url: Deep link back to the source email
        amount: Monetary amount (bills, invoices)
        recurrence: Recurrence rule; ``never`` for non-recurring tasks
        is_recurring_instance: True for generated occurrences
        parent_recurring_task_id: ID of the template an instance came from
        recurring_instance_date: Occurrence date an instance represents
        created_at: Creation timestamp
        updated_at: Last update timestamp
        completed_at: Completion timestamp
    """

    id: str
    title: str
    description: str = ""
    due_date: datetime | None = None
    is_completed: bool = False
    section_id: str | None = None
    email_id: str | None = None
    email_subject: str | None = None
    email_sender: str | None = None
    gmail_url: str | None = None
    amount: float | None = None
    recurrence: RecurrenceSpec = Field(default_factory=RecurrenceSpec)
    is_recurring_instance: bool = False
    parent_recurring_task_id: str | None = None
    recurring_instance_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None

    @property
    def is_recurring(self) -> bool:
        """True for templates: a repeating pattern on a task that is not an instance."""
        return self.recurrence.repeats and not self.is_recurring_instance


class TaskCreate(BaseModel):
    """Model for creating a new task or recurring template."""

    title: str
    description: str = ""
    due_date: datetime | None = None
    section_id: str | None = None
    email_id: str | None = None
    email_subject: str | None = None
    email_sender: str | None = None
    gmail_url: str | None = None
    amount: float | None = None
    recurrence: RecurrenceSpec = Field(default_factory=RecurrenceSpec)


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        kind: "all", "templates" (recurring, not instances) or "instances"
        parent_id: Only instances of this template
        status: "active", "completed" or "all"
        due_before: Tasks due strictly before this date
        limit: Maximum number of results
    """

    kind: str = Field(default="all", pattern="^(all|templates|instances)$")
    parent_id: str | None = None
    status: str | None = Field(default=None, pattern="^(active|completed|all)$")
    due_before: datetime | None = None
    limit: int | None = Field(default=None, ge=1)
