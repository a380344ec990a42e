"""Materialization of recurring task instances.

The generator walks a cursor forward from the template's due date (or from
the last generated occurrence when resuming), asking the calculator for each
next occurrence until the horizon, the safety cap or an end condition stops
it. Instances are handed to a storage sink as they are produced.

Generation for one template must not run concurrently: callers serialize per
template ID (see ``RecurringTaskService``).
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from diligence_cli.models.recurrence import RecurrenceEndType, RecurrenceSpec
from diligence_cli.models.task import Task
from diligence_cli.recurrence.calculator import next_date
from diligence_cli.recurrence.end_conditions import has_ended
from diligence_cli.utils.logger import get_logger

DEFAULT_INSTANCE_CAP = 100


class InstanceSink(Protocol):
    """Storage collaborator receiving generated instances."""

    def insert(self, task: Task) -> None: ...


class InstanceBuffer:
    """In-memory sink that collects instances for a later transactional write."""

    def __init__(self) -> None:
        self.tasks: list[Task] = []

    def insert(self, task: Task) -> None:
        self.tasks.append(task)

    def __len__(self) -> int:
        return len(self.tasks)


@dataclass(slots=True)
class GenerationResult:
    """Outcome of one generation call.

    ``current_count`` and ``generated_through`` are the values the caller must
    persist on the template together with ``instances``.
    """

    instances: list[Task] = field(default_factory=list)
    current_count: int = 0
    generated_through: datetime | None = None
    stop_reason: str = "not_recurring"

    @property
    def produced(self) -> int:
        return len(self.instances)

    def apply_to(self, spec: RecurrenceSpec) -> RecurrenceSpec:
        """Return ``spec`` with the updated counter and cursor."""
        return spec.model_copy(
            update={
                "current_count": self.current_count,
                "generated_through": self.generated_through,
            }
        )


def build_instance(
    template: Task,
    occurrence: datetime,
    *,
    now: datetime,
    id_factory: Callable[[], str],
) -> Task:
    """Create the instance of ``template`` for one occurrence date."""
    return Task(
        id=id_factory(),
        title=template.title,
        description=template.description,
        due_date=occurrence,
        is_completed=False,
        section_id=template.section_id,
        email_id=template.email_id,
        email_subject=template.email_subject,
        email_sender=template.email_sender,
        gmail_url=template.gmail_url,
        amount=template.amount,
        is_recurring_instance=True,
        parent_recurring_task_id=template.id,
        recurring_instance_date=occurrence,
        created_at=now,
        updated_at=now,
    )


def _count_reached(spec: RecurrenceSpec, produced: int) -> bool:
    return (
        spec.end_type == RecurrenceEndType.AFTER_COUNT
        and spec.end_count is not None
        and spec.current_count + produced >= spec.end_count
    )


def generate_instances(
    template: Task,
    horizon: datetime,
    sink: InstanceSink | None = None,
    *,
    cap: int = DEFAULT_INSTANCE_CAP,
    now: datetime | None = None,
    resume: bool = False,
    id_factory: Callable[[], str] | None = None,
) -> GenerationResult:
    """Generate instances of ``template`` due on or before ``horizon``.

    Args:
        template: Recurring template task
        horizon: Inclusive upper bound for the walk
        sink: Storage collaborator; each instance is inserted as produced
        cap: Maximum number of instances produced by this call
        now: Clock used for creation timestamps and ``on_date`` checks
        resume: Start from ``generated_through`` instead of the due date
        id_factory: Source of new instance IDs

    Returns:
        GenerationResult with the produced instances and updated counters.
        The template itself is not modified.
    """
    spec = template.recurrence
    result = GenerationResult(
        current_count=spec.current_count,
        generated_through=spec.generated_through,
    )

    if not template.is_recurring:
        return result
    if template.due_date is None:
        result.stop_reason = "no_due_date"
        return result

    if now is None:
        now = datetime.now()
    if id_factory is None:
        id_factory = lambda: str(uuid.uuid4())  # noqa: E731

    if has_ended(spec, now):
        result.stop_reason = "ended"
        return result

    cursor = template.due_date
    if resume and spec.generated_through is not None:
        cursor = max(cursor, spec.generated_through)

    produced = 0
    result.stop_reason = "horizon"
    while cursor <= horizon:
        if produced >= cap:
            result.stop_reason = "cap"
            break
        if _count_reached(spec, produced):
            result.stop_reason = "count"
            break

        occurrence = next_date(spec, cursor)
        if occurrence is None:
            result.stop_reason = "no_next_date"
            break
        if occurrence > horizon:
            break

        if (
            spec.end_type == RecurrenceEndType.ON_DATE
            and spec.end_date is not None
            and occurrence > spec.end_date
        ):
            result.stop_reason = "end_date"
            break

        instance = build_instance(template, occurrence, now=now, id_factory=id_factory)
        result.instances.append(instance)
        if sink is not None:
            sink.insert(instance)

        cursor = occurrence
        produced += 1
        result.generated_through = occurrence

    result.current_count = spec.current_count + produced

    get_logger().debug(
        "generated %d instance(s) for template %s through %s (stop: %s)",
        produced,
        template.id,
        horizon.isoformat(),
        result.stop_reason,
    )
    return result


def generate_recurring_instances(
    template: Task,
    horizon: datetime,
    storage: InstanceSink,
    *,
    cap: int = DEFAULT_INSTANCE_CAP,
    now: datetime | None = None,
    resume: bool = False,
) -> list[Task]:
    """Generate instances into ``storage`` and advance the template's counter.

    The template's recurrence spec is replaced with one carrying the new
    ``current_count`` (and ``generated_through``); persisting the template is
    up to the caller.
    """
    result = generate_instances(
        template, horizon, storage, cap=cap, now=now, resume=resume
    )
    template.recurrence = result.apply_to(template.recurrence)
    return result.instances
