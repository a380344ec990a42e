"""Recurring task service - lifecycle of recurring templates and their instances.

Wraps the recurrence engine with storage: generation runs into an in-memory
buffer and is persisted together with the template's counters through
``TaskRepository.save_generation``. Generation for a given template is
serialized with a per-template ``asyncio.Lock``.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from diligence_cli.models import RecurrenceSpec, Task, TaskFilters
from diligence_cli.models.config_models import RecurrenceConfig
from diligence_cli.models.exceptions import NotAnInstanceError, TaskNotFoundError
from diligence_cli.recurrence import generator
from diligence_cli.recurrence.end_conditions import has_ended
from diligence_cli.repositories import TaskRepository
from diligence_cli.services.validation import validate_recurrence
from diligence_cli.utils.logger import get_logger
from diligence_cli.utils.uuid_utils import generate_uuid


@dataclass
class MaintenanceReport:
    """Summary of a maintenance run."""

    templates_checked: int = 0
    templates_processed: int = 0
    instances_created: int = 0
    instances_removed: int = 0
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class CompletionResult:
    """A completed instance and any instances created by the follow-up top-up."""

    instance: Task
    new_instances: list[Task] = field(default_factory=list)


class RecurringTaskService:
    """Service for recurring task business logic."""

    def __init__(
        self,
        task_repository: TaskRepository,
        settings: RecurrenceConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the recurring task service.

        Args:
            task_repository: TaskRepository implementation for data access
            settings: Generation settings (horizon, cap, cleanup age)
            clock: Source of the current time, ``datetime.now`` by default
        """
        self.repository = task_repository
        self.settings = settings or RecurrenceConfig()
        self.clock = clock or datetime.now
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _lock_for(self, template_id: str) -> asyncio.Lock:
        return self._locks[template_id]

    async def generate_instances(
        self, template_id: str, until: datetime
    ) -> generator.GenerationResult:
        """Materialize instances of a template due on or before ``until``.

        Instances and the template's updated counter are written in one
        transaction. Calls for the same template never overlap.

        Raises:
            TaskNotFoundError: If the template does not exist
        """
        async with self._lock_for(template_id):
            return await self._generate(template_id, until)

    async def _generate(
        self, template_id: str, until: datetime
    ) -> generator.GenerationResult:
        # Caller holds the template's lock.
        template = await self.repository.get(template_id)
        buffer = generator.InstanceBuffer()
        result = generator.generate_instances(
            template,
            until,
            buffer,
            cap=self.settings.instance_cap,
            now=self.clock(),
            resume=self.settings.resume_from_last_generated,
            id_factory=generate_uuid,
        )
        if buffer.tasks:
            updated = template.model_copy(
                update={"recurrence": result.apply_to(template.recurrence)}
            )
            await self.repository.save_generation(updated, buffer.tasks)
        return result

    async def generate_next_instance(self, template_id: str) -> Task | None:
        """Generate instances due up to tomorrow and return the first one."""
        until = self.clock() + timedelta(days=1)
        result = await self.generate_instances(template_id, until)
        return result.instances[0] if result.instances else None

    async def find_tasks_needing_instances(self) -> list[Task]:
        """Templates whose recurrence has not ended."""
        now = self.clock()
        templates = await self.repository.list_templates()
        return [t for t in templates if not has_ended(t.recurrence, now)]

    async def generate_upcoming(self, days_ahead: int | None = None) -> MaintenanceReport:
        """Generate instances for every active template.

        A failing template is logged and recorded in the report; the
        remaining templates are still processed.
        """
        logger = get_logger()
        if days_ahead is None:
            days_ahead = self.settings.horizon_days
        now = self.clock()
        until = now + timedelta(days=days_ahead)
        report = MaintenanceReport()

        # Rows are decoded one at a time so a corrupt template only fails itself.
        for template_id in await self.repository.list_template_ids():
            try:
                template = await self.repository.get(template_id)
                if has_ended(template.recurrence, now):
                    continue
            except Exception as e:
                logger.exception("could not load template %s", template_id)
                report.templates_checked += 1
                report.failures[template_id] = str(e)
                continue

            report.templates_checked += 1
            try:
                result = await self.generate_instances(template_id, until)
            except Exception as e:
                logger.exception("generation failed for template %s", template_id)
                report.failures[template_id] = str(e)
                continue
            report.templates_processed += 1
            report.instances_created += result.produced

        logger.info(
            "generated %d instance(s) for %d/%d template(s)",
            report.instances_created,
            report.templates_processed,
            report.templates_checked,
        )
        return report

    async def complete_instance(self, instance_id: str) -> CompletionResult:
        """Complete a recurring instance and top up its template.

        Raises:
            TaskNotFoundError: If the instance does not exist
            NotAnInstanceError: If the task is a template or a plain task
        """
        task = await self.repository.get(instance_id)
        if not task.is_recurring_instance:
            raise NotAnInstanceError(
                f"Task {instance_id} is not an instance of a recurring task"
            )

        completed = await self.repository.complete(instance_id)
        result = CompletionResult(instance=completed)

        parent_id = completed.parent_recurring_task_id
        if parent_id:
            until = self.clock() + timedelta(days=self.settings.completion_topup_days)
            try:
                generation = await self.generate_instances(parent_id, until)
            except TaskNotFoundError:
                get_logger().warning(
                    "instance %s refers to missing template %s", instance_id, parent_id
                )
            else:
                result.new_instances = generation.instances
        return result

    async def delete_recurring_task(self, template_id: str) -> int:
        """Delete a template and all of its instances.

        Returns:
            Number of tasks removed, the template included

        Raises:
            TaskNotFoundError: If the template does not exist
        """
        async with self._lock_for(template_id):
            template = await self.repository.get(template_id)
            instances = await self.repository.list_instances(template.id)
            removed = await self.repository.delete_many(
                [instance.id for instance in instances] + [template.id]
            )
        self._locks.pop(template_id, None)
        return removed

    async def update_pattern(
        self, template_id: str, spec: RecurrenceSpec
    ) -> generator.GenerationResult:
        """Replace a template's recurrence and regenerate its future instances.

        Incomplete instances due after now are removed. The counter and
        cursor are rebuilt from the instances that remain, then instances
        are generated ``horizon_days`` ahead under the new rule.

        Raises:
            TaskNotFoundError: If the template does not exist
            TaskValidationError: If the new rule is invalid
        """
        now = self.clock()
        async with self._lock_for(template_id):
            template = await self.repository.get(template_id)
            validate_recurrence(spec, template.due_date, now)

            instances = await self.repository.list_instances(template.id)
            future = [
                i
                for i in instances
                if not i.is_completed and i.due_date is not None and i.due_date > now
            ]
            await self.repository.delete_many([i.id for i in future])

            future_ids = {i.id for i in future}
            remaining = [i for i in instances if i.id not in future_ids]
            last = max(
                (i.due_date for i in remaining if i.due_date is not None),
                default=None,
            )
            spec = spec.model_copy(
                update={"current_count": len(remaining), "generated_through": last}
            )
            await self.repository.update_recurrence(template.id, spec)

            get_logger().info(
                "updated recurrence of %s to %s; removed %d future instance(s)",
                template.id,
                spec.pattern.value,
                len(future),
            )

            until = now + timedelta(days=self.settings.horizon_days)
            return await self._generate(template_id, until)

    async def get_instances(self, template_id: str) -> list[Task]:
        """All instances of a template ordered by due date."""
        return await self.repository.list_instances(template_id)

    async def get_next_due_instance(self, template_id: str) -> Task | None:
        """First incomplete instance due at or after now."""
        now = self.clock()
        for instance in await self.get_instances(template_id):
            if (
                not instance.is_completed
                and instance.due_date is not None
                and instance.due_date >= now
            ):
                return instance
        return None

    async def cleanup_old_instances(self, older_than_days: int | None = None) -> int:
        """Delete completed instances due before the cutoff.

        Returns:
            Number of instances removed
        """
        if older_than_days is None:
            older_than_days = self.settings.cleanup_after_days
        cutoff = self.clock() - timedelta(days=older_than_days)

        old = await self.repository.list_all(
            TaskFilters(kind="instances", status="completed", due_before=cutoff)
        )
        removed = await self.repository.delete_many([task.id for task in old])
        get_logger().info("cleaned up %d old recurring instance(s)", removed)
        return removed

    async def run_maintenance(self) -> MaintenanceReport:
        """Generate upcoming instances, then clean up old completed ones."""
        report = await self.generate_upcoming()
        report.instances_removed = await self.cleanup_old_instances()
        return report


def get_recurring_task_service() -> RecurringTaskService:
    """Get RecurringTaskService wired to the configured repository and settings."""
    from diligence_cli.services.config_service import (
        get_config_service,
        get_task_repository,
    )

    settings = get_config_service().config.recurrence
    return RecurringTaskService(get_task_repository(), settings)
