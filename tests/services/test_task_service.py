"""Unit tests for TaskService against an in-memory repository."""

from __future__ import annotations

from datetime import datetime

import pytest

from diligence_cli.models import RecurrenceSpec
from diligence_cli.models.exceptions import TaskNotFoundError, TaskValidationError
from diligence_cli.models.recurrence import RecurrencePattern
from diligence_cli.services.task_service import TaskService, get_task_service

NOW = datetime(2024, 1, 1, 9, 0)
DAILY = RecurrenceSpec(pattern=RecurrencePattern.DAILY)


@pytest.fixture
def service(repo) -> TaskService:
    return TaskService(repo)


class TestAddTask:
    @pytest.mark.asyncio
    async def test_plain_task(self, service):
        task = await service.add_task("  Pay rent  ", amount=1200.0, now=NOW)
        assert task.title == "Pay rent"
        assert task.amount == 1200.0
        assert task.is_recurring is False

    @pytest.mark.asyncio
    async def test_recurring_template(self, service):
        task = await service.add_task(
            "Stretch", due_date=NOW, recurrence=DAILY, now=NOW
        )
        assert task.is_recurring is True
        assert task.recurrence.current_count == 0

    @pytest.mark.asyncio
    async def test_recurring_without_due_date_rejected(self, service, repo):
        with pytest.raises(TaskValidationError):
            await service.add_task("Stretch", recurrence=DAILY, now=NOW)
        assert await service.list_tasks() == []

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, service):
        with pytest.raises(TaskValidationError):
            await service.add_task("   ", now=NOW)


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_kinds(self, service):
        await service.add_task("Plain", now=NOW)
        await service.add_task("Stretch", due_date=NOW, recurrence=DAILY, now=NOW)

        assert len(await service.list_tasks()) == 2
        templates = await service.list_tasks(kind="templates")
        assert [t.title for t in templates] == ["Stretch"]
        assert await service.list_tasks(kind="instances") == []

    @pytest.mark.asyncio
    async def test_limit(self, service):
        for i in range(3):
            await service.add_task(f"Task {i}", now=NOW)
        assert len(await service.list_tasks(limit=2)) == 2

    @pytest.mark.asyncio
    async def test_get_by_prefix(self, service):
        task = await service.add_task("Plain", now=NOW)
        fetched = await service.get_task(task.id[:8])
        assert fetched.id == task.id

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(TaskNotFoundError):
            await service.get_task("deadbeef")


def test_factory_returns_service():
    assert isinstance(get_task_service(), TaskService)
