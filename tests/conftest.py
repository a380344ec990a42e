"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and a
migrated in-memory database for repository and service tests.
"""

from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from diligence_cli.adapters.sqlite.connection import create_connection
from diligence_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from diligence_cli.models import RecurrenceSpec, Task
from diligence_cli.models.recurrence import RecurrencePattern

# Monday
NOW = datetime(2024, 1, 1, 9, 0, 0)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path):
    """Point config, data and log directories at *tmp_path*.

    Also resets the logger singleton and the lru-cached config service so
    each test starts from a clean slate.
    """
    import diligence_cli.utils.logger as logger_mod
    from diligence_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    logger_mod._logger = None
    logging.getLogger(logger_mod.APP_NAME).handlers.clear()
    get_config_service.cache_clear()

    with (
        patch("diligence_cli.utils.logger.user_log_dir", return_value=tmpdir),
        patch("diligence_cli.services.config_service.user_config_dir", return_value=tmpdir),
        patch("diligence_cli.services.config_service.user_data_dir", return_value=tmpdir),
        patch("diligence_cli.adapters.sqlite.connection.user_data_dir", return_value=tmpdir),
    ):
        yield tmp_path

    get_config_service.cache_clear()
    for handler in logging.getLogger(logger_mod.APP_NAME).handlers:
        handler.close()
    logging.getLogger(logger_mod.APP_NAME).handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def conn():
    """Fresh in-memory database with all migrations applied."""
    connection = create_connection(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def repo(conn) -> SqliteTaskRepository:
    """Repository bound to the in-memory connection."""
    return SqliteTaskRepository(connection=conn)


# ---------------------------------------------------------------------------
# Task builders
# ---------------------------------------------------------------------------


def _make_template(
    *,
    task_id: str = "tmpl-0001",
    title: str = "Water plants",
    due_date: datetime | None = NOW,
    pattern: RecurrencePattern = RecurrencePattern.DAILY,
    **spec_fields,
) -> Task:
    return Task(
        id=task_id,
        title=title,
        due_date=due_date,
        recurrence=RecurrenceSpec(pattern=pattern, **spec_fields),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def make_template():
    """Factory building a recurring template; keyword args go to its rule."""
    return _make_template
