"""CLI tests for the task and recurrence commands.

Commands run through Typer's CliRunner against a real SQLite database
created under tmp_path by the ``isolate_dirs`` fixture.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from diligence_cli.adapters.sqlite.connection import get_connection
from diligence_cli.main import app
from diligence_cli.services.recurring_task_service import MaintenanceReport

runner = CliRunner()


def _invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _add_recurring(*extra):
    result = _invoke(
        "add", "Stretch", "--due", "2024-01-01", "--recur", "daily", "-o", "json", *extra
    )
    return _json(result)


def _generate(task_id, until="2024-01-05"):
    return _json(_invoke("generate", task_id[:8], "--until", until, "-o", "json"))


class TestAdd:
    def test_plain_task(self):
        data = _json(_invoke("add", "Pay rent", "--amount", "1200", "-o", "json"))
        assert data["title"] == "Pay rent"
        assert data["is_recurring"] is False
        assert data["amount"] == 1200.0

    def test_recurring_task(self):
        data = _add_recurring("--ends-after", "3")
        assert data["is_recurring"] is True
        assert data["recurrence"]["pattern"] == "daily"
        assert data["recurrence"]["end_count"] == 3
        assert data["recurrence_text"] == "Daily, ending after 3 occurrences"

    def test_pretty_output(self):
        result = _invoke("add", "Stretch", "--due", "2024-01-01", "--recur", "weekly")
        assert result.exit_code == 0
        assert "Added recurring task: Stretch" in result.output
        assert "diligence generate" in result.output

    def test_unknown_pattern(self):
        result = _invoke("add", "Stretch", "--due", "today", "--recur", "hourly")
        assert result.exit_code == 2
        assert "Unknown pattern" in result.output

    def test_recurring_requires_due_date(self):
        result = _invoke("add", "Stretch", "--recur", "daily")
        assert result.exit_code == 2
        assert "due date" in result.output

    def test_on_requires_recur(self):
        result = _invoke("add", "Stretch", "--on", "mon")
        assert result.exit_code == 2


class TestListAndShow:
    def test_list_templates_and_instances(self):
        template = _add_recurring()
        _invoke("add", "Plain")
        _generate(template["id"])

        templates = _json(_invoke("list", "--templates", "-o", "json"))
        assert [t["id"] for t in templates] == [template["id"]]

        instances = _json(_invoke("list", "--parent", template["id"][:8], "-o", "json"))
        assert [t["due_date"] for t in instances] == [
            "2024-01-02T00:00:00",
            "2024-01-03T00:00:00",
            "2024-01-04T00:00:00",
            "2024-01-05T00:00:00",
        ]
        assert all(t["is_recurring_instance"] for t in instances)

    def test_list_limit(self):
        for title in ("a", "b", "c"):
            _invoke("add", title)
        assert len(_json(_invoke("list", "-n", "2", "-o", "json"))) == 2

    def test_list_conflicting_flags(self):
        result = _invoke("list", "--templates", "--instances")
        assert result.exit_code == 2

    def test_show_recurring(self):
        template = _add_recurring()
        data = _json(_invoke("show", template["id"][:8], "-o", "json"))
        assert data["id"] == template["id"]
        assert data["next_due_date"] is not None
        assert data["recurrence_ended"] is False

    def test_show_missing(self):
        result = _invoke("show", "ffffffff")
        assert result.exit_code == 5
        assert "Task not found" in result.output

    def test_show_corrupt_weekdays(self, tmp_path):
        template = _add_recurring()
        connection = get_connection(tmp_path / "diligence.db")
        with connection:
            connection.execute(
                "UPDATE tasks SET recurrence_weekdays = 'mon;wed' WHERE id = ?",
                (template["id"],),
            )
        result = _invoke("show", template["id"])
        assert result.exit_code == 6


class TestGenerate:
    def test_generate_until(self):
        template = _add_recurring()
        data = _generate(template["id"])
        assert data["stop_reason"] == "horizon"
        assert data["current_count"] == 4
        assert len(data["instances"]) == 4

    def test_generate_stops_at_count(self):
        template = _add_recurring("--ends-after", "2")
        data = _generate(template["id"])
        assert data["stop_reason"] == "count"
        assert len(data["instances"]) == 2

    def test_nothing_to_generate(self):
        template = _add_recurring("--ends-after", "2")
        _generate(template["id"])
        result = _invoke("generate", template["id"], "--until", "2024-01-05")
        assert result.exit_code == 0
        assert "recurrence has ended" in result.output

    def test_until_and_days_conflict(self):
        template = _add_recurring()
        result = _invoke("generate", template["id"], "--until", "2024-01-05", "--days", "3")
        assert result.exit_code == 2

    def test_until_date_includes_timed_occurrence_that_day(self):
        template = _json(
            _invoke(
                "add", "Standup", "--due", "2030-01-07 09:00",
                "--recur", "weekly", "-o", "json",
            )
        )
        data = _generate(template["id"], until="2030-01-28")
        assert [t["due_date"] for t in data["instances"]] == [
            "2030-01-14T09:00:00",
            "2030-01-21T09:00:00",
            "2030-01-28T09:00:00",
        ]

    def test_ends_on_date_includes_timed_occurrence_that_day(self):
        template = _json(
            _invoke(
                "add", "Standup", "--due", "2030-01-07 09:00", "--recur", "weekly",
                "--ends-on", "2030-01-28", "-o", "json",
            )
        )
        data = _generate(template["id"], until="2030-03-01")
        assert data["stop_reason"] == "end_date"
        assert [t["due_date"] for t in data["instances"]] == [
            "2030-01-14T09:00:00",
            "2030-01-21T09:00:00",
            "2030-01-28T09:00:00",
        ]

    def test_until_with_explicit_time_is_exact(self):
        template = _json(
            _invoke(
                "add", "Standup", "--due", "2030-01-07 09:00",
                "--recur", "weekly", "-o", "json",
            )
        )
        data = _generate(template["id"], until="2030-01-28 08:00")
        assert len(data["instances"]) == 2


class TestComplete:
    def test_complete_instance(self):
        template = _add_recurring("--ends-after", "3")
        generated = _generate(template["id"])
        first = generated["instances"][0]

        data = _json(_invoke("complete", first["id"][:8], "-o", "json"))
        assert data["completed"]["id"] == first["id"]
        assert data["completed"]["is_completed"] is True
        assert data["new_instances"] == []

    def test_complete_template_rejected(self):
        template = _add_recurring()
        result = _invoke("complete", template["id"])
        assert result.exit_code == 2
        assert "not an instance" in result.output

    def test_complete_missing(self):
        result = _invoke("complete", "ffffffff")
        assert result.exit_code == 5


class TestDelete:
    def test_delete_recurring_removes_instances(self):
        template = _add_recurring()
        _generate(template["id"])

        data = _json(_invoke("delete", template["id"], "--yes", "-o", "json"))
        assert data == {"deleted": template["id"], "removed": 5}
        assert _json(_invoke("list", "--status", "all", "-o", "json")) == []

    def test_delete_plain(self):
        task = _json(_invoke("add", "Plain", "-o", "json"))
        result = _invoke("delete", task["id"], "-y")
        assert result.exit_code == 0
        assert "Deleted 1 task(s)" in result.output

    def test_delete_cancelled(self):
        task = _json(_invoke("add", "Plain", "-o", "json"))
        result = _invoke("delete", task["id"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(_json(_invoke("list", "-o", "json"))) == 1


class TestReschedule:
    def test_reschedule_regenerates(self):
        template = _add_recurring()
        _generate(template["id"])

        result = _invoke(
            "reschedule", template["id"][:8], "--recur", "weekly", "--on", "fri"
        )
        assert result.exit_code == 0, result.output
        assert "Rescheduled 'Stretch'" in result.output

        shown = _json(_invoke("show", template["id"], "-o", "json"))
        assert shown["recurrence"]["pattern"] == "weekly"
        assert shown["recurrence"]["weekdays"] == [6]

    def test_reschedule_requires_recur(self):
        template = _add_recurring()
        result = _invoke("reschedule", template["id"])
        assert result.exit_code == 2


class TestMaintenance:
    def test_cleanup(self):
        template = _add_recurring("--ends-after", "3")
        generated = _generate(template["id"])
        _invoke("complete", generated["instances"][0]["id"])

        data = _json(_invoke("cleanup", "--older-than", "30", "-o", "json"))
        assert data == {"removed": 1}

    def test_maintain(self):
        _add_recurring("--ends-after", "3")
        data = _json(_invoke("maintain", "--days", "5", "--cleanup", "-o", "json"))
        assert data["templates_checked"] == 1
        assert data["instances_created"] == 3
        assert data["failures"] == {}

    def test_maintain_reports_failures(self):
        report = MaintenanceReport(
            templates_checked=2,
            templates_processed=1,
            instances_created=4,
            failures={"0123456789abcdef": "disk full"},
        )
        service = MagicMock()
        service.generate_upcoming = AsyncMock(return_value=report)

        with patch(
            "diligence_cli.commands.generate_command.get_recurring_task_service",
            return_value=service,
        ):
            result = _invoke("maintain")

        assert result.exit_code == 1
        assert "01234567: disk full" in result.output
        service.generate_upcoming.assert_awaited_once_with(None)
