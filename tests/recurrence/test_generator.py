"""Unit tests for recurring instance generation."""

from __future__ import annotations

from datetime import datetime, timedelta
from itertools import count

from diligence_cli.models.recurrence import (
    FRIDAY,
    MONDAY,
    WEDNESDAY,
    RecurrenceEndType,
    RecurrencePattern,
    weekday_code,
)
from diligence_cli.recurrence.generator import (
    DEFAULT_INSTANCE_CAP,
    InstanceBuffer,
    generate_instances,
    generate_recurring_instances,
)

DUE = datetime(2024, 1, 1, 9, 0)  # Monday
NOW = datetime(2024, 1, 1, 8, 0)


def _dates(result) -> list[datetime]:
    return [task.due_date for task in result.instances]


def _ids():
    counter = count(1)
    return lambda: f"inst-{next(counter):03d}"


class TestBasicGeneration:
    def test_daily_steps_by_interval(self, make_template):
        template = make_template(interval=2)
        result = generate_instances(template, datetime(2024, 1, 9, 9), now=NOW)
        assert _dates(result) == [datetime(2024, 1, d, 9) for d in (3, 5, 7, 9)]

    def test_horizon_is_inclusive(self, make_template):
        template = make_template()
        result = generate_instances(template, datetime(2024, 1, 5, 9), now=NOW)
        assert _dates(result)[-1] == datetime(2024, 1, 5, 9)
        assert result.produced == 4
        assert result.stop_reason == "horizon"

    def test_due_date_itself_is_not_an_instance(self, make_template):
        result = generate_instances(make_template(), DUE + timedelta(days=3), now=NOW)
        assert DUE not in _dates(result)

    def test_weekly_three_weeks(self, make_template):
        template = make_template(pattern=RecurrencePattern.WEEKLY)
        result = generate_instances(template, datetime(2024, 1, 22, 9), now=NOW)
        assert _dates(result) == [
            datetime(2024, 1, 8, 9),
            datetime(2024, 1, 15, 9),
            datetime(2024, 1, 22, 9),
        ]

    def test_weekdays_from_friday(self, make_template):
        friday = datetime(2024, 1, 5, 9)
        template = make_template(pattern=RecurrencePattern.WEEKDAYS, due_date=friday)
        result = generate_instances(template, datetime(2024, 1, 8, 9), now=NOW)
        assert _dates(result) == [datetime(2024, 1, 8, 9)]

    def test_weekdays_skip_weekends(self, make_template):
        template = make_template(pattern=RecurrencePattern.WEEKDAYS)
        result = generate_instances(template, DUE + timedelta(days=60), now=NOW)
        assert result.produced > 0
        assert all(weekday_code(d) not in (1, 7) for d in _dates(result))

    def test_weekday_set(self, make_template):
        template = make_template(
            pattern=RecurrencePattern.WEEKLY, weekdays=(MONDAY, WEDNESDAY, FRIDAY)
        )
        result = generate_instances(template, datetime(2024, 1, 8, 9), now=NOW)
        assert [d.day for d in _dates(result)] == [3, 5, 8]

    def test_horizon_before_due_date(self, make_template):
        result = generate_instances(make_template(), DUE - timedelta(days=1), now=NOW)
        assert result.instances == []
        assert result.current_count == 0


class TestNonRecurring:
    def test_plain_task(self, make_template):
        template = make_template(pattern=RecurrencePattern.NEVER)
        result = generate_instances(template, DUE + timedelta(days=30), now=NOW)
        assert result.instances == []
        assert result.stop_reason == "not_recurring"

    def test_instance_is_not_a_template(self, make_template):
        instance = make_template().model_copy(update={"is_recurring_instance": True})
        result = generate_instances(instance, DUE + timedelta(days=30), now=NOW)
        assert result.instances == []

    def test_template_without_due_date(self, make_template):
        result = generate_instances(
            make_template(due_date=None), DUE + timedelta(days=30), now=NOW
        )
        assert result.instances == []
        assert result.stop_reason == "no_due_date"


class TestCap:
    def test_default_cap(self, make_template):
        result = generate_instances(make_template(), DUE + timedelta(days=1000), now=NOW)
        assert result.produced == DEFAULT_INSTANCE_CAP == 100
        assert result.stop_reason == "cap"

    def test_custom_cap(self, make_template):
        result = generate_instances(
            make_template(), DUE + timedelta(days=1000), cap=5, now=NOW
        )
        assert result.produced == 5


class TestAfterCount:
    def test_exact_count_from_zero(self, make_template):
        template = make_template(end_type=RecurrenceEndType.AFTER_COUNT, end_count=3)
        result = generate_instances(template, DUE + timedelta(days=30), now=NOW)
        assert result.produced == 3
        assert result.current_count == 3
        assert result.stop_reason == "count"

    def test_counts_previous_generations(self, make_template):
        template = make_template(
            end_type=RecurrenceEndType.AFTER_COUNT, end_count=3, current_count=1
        )
        result = generate_instances(template, DUE + timedelta(days=30), now=NOW)
        assert result.produced == 2
        assert result.current_count == 3

    def test_already_ended(self, make_template):
        template = make_template(
            end_type=RecurrenceEndType.AFTER_COUNT, end_count=3, current_count=3
        )
        result = generate_instances(template, DUE + timedelta(days=30), now=NOW)
        assert result.instances == []
        assert result.stop_reason == "ended"


class TestOnDate:
    def test_no_instance_after_end_date(self, make_template):
        end = datetime(2024, 1, 10, 9)
        template = make_template(end_type=RecurrenceEndType.ON_DATE, end_date=end)
        result = generate_instances(template, DUE + timedelta(days=30), now=NOW)
        assert max(_dates(result)) <= end
        assert result.produced == 9
        assert result.stop_reason == "end_date"

    def test_end_date_in_the_past(self, make_template):
        template = make_template(
            end_type=RecurrenceEndType.ON_DATE, end_date=datetime(2023, 12, 1)
        )
        result = generate_instances(template, DUE + timedelta(days=30), now=NOW)
        assert result.instances == []
        assert result.stop_reason == "ended"


class TestResume:
    def test_without_resume_calls_repeat_the_walk(self, make_template):
        template = make_template()
        horizon = DUE + timedelta(days=3)
        first = generate_instances(template, horizon, now=NOW)
        template.recurrence = first.apply_to(template.recurrence)
        second = generate_instances(template, horizon, now=NOW)
        assert _dates(first) == _dates(second)

    def test_resume_continues_after_last_occurrence(self, make_template):
        template = make_template()
        first = generate_instances(template, DUE + timedelta(days=3), now=NOW, resume=True)
        template.recurrence = first.apply_to(template.recurrence)

        second = generate_instances(template, DUE + timedelta(days=6), now=NOW, resume=True)
        assert _dates(second) == [DUE + timedelta(days=d) for d in (4, 5, 6)]
        assert second.current_count == 6
        assert second.generated_through == DUE + timedelta(days=6)

    def test_resume_with_nothing_new(self, make_template):
        template = make_template()
        horizon = DUE + timedelta(days=3)
        first = generate_instances(template, horizon, now=NOW, resume=True)
        template.recurrence = first.apply_to(template.recurrence)
        second = generate_instances(template, horizon, now=NOW, resume=True)
        assert second.instances == []
        assert second.current_count == 3


class TestInstances:
    def test_instance_fields(self, make_template):
        template = make_template(title="Pay rent")
        template.amount = 1200.0
        result = generate_instances(
            template, DUE + timedelta(days=1), now=NOW, id_factory=_ids()
        )
        (instance,) = result.instances
        assert instance.id == "inst-001"
        assert instance.title == "Pay rent"
        assert instance.amount == 1200.0
        assert instance.is_recurring_instance is True
        assert instance.parent_recurring_task_id == template.id
        assert instance.recurring_instance_date == instance.due_date
        assert instance.is_completed is False
        assert instance.recurrence.pattern == RecurrencePattern.NEVER
        assert instance.created_at == NOW

    def test_sink_receives_instances_in_order(self, make_template):
        sink = InstanceBuffer()
        result = generate_instances(
            make_template(), DUE + timedelta(days=3), sink, now=NOW
        )
        assert len(sink) == 3
        assert sink.tasks == result.instances

    def test_template_is_not_modified(self, make_template):
        template = make_template()
        generate_instances(template, DUE + timedelta(days=3), now=NOW)
        assert template.recurrence.current_count == 0


class TestGenerateRecurringInstances:
    def test_advances_template_counter(self, make_template):
        template = make_template()
        sink = InstanceBuffer()
        instances = generate_recurring_instances(
            template, DUE + timedelta(days=3), sink, now=NOW
        )
        assert len(instances) == 3
        assert sink.tasks == instances
        assert template.recurrence.current_count == 3
        assert template.recurrence.generated_through == DUE + timedelta(days=3)

    def test_non_recurring_returns_empty(self, make_template):
        template = make_template(pattern=RecurrencePattern.NEVER)
        assert generate_recurring_instances(
            template, DUE + timedelta(days=3), InstanceBuffer(), now=NOW
        ) == []
        assert template.recurrence.current_count == 0
