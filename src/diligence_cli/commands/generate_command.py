"""Commands 'generate' and 'maintain' of diligence-cli"""

from datetime import datetime, timedelta
from typing import Annotated

import typer

from diligence_cli.services.recurring_task_service import get_recurring_task_service
from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.dates import parse_date
from diligence_cli.utils.ui.formatters import (
    format_output,
    format_success,
    format_warning,
)
from diligence_cli.utils.uuid_utils import shorten_uuid

from .decorators import command_wrapper
from .utils import resolve_output, task_summary

app = typer.Typer()

_STOP_REASONS = {
    "not_recurring": "task does not repeat",
    "no_due_date": "task has no due date",
    "ended": "recurrence has ended",
    "cap": "per-run instance limit reached",
    "count": "occurrence count reached",
    "end_date": "end date reached",
    "no_next_date": "no further dates",
}


@app.command("generate")
@command_wrapper
async def generate_command(
    task_id: Annotated[str, typer.Argument(help="Recurring task ID or unique prefix")],
    until: Annotated[
        str | None, typer.Option("--until", "-u", help="Generate up to this date")
    ] = None,
    days: Annotated[
        int | None,
        typer.Option("--days", min=1, help="Generate this many days ahead"),
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Create the occurrences of a recurring task up to a date."""
    output = resolve_output(output)
    if until is not None and days is not None:
        raise ValueError("Use either --until or --days, not both")

    recurring = get_recurring_task_service()
    if until is not None:
        horizon = parse_date(until, inclusive=True)
    else:
        horizon = datetime.now() + timedelta(days=days or recurring.settings.horizon_days)

    template = await get_task_service().get_task(task_id)
    result = await recurring.generate_instances(template.id, horizon)

    if output in ("json", "yaml"):
        format_output(
            {
                "template_id": template.id,
                "stop_reason": result.stop_reason,
                "current_count": result.current_count,
                "instances": [task_summary(t) for t in result.instances],
            },
            output,
        )
        return

    if result.instances:
        format_success(
            f"Generated {result.produced} occurrence(s) of '{template.title}'"
        )
        format_output([task_summary(t) for t in result.instances], output)
    else:
        reason = _STOP_REASONS.get(result.stop_reason, "nothing due before the horizon")
        format_warning(f"No occurrences generated: {reason}")


@app.command("maintain")
@command_wrapper
async def maintain_command(
    days: Annotated[
        int | None,
        typer.Option("--days", min=1, help="Generate this many days ahead"),
    ] = None,
    cleanup: Annotated[
        bool,
        typer.Option(
            "--cleanup/--no-cleanup", help="Also remove old completed occurrences"
        ),
    ] = False,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Generate upcoming occurrences for every recurring task."""
    output = resolve_output(output)
    service = get_recurring_task_service()

    report = await service.generate_upcoming(days)
    if cleanup:
        report.instances_removed = await service.cleanup_old_instances()

    if output in ("json", "yaml", "table"):
        format_output(
            {
                "templates_checked": report.templates_checked,
                "templates_processed": report.templates_processed,
                "instances_created": report.instances_created,
                "instances_removed": report.instances_removed,
                "failures": report.failures,
            },
            output,
        )
    else:
        format_success(
            f"Generated {report.instances_created} occurrence(s) for "
            f"{report.templates_processed}/{report.templates_checked} recurring task(s)"
        )
        if cleanup:
            format_success(f"Removed {report.instances_removed} old occurrence(s)")
        for template_id, message in report.failures.items():
            format_warning(f"{shorten_uuid(template_id)}: {message}")

    if not report.ok:
        raise typer.Exit(1)
