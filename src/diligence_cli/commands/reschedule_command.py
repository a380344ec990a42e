"""Command 'reschedule' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.services.recurring_task_service import get_recurring_task_service
from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import build_recurrence, resolve_output, task_summary

app = typer.Typer()


@app.command("reschedule")
@command_wrapper
async def reschedule_command(
    task_id: Annotated[str, typer.Argument(help="Recurring task ID or unique prefix")],
    recur: Annotated[
        str, typer.Option("--recur", "-r", help="New repeat pattern")
    ],
    interval: Annotated[
        int, typer.Option("--interval", "-i", min=1, help="Repeat every N units")
    ] = 1,
    on: Annotated[
        str | None, typer.Option("--on", help="Weekdays, e.g. mon,wed,fri")
    ] = None,
    ends_after: Annotated[
        int | None,
        typer.Option("--ends-after", min=1, help="Stop after N occurrences"),
    ] = None,
    ends_on: Annotated[
        str | None, typer.Option("--ends-on", help="Stop after this date")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Change how a task repeats and regenerate its future occurrences."""
    output = resolve_output(output)
    spec = build_recurrence(
        recur, interval=interval, on=on, ends_after=ends_after, ends_on=ends_on
    )
    template = await get_task_service().get_task(task_id)
    result = await get_recurring_task_service().update_pattern(template.id, spec)

    if output in ("json", "yaml"):
        format_output(
            {
                "template_id": template.id,
                "instances": [task_summary(t) for t in result.instances],
            },
            output,
        )
        return
    format_success(
        f"Rescheduled '{template.title}': {result.produced} occurrence(s) generated"
    )
