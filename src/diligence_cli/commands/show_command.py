"""Command 'show' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.recurrence import next_due_date, recurrence_has_ended
from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .utils import resolve_output, task_detail

app = typer.Typer()


@app.command("show")
@command_wrapper
async def show_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Show a task with its recurrence details."""
    output = resolve_output(output)
    task = await get_task_service().get_task(task_id)

    data = task_detail(task)
    if task.is_recurring:
        next_due = next_due_date(task)
        data["next_due_date"] = next_due.isoformat() if next_due else None
        data["recurrence_ended"] = recurrence_has_ended(task)

    if output == "pretty":
        # Key/value view reads better than the list layout for one task
        data.pop("recurrence", None)
        output = "table"
    format_output(data, output)
