"""Command 'delete' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.models.exceptions import TaskNotFoundError
from diligence_cli.services.recurring_task_service import get_recurring_task_service
from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer()


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Delete a task. Deleting a recurring task also deletes its occurrences."""
    output = resolve_output(output)
    service = get_task_service()
    task = await service.get_task(task_id)

    if not yes:
        what = "recurring task and all its occurrences" if task.is_recurring else "task"
        if not typer.confirm(f"Delete {what} '{task.title}'?"):
            format_success("Cancelled")
            raise typer.Exit(0)

    if task.is_recurring:
        removed = await get_recurring_task_service().delete_recurring_task(task.id)
    else:
        if not await service.repository.delete(task.id):
            raise TaskNotFoundError(task.id)
        removed = 1

    if output in ("json", "yaml"):
        format_output({"deleted": task.id, "removed": removed}, output)
    else:
        format_success(f"Deleted {removed} task(s)")
