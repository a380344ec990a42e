"""Command 'list' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .utils import resolve_output, task_summary

app = typer.Typer()


@app.command("list")
@command_wrapper
async def list_command(
    templates: Annotated[
        bool, typer.Option("--templates", help="Only recurring tasks")
    ] = False,
    instances: Annotated[
        bool, typer.Option("--instances", help="Only generated occurrences")
    ] = False,
    parent: Annotated[
        str | None, typer.Option("--parent", help="Occurrences of this recurring task")
    ] = None,
    status: Annotated[
        str, typer.Option("--status", "-s", help="active, completed or all")
    ] = "active",
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", min=1, help="Maximum results")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """List tasks."""
    output = resolve_output(output)
    if templates and instances:
        raise ValueError("Use either --templates or --instances, not both")

    kind = "templates" if templates else "instances" if instances else "all"
    service = get_task_service()
    parent_id = None
    if parent:
        parent_id = (await service.get_task(parent)).id
        kind = "instances"

    tasks = await service.list_tasks(
        kind=kind, parent_id=parent_id, status=status, limit=limit
    )
    format_output([task_summary(task) for task in tasks], output)
