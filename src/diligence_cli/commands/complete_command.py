"""Command 'complete' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.services.recurring_task_service import get_recurring_task_service
from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.ui.console import get_console
from diligence_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output, task_summary

app = typer.Typer()
console = get_console()


@app.command("complete")
@command_wrapper
async def complete_command(
    task_id: Annotated[str, typer.Argument(help="Occurrence ID or unique prefix")],
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Complete an occurrence and top up its recurring task."""
    output = resolve_output(output)
    task = await get_task_service().get_task(task_id)
    result = await get_recurring_task_service().complete_instance(task.id)

    if output in ("json", "yaml"):
        format_output(
            {
                "completed": task_summary(result.instance),
                "new_instances": [task_summary(t) for t in result.new_instances],
            },
            output,
        )
        return

    title = result.instance.title
    if len(title) > 60:
        title = title[:57] + "..."
    format_success(f"Completed: {title}")
    if result.new_instances:
        console.print(
            f"[dim]{len(result.new_instances)} new occurrence(s) scheduled[/dim]"
        )
