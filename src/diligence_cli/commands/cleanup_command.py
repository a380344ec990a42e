"""Command 'cleanup' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.services.recurring_task_service import get_recurring_task_service
from diligence_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer()


@app.command("cleanup")
@command_wrapper
async def cleanup_command(
    older_than: Annotated[
        int | None,
        typer.Option(
            "--older-than", min=0, help="Age in days of completed occurrences to remove"
        ),
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Remove completed occurrences that are past their due date."""
    output = resolve_output(output)
    removed = await get_recurring_task_service().cleanup_old_instances(older_than)

    if output in ("json", "yaml"):
        format_output({"removed": removed}, output)
    else:
        format_success(f"Removed {removed} old occurrence(s)")
