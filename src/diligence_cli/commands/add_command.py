"""Command 'add' of diligence-cli"""

from typing import Annotated

import typer

from diligence_cli.services.task_service import get_task_service
from diligence_cli.utils.dates import parse_date
from diligence_cli.utils.ui.console import get_console
from diligence_cli.utils.ui.formatters import format_output, format_success
from diligence_cli.utils.uuid_utils import shorten_uuid

from .decorators import command_wrapper
from .utils import build_recurrence, resolve_output, task_detail

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
async def add_command(
    title: Annotated[str, typer.Argument(help="Task title")],
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="Due date (2024-03-01, today, tomorrow, +3d)"),
    ] = None,
    recur: Annotated[
        str | None,
        typer.Option(
            "--recur",
            "-r",
            help="Repeat pattern: daily, weekdays, weekly, biweekly, monthly, yearly, custom",
        ),
    ] = None,
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
    description: Annotated[
        str, typer.Option("--description", help="Task notes")
    ] = "",
    section: Annotated[
        str | None, typer.Option("--section", help="Section ID")
    ] = None,
    amount: Annotated[
        float | None, typer.Option("--amount", help="Amount due")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """Add a task, or a recurring task when --recur is given.

    Examples:
      diligence add "Pay rent" --due 2024-03-01 --recur monthly
      diligence add "Standup" --due tomorrow --recur custom --on mon,wed,fri
      diligence add "Physio" --due today --recur weekly --ends-after 6
    """
    output = resolve_output(output)
    spec = build_recurrence(
        recur, interval=interval, on=on, ends_after=ends_after, ends_on=ends_on
    )
    task = await get_task_service().add_task(
        title,
        description=description,
        due_date=parse_date(due) if due else None,
        section_id=section,
        amount=amount,
        recurrence=spec,
    )

    if output in ("json", "yaml"):
        format_output(task_detail(task), output)
        return

    kind = "recurring task" if task.is_recurring else "task"
    format_success(f"Added {kind}: {task.title} ({shorten_uuid(task.id)})")
    if task.is_recurring:
        short_id = shorten_uuid(task.id)
        console.print(
            f"[dim]Run 'diligence generate {short_id}' to create its occurrences.[/dim]"
        )
