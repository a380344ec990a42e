"""Rendering of command results as pretty text, tables, JSON or YAML."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from diligence_cli.utils.ui.console import get_console

console = get_console()

# Status Icons
STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
    "recurring": "🔄",
    "instance": "🔁",
}

# Metadata Icons
METADATA_ICONS = {
    "due_date": "📅",
    "recurrence": "🔄",
    "amount": "💰",
    "email": "✉️",
    "section": "📁",
    "parent": "🧬",
}


def format_output(data: Any, output_format: str = "pretty", compact: bool = False) -> None:
    """Print ``data`` in one of the ``--output`` formats."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data, compact=compact)


def format_table(data: Any) -> None:
    """Lists of dicts become a table, a single dict a key/value grid."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "tasks" in data:
            format_dict_table(data["tasks"])
        else:
            format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


# ============================================================================
# Pretty format
# ============================================================================


def format_pretty(data: Any, compact: bool = False) -> None:
    """Task lists grouped with icons; anything else falls back to a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict) and "title" in data[0]:
            format_tasks_pretty(data, compact)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "tasks" in data:
            format_tasks_pretty(data["tasks"], compact)
        elif "title" in data:
            format_task_item(data, compact=False)
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_tasks_pretty(tasks: list[dict], compact: bool = False) -> None:
    """Format tasks grouped into templates, instances and one-off tasks."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    active = [t for t in tasks if not t.get("is_completed", False)]
    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(active)} active, {len(tasks)} total)", style="dim")
    console.print(header)
    console.print()

    templates = [t for t in tasks if t.get("is_recurring")]
    instances = [t for t in tasks if t.get("is_recurring_instance")]
    others = [
        t
        for t in tasks
        if not t.get("is_recurring") and not t.get("is_recurring_instance")
    ]

    for title, group in (
        ("🔄 RECURRING", templates),
        ("🔁 OCCURRENCES", instances),
        ("⬜ TASKS", others),
    ):
        if not group:
            continue
        console.print(title, style="bold")
        for task in group:
            format_task_item(task, compact, indent="  ")
        console.print()


def format_task_item(task: dict, compact: bool = False, indent: str = "") -> None:
    """One task line plus its recurrence and amount details."""
    is_completed = task.get("is_completed", False)

    if task.get("is_recurring"):
        status_icon = STATUS_ICONS["recurring"]
    elif is_completed:
        status_icon = STATUS_ICONS["completed"]
    elif task.get("is_recurring_instance"):
        status_icon = STATUS_ICONS["instance"]
    else:
        status_icon = STATUS_ICONS["open"]

    title = task.get("title", "Untitled")
    short_id = str(task.get("id", ""))[:8]

    line = f"{indent}{status_icon} "
    line += f"[dim]{title}[/dim]" if is_completed else title
    if task.get("due_date"):
        line += f" [cyan]• {format_due_date(task['due_date'])}[/cyan]"
    line += f" [dim]({short_id})[/dim]"
    console.print(Text.from_markup(line))

    if compact:
        return

    meta_indent = indent + "   "
    if task.get("recurrence_text") and task.get("is_recurring"):
        console.print(
            f"{meta_indent}{METADATA_ICONS['recurrence']} {task['recurrence_text']}",
            style="magenta",
        )
    if task.get("amount") is not None:
        console.print(
            f"{meta_indent}{METADATA_ICONS['amount']} {task['amount']:.2f}", style="green"
        )
    if task.get("email_subject"):
        console.print(
            f"{meta_indent}{METADATA_ICONS['email']} {task['email_subject']}", style="dim"
        )


def format_due_date(value: str | datetime) -> str:
    """Format a due date relative to today where that reads better."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value

    days = (value.date() - datetime.now().date()).days
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    if days == -1:
        return "yesterday"
    if value.hour or value.minute:
        return value.strftime("%a %b %d %H:%M")
    return value.strftime("%a %b %d")
