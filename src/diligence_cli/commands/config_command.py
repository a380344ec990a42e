"""Configuration management commands."""

from typing import Annotated

import typer

from diligence_cli.services.config_service import get_config_service
from diligence_cli.utils.exit_codes import ExitCode
from diligence_cli.utils.typer_helpers import SuggestingGroup
from diligence_cli.utils.ui.console import get_console
from diligence_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .utils import resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console(highlight=False)


def _unknown_key(key: str | None) -> AppError:
    return AppError(
        f"Configuration key '{key}' not found", exit_code=ExitCode.INVALID_ARGS
    )


@app.command("view")
@command_wrapper
def view_config(
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output format")
    ] = None,
) -> None:
    """View current configuration."""
    output = resolve_output(output)
    config = get_config_service().config.model_dump()
    if output == "pretty":
        output = "yaml"
    format_output(config, output)


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[
        str, typer.Argument(help="Configuration key (e.g., recurrence.horizon_days)")
    ],
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise _unknown_key(key) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[
        str, typer.Argument(help="Configuration key (e.g., recurrence.horizon_days)")
    ],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    try:
        new_value = get_config_service().set(key, value)
    except KeyError as e:
        raise _unknown_key(key) from e
    format_success(f"Configuration '{key}' set to '{new_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[
        str | None, typer.Argument(help="Configuration key to reset")
    ] = None,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_success("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise _unknown_key(key) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
