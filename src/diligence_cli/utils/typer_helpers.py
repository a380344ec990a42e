"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from diligence_cli.utils.exit_codes import ExitCode
from diligence_cli.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Typer group accepting unique command prefixes and suggesting on typos.

    ``diligence gen`` runs ``generate``; ``diligence genrate`` prints
    "Did you mean this?" with the closest command names.
    """

    def resolve_command(self, ctx, args):
        if args and args[0] not in self.commands:
            prefixed = [name for name in self.commands if name.startswith(args[0])]
            if len(prefixed) == 1:
                args = [prefixed[0], *args[1:]]

        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = get_close_matches(
                attempted, list(self.commands), n=3, cutoff=0.6
            )
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"'
            )
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from e
