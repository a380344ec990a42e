"""Main entry point for Diligence CLI."""

import typer

from diligence_cli.commands import (
    add_command,
    cleanup_command,
    complete_command,
    config_command,
    delete_command,
    generate_command,
    list_command,
    reschedule_command,
    show_command,
    version_command,
)
from diligence_cli.utils.exit_codes import exit_codes_epilog
from diligence_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="diligence",
    cls=SuggestingGroup,
    help="Recurring tasks from the command line",
    no_args_is_help=True,
    epilog=exit_codes_epilog(),
)

# Task commands
app.command("add")(add_command.add_command)
app.command("list")(list_command.list_command)
app.command("show")(show_command.show_command)
app.command("complete")(complete_command.complete_command)
app.command("delete")(delete_command.delete_command)

# Recurrence commands
app.command("generate")(generate_command.generate_command)
app.command("maintain")(generate_command.maintain_command)
app.command("reschedule")(reschedule_command.reschedule_command)
app.command("cleanup")(cleanup_command.cleanup_command)

app.command("version")(version_command.version)

app.add_typer(config_command.app, name="config", help="Configuration management")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
