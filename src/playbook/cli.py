"""Playbook CLI: validate playbook workflow documents."""

import typer
from rich.console import Console

from playbook import __version__

from .commands import check
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"playbook {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="playbook",
    help="Parse and validate playbook workflow documents",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Playbook CLI - parse and validate playbook documents."""
    configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    console = Console(force_terminal=not no_color, no_color=no_color)
    set_output_context(OutputContext(console=console, json_mode=json_output))


app.command("check")(check)
