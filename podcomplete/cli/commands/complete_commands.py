"""
Command-line interface for answering completion requests.

``podcomplete complete ENTRY -- WORDS...`` prints one suggestion per line
followed by ``:<directive>``, the protocol read by the generated shell scripts.
"""

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from podcomplete.core.arity import CommandContext
from podcomplete.cli.app import app
from podcomplete.cli.common import ArityOptions
from podcomplete.cli.completions import CompletionRouter

logger = logging.getLogger("podcomplete")
console = Console(stderr=True)


def complete_entry_names(incomplete: str) -> List[str]:
    """Auto-complete entry point names."""
    return [name for name in CompletionRouter.entry_point_names() if name.startswith(incomplete)]


@app.command()
def complete(
    ctx: typer.Context,
    entry: str = typer.Argument(
        ..., help="Completion entry point, see 'podcomplete entries'", autocompletion=complete_entry_names
    ),
    words: Optional[List[str]] = typer.Argument(
        None, help="Positional arguments typed so far; the last one is being completed"
    ),
    exact: Optional[int] = ArityOptions.exact(),
    minimum: Optional[int] = ArityOptions.minimum(),
    maximum: Optional[int] = ArityOptions.maximum(),
):
    """
    Answer a completion request.

    Example:
        podcomplete complete --exact 2 cp-command -- mycontainer ""
    """
    if entry not in CompletionRouter.entry_point_names():
        console.print(f"[bold red]Error:[/bold red] Unknown completion entry point: {entry}")
        raise typer.Exit(1)

    words = list(words or [])
    args, partial = (words[:-1], words[-1]) if words else ([], "")
    command = CommandContext(entry, arity=ArityOptions.to_policy(exact, minimum, maximum))

    result = ctx.obj.router().complete(entry, args, partial, command)

    for line in result.rendered():
        typer.echo(line)
    typer.echo(f":{int(result.directive)}")
    typer.echo(f"Completion ended with directive: {result.directive.describe()}", err=True)


@app.command()
def entries():
    """
    List the available completion entry points.
    """
    table = Table(title="Completion entry points")
    table.add_column("Entry point", style="cyan")
    table.add_column("Completes")

    for name, description in CompletionRouter.describe_entry_points():
        table.add_row(name, description)

    Console().print(table)
