"""
Command-line interface for the shell helper scripts.
"""

from pathlib import Path
from typing import Optional

import typer

from podcomplete.cli.app import app
from podcomplete.cli.completion import (
    SUPPORTED_SHELLS,
    install_completion,
    show_completion,
)


@app.command()
def completion(
    shell: Optional[str] = typer.Option(
        None,
        "--shell",
        "-s",
        help="Shell type (bash, zsh, fish)",
        autocompletion=lambda: SUPPORTED_SHELLS,
    ),
    install: bool = typer.Option(
        False, "--install", "-i", help="Install the helper for the specified shell"
    ),
    show: bool = typer.Option(False, "--show", help="Show the helper script"),
    path: Optional[Path] = typer.Option(
        None, "--path", "-p", help="Custom path to install the helper script"
    ),
):
    """
    Shell helper scripts.

    The helper calls 'podcomplete complete' and applies the returned directive,
    so other tools can wire completion entry points into their own scripts.

    Examples:
        # Show the helper for the current shell:
        podcomplete completion --show

        # Install the helper for a specific shell:
        podcomplete completion --install --shell bash
    """
    if shell is not None and shell not in SUPPORTED_SHELLS:
        raise typer.BadParameter(f"Unsupported shell: {shell}", param_hint="--shell")

    if install:
        install_completion(shell, path)
    elif show:
        show_completion(shell)
    else:
        typer.echo("Use --show to print the helper script or --install to install it.")
