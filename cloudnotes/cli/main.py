#!/usr/bin/env python
"""Command line interface for cloudnotes."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from cloudnotes.cli.commands import auth, notes
from cloudnotes.cli.utils import auth as auth_utils

app = typer.Typer(help="Command Line Interface for cloudnotes")
console = Console()

# Add command groups
app.add_typer(auth.app, name="auth")
app.add_typer(notes.app, name="notes")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
    outputs: Optional[str] = typer.Option(
        None, help="Path to the backend outputs file"
    ),
):
    """Create, list and delete notes stored in the managed backend."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    auth_utils.outputs_path = outputs


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
