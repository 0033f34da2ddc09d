"""List command for notes."""

import asyncio

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth
from cloudnotes.cli.utils.render import EMPTY_MESSAGE, notes_table

app = typer.Typer(help="List notes")
console = Console()


@app.callback(invoke_without_command=True)
def main():
    """List all notes with their image links."""
    api = auth.require_session()
    orchestrator = api.notes

    with console.status("Working…"):
        asyncio.run(orchestrator.refresh())

    if orchestrator.state.is_empty:
        console.print(EMPTY_MESSAGE)
        return

    console.print(notes_table(orchestrator.state.notes))
