"""Delete command for notes."""

import asyncio

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth

console = Console()


def main(
    note_id: str = typer.Argument(..., help="ID of the note to delete"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete a note and its image."""
    if not force:
        confirmed = typer.confirm(f"Are you sure you want to delete note {note_id}?")
        if not confirmed:
            console.print("Deletion cancelled")
            return

    api = auth.require_session()
    orchestrator = api.notes

    async def _run() -> bool:
        await orchestrator.refresh()
        note = next((n for n in orchestrator.notes if n.id == note_id), None)
        if note is None:
            return False
        return await orchestrator.delete(note)

    with console.status("Working…"):
        deleted = asyncio.run(_run())

    if not deleted:
        console.print(f"[bold red]Error:[/bold red] Could not delete note {note_id}")
        raise typer.Exit(1)

    console.print(f"Deleted note [bold]{note_id}[/bold]")
