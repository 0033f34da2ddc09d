"""Create command for notes."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth
from cloudnotes.models import FormBuffer, PendingFile

console = Console()


def main(
    name: str = typer.Argument(..., help="Name of the note"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    image: Optional[Path] = typer.Option(
        None,
        "--image",
        "-i",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Image file to attach",
    ),
):
    """Create a note, optionally uploading an image for it."""
    if not name.strip():
        console.print("[bold red]Error:[/bold red] Name must not be empty")
        raise typer.Exit(1)

    pending: Optional[PendingFile] = None
    if image is not None:
        pending = PendingFile.from_path(str(image))
        if not pending.is_image:
            console.print(
                f"[bold red]Error:[/bold red] {image.name} is not an image "
                f"({pending.content_type})"
            )
            raise typer.Exit(1)

    api = auth.require_session()
    form = FormBuffer(name=name, description=description, file=pending)

    with console.status("Working…"):
        created = asyncio.run(api.notes.create(form))

    if created is None:
        console.print("[bold red]Error:[/bold red] Could not create note (see logs)")
        raise typer.Exit(1)

    console.print(f"Created note [bold]{created.name}[/bold] ({created.id})")
    if created.image:
        console.print(f"Image key: {created.image}")
