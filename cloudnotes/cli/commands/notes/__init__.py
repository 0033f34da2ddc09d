"""Notes commands for the cloudnotes CLI."""

import typer

from . import create, delete, interactive, list_notes

app = typer.Typer(help="Notes commands")
app.add_typer(list_notes.app, name="list")
app.command("create")(create.main)
app.command("delete")(delete.main)
app.add_typer(interactive.app, name="app")
