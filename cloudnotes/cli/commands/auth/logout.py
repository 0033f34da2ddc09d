"""Logout command for the cloudnotes CLI."""

import os

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth

app = typer.Typer(help="Sign out of the notes backend")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    remove_all: bool = typer.Option(
        False, help="Remove all sessions and configuration files"
    ),
):
    """Sign out and remove saved credentials."""
    api = auth.get_service()
    username = api.account_name if api.auth.is_authenticated else None

    try:
        api.auth.sign_out()
        auth.remove_session_files(username)

        if remove_all and os.path.exists(auth.config_path()):
            os.remove(auth.config_path())
            console.print("Removed all configuration files")

        console.print("[green]Logged out successfully[/green]")
    except OSError as exc:
        console.print(
            "[bold red]Error:[/bold red] "
            f"Could not completely remove session data: {exc}"
        )
        raise typer.Exit(1) from exc
