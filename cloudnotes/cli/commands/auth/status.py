"""Status command for the cloudnotes CLI."""

import os

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth

app = typer.Typer(help="Check authentication status")
console = Console()


@app.callback(invoke_without_command=True)
def main():
    """Check authentication status."""
    api = auth.get_service()

    if api.auth.is_authenticated:
        console.print(f"[green]Logged in as:[/green] [bold]{api.account_name}[/bold]")
    elif os.path.exists(api.auth.session_path):
        console.print("[yellow]Session expired, please log in again[/yellow]")
    else:
        console.print("[yellow]Not logged in[/yellow]")
