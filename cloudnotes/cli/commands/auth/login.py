"""Login command for the cloudnotes CLI."""

from typing import Optional

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth

app = typer.Typer(help="Sign in to the notes backend")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    username: Optional[str] = typer.Option(None, help="Username"),
    password: Optional[str] = typer.Option(None, help="Password"),
    save_config: bool = typer.Option(False, help="Save username to config file"),
):
    """Sign in."""
    api = auth.login(username, password)

    if save_config:
        config = auth.load_config()
        config["username"] = api.account_name
        auth.save_config(config)

    console.print(f"Successfully logged in as [bold]{api.account_name}[/bold]")
