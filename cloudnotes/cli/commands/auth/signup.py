"""Sign-up command for the cloudnotes CLI."""

import typer
from rich.console import Console

from cloudnotes.cli.utils import auth
from cloudnotes.exceptions import CloudNotesException

app = typer.Typer(help="Create an account")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    username: str = typer.Option(..., prompt=True, help="Username"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
):
    """Create an account and confirm it with the emailed code."""
    api = auth.get_service()

    try:
        needs_code = api.auth.sign_up(username, password, email)
        if needs_code:
            console.print(f"A confirmation code was sent to [bold]{email}[/bold]")
            code: str = typer.prompt("Enter the confirmation code")
            api.auth.confirm_sign_up(username, code)
    except CloudNotesException as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Account [bold]{username}[/bold] created. You can now log in.")
