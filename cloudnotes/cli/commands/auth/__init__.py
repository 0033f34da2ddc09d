"""Authentication commands for the cloudnotes CLI."""

import typer

from . import login, logout, signup, status

app = typer.Typer(help="Authentication commands")
app.add_typer(login.app, name="login")
app.add_typer(signup.app, name="signup")
app.add_typer(logout.app, name="logout")
app.add_typer(status.app, name="status")
