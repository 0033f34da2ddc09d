"""Utility functions for the cloudnotes CLI auth commands."""

import json
import os
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from cloudnotes import CloudNotesService
from cloudnotes.config import config_dir
from cloudnotes.exceptions import (
    CloudNotesException,
    ConfigError,
    FailedLoginError,
)
from cloudnotes.utils import (
    delete_password_in_keyring,
    get_password_from_keyring,
    password_exists_in_keyring,
    store_password_in_keyring,
)

console = Console()

# Set by the root callback (--outputs)
outputs_path: Optional[str] = None


def config_path() -> str:
    return os.path.join(str(config_dir()), "config.json")


def load_config() -> Dict[str, Any]:
    """Load configuration from file."""
    path = config_path()
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not load config file: {exc}")
    return {}


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    path = config_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        # Ensure file has restrictive permissions
        os.chmod(path, 0o600)
    except OSError as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not save config file: {exc}")


def get_service() -> CloudNotesService:
    """Build the service from the backend outputs file; exits on config errors."""
    try:
        return CloudNotesService(outputs_path=outputs_path)
    except ConfigError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        console.print(
            Panel(
                "cloudnotes needs the outputs file generated by the backend.\n"
                "Place it at ./cloudnotes_outputs.json, point CLOUDNOTES_OUTPUTS at it,\n"
                "or pass --outputs PATH.",
                title="Configuration Required",
                border_style="red",
            )
        )
        raise typer.Exit(1) from exc


def require_session() -> CloudNotesService:
    """Return a service with a restored, valid session or exit."""
    api = get_service()
    if not api.auth.is_authenticated:
        console.print("[yellow]Not logged in[/yellow]")
        console.print("Run [bold]cloudnotes auth login[/bold] first")
        raise typer.Exit(1)
    return api


def _get_username(provided_username: Optional[str] = None) -> str:
    """Determine the username to use for authentication."""
    # command line arg > config file > prompt
    username = provided_username or load_config().get("username")
    if not username:
        username = typer.prompt("Username")
    return username


def _get_password(username: str, provided_password: Optional[str] = None) -> str:
    """Get password from provided value, keyring, or prompt."""
    if provided_password:
        return provided_password

    password = get_password_from_keyring(username)
    if not password:
        password = typer.prompt("Password", hide_input=True)

    return password


def _maybe_store_password(username: str, password: str) -> None:
    if password_exists_in_keyring(username):
        return
    if typer.confirm("Save password in keyring?", default=False):
        store_password_in_keyring(username, password)


def _handle_failed_login(
    username: str, failure_count: int, max_retries: int, exc: Exception
) -> None:
    """Handle failed login attempt."""
    # If stored password didn't work, delete it
    if password_exists_in_keyring(username):
        delete_password_in_keyring(username)

    if failure_count >= max_retries:
        console.print(
            f"[bold red]Error:[/bold red] Invalid username or password for {username}"
        )
        console.print(
            Panel(
                "Please check your username and password are correct.\n"
                "New accounts must be confirmed first: cloudnotes auth signup",
                title="Authentication Help",
                border_style="red",
            )
        )
        raise typer.Exit(1) from exc
    console.print(
        "[bold yellow]Warning:[/bold yellow] Login failed. "
        f"Attempts remaining: {max_retries - failure_count}"
    )


def remove_session_files(username: Optional[str]) -> None:
    """Remove stored secrets for a given username."""
    if username and password_exists_in_keyring(username):
        delete_password_in_keyring(username)


def login(
    username: Optional[str] = None,
    password: Optional[str] = None,
    max_retries: int = 3,
) -> CloudNotesService:
    """Sign in interactively, retrying on bad credentials."""
    api = get_service()
    resolved_username = _get_username(username)

    failure_count = 0
    while failure_count < max_retries:
        current_password = _get_password(resolved_username, password)
        try:
            api.auth.sign_in(resolved_username, current_password)
        except FailedLoginError as exc:
            failure_count += 1
            _handle_failed_login(resolved_username, failure_count, max_retries, exc)
            # Force re-prompting
            password = None
            continue
        except CloudNotesException as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            console.print(
                Panel(
                    "The identity service returned an unexpected response.\n"
                    "This could be due to:\n"
                    "- Temporary service disruption\n"
                    "- Network connectivity issues\n"
                    "- An outdated backend outputs file\n\n"
                    "Please try again later.",
                    title="API Error",
                    border_style="red",
                )
            )
            raise typer.Exit(1) from exc

        _maybe_store_password(resolved_username, current_password)
        return api

    console.print("[bold red]Error:[/bold red] Failed to authenticate")
    raise typer.Exit(1)
