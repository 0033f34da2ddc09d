"""Interactive single-page notes view."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.status import Status

from cloudnotes import CloudNotesService
from cloudnotes.cli.utils import auth
from cloudnotes.cli.utils.render import render_state
from cloudnotes.models import NotesState, PendingFile
from cloudnotes.orchestrator import NoteOrchestrator

app = typer.Typer(help="Open the interactive notes view")
console = Console()

HELP = (
    "[bold]n[/bold] new note   [bold]r[/bold] refresh   "
    "[bold]d N[/bold] delete note N   [bold]s[/bold] sign out   [bold]q[/bold] quit"
)


class ScreenRenderer:
    """Redraws the view when the notes or busy flag change; spinner while busy."""

    def __init__(self, user: str):
        self._user = user
        self._status: Optional[Status] = None
        self._last: Optional[NotesState] = None

    def __call__(self, state: NotesState) -> None:
        last, self._last = self._last, state
        # Form edits alone must not wipe the prompts
        if last is not None and (last.notes, last.busy) == (state.notes, state.busy):
            return
        if state.busy:
            if self._status is None:
                self._status = console.status("Working…")
                self._status.start()
            return
        if self._status is not None:
            self._status.stop()
            self._status = None
        console.clear()
        console.print(render_state(state, user=self._user))
        console.print(HELP)


def _fill_form(orchestrator: NoteOrchestrator) -> None:
    name: str = typer.prompt("Name", default="", show_default=False)
    description: str = typer.prompt("Description", default="", show_default=False)
    orchestrator.update_form(name=name, description=description)

    path: str = typer.prompt(
        "Image file (blank for none)", default="", show_default=False
    )
    if not path:
        orchestrator.update_form(file=None)
        return
    try:
        pending = PendingFile.from_path(path)
    except OSError as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not read {path}: {exc}")
        orchestrator.update_form(file=None)
        return
    if not pending.is_image:
        console.print(f"[yellow]Warning:[/yellow] {path} is not an image, ignored")
        orchestrator.update_form(file=None)
        return
    orchestrator.update_form(file=pending)


def _run_view(api: CloudNotesService) -> bool:
    """Drive the view until the user quits (True) or signs out (False)."""
    orchestrator = api.notes
    unsubscribe = orchestrator.subscribe(ScreenRenderer(api.account_name))
    try:
        asyncio.run(orchestrator.refresh())
        while True:
            command = typer.prompt(">", default="", show_default=False).strip()
            if command == "q":
                return True
            if command == "s":
                api.auth.sign_out()
                console.print("[green]Signed out[/green]")
                return False
            if command == "r":
                asyncio.run(orchestrator.refresh())
            elif command == "n":
                _fill_form(orchestrator)
                if not orchestrator.state.form.name.strip():
                    console.print("[yellow]A note needs a name[/yellow]")
                    continue
                asyncio.run(orchestrator.create())
            elif command.startswith("d"):
                _, _, index = command.partition(" ")
                notes = orchestrator.notes
                if not index.isdigit() or not 1 <= int(index) <= len(notes):
                    console.print(f"[yellow]No note numbered {index or '?'}[/yellow]")
                    continue
                asyncio.run(orchestrator.delete(notes[int(index) - 1]))
            else:
                console.print(HELP)
    finally:
        unsubscribe()


@app.callback(invoke_without_command=True)
def main():
    """Open the notes view; sign in first when there is no session."""
    while True:
        api = auth.get_service()
        if not api.auth.is_authenticated:
            api = auth.login()
        if _run_view(api):
            return
