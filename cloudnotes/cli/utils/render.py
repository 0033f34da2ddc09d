"""Rich renderables for note snapshots."""

from typing import Iterable, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cloudnotes.models import FormBuffer, Note, NotesState

EMPTY_MESSAGE = "No notes yet."


def notes_table(notes: Iterable[Note]) -> Table:
    table = Table("#", "Name", "Description", "Image key", "Image", "ID")
    for index, note in enumerate(notes, start=1):
        image = (
            Text("view", style=f"link {note.image_url}") if note.image_url else Text("")
        )
        table.add_row(
            str(index),
            Text(note.name, style="bold"),
            note.description or "",
            note.image or "",
            image,
            Text(note.id, style="dim"),
        )
    return table


def form_panel(form: FormBuffer, busy: bool) -> Panel:
    lines = [
        f"Name: {form.name}",
        f"Description: {form.description}",
        f"Image: {form.file.name if form.file else '-'}",
        "",
        "[dim]Working…[/dim]" if busy else "[bold]Create Note[/bold]",
    ]
    return Panel("\n".join(lines), title="New note", border_style="blue")


def render_state(state: NotesState, user: Optional[str] = None) -> RenderableType:
    """Full view: header, form and the note list."""
    header = Text("Notes App", style="bold")
    if user:
        header.append(f"   {user}", style="dim")
    body: RenderableType = (
        Text(EMPTY_MESSAGE, style="dim") if state.is_empty else notes_table(state.notes)
    )
    return Group(header, form_panel(state.form, state.busy), body)
