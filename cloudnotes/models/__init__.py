"""Public exports for cloudnotes data models."""

from __future__ import annotations

from .note import FormBuffer, Note, NotesState, PendingFile

__all__ = [
    "FormBuffer",
    "Note",
    "NotesState",
    "PendingFile",
]
