"""The cloudnotes library."""

import logging

from cloudnotes.base import CloudNotesService
from cloudnotes.exceptions import (
    CloudNotesException,
    ServiceError,
    StorageError,
)
from cloudnotes.models import FormBuffer, Note, NotesState, PendingFile
from cloudnotes.orchestrator import NoteOrchestrator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CloudNotesException",
    "CloudNotesService",
    "FormBuffer",
    "Note",
    "NoteOrchestrator",
    "NotesState",
    "PendingFile",
    "ServiceError",
    "StorageError",
]
