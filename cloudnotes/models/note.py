"""Domain objects shared by the orchestrator and the rendering layer."""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Note:
    """A note as held in the local collection."""

    id: str
    name: str
    description: Optional[str] = None
    # Storage key of the uploaded image; set at creation, never changed.
    image: Optional[str] = None
    # Signed retrieval URL derived from ``image``; never persisted.
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class PendingFile:
    """A local file chosen for upload."""

    name: str
    content_type: str
    data: bytes = field(repr=False)

    @classmethod
    def from_path(cls, path: str) -> "PendingFile":
        content_type, _ = mimetypes.guess_type(path)
        with open(path, "rb") as f:
            data = f.read()
        return cls(
            name=os.path.basename(path),
            content_type=content_type or "application/octet-stream",
            data=data,
        )

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


@dataclass(frozen=True)
class FormBuffer:
    name: str = ""
    description: str = ""
    file: Optional[PendingFile] = None


@dataclass(frozen=True)
class NotesState:
    """Immutable snapshot handed to the rendering layer."""

    notes: Tuple[Note, ...] = ()
    form: FormBuffer = FormBuffer()
    busy: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.notes
