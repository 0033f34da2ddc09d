"""Collaborator contracts consumed by the note orchestrator."""

from __future__ import annotations

from typing import List, Optional, Protocol

from cloudnotes.models import Note


class RecordService(Protocol):
    """Structured-record persistence for notes. Failures raise ``ServiceError``."""

    async def list(self) -> List[Note]:
        """Return every stored note."""
        ...

    async def create(
        self, name: str, description: Optional[str], image: Optional[str] = None
    ) -> Note:
        """Create a note; the service assigns its identifier."""
        ...

    async def delete(self, note_id: str) -> None:
        """Delete the note with the given identifier."""
        ...


class ObjectStore(Protocol):
    """Binary object storage. Failures raise ``StorageError``."""

    async def upload(self, key: str, data: bytes, content_type: str) -> None:
        """Store ``data`` under ``key``; returns once the upload completed."""
        ...

    async def get_signed_url(self, key: str) -> str:
        """Return a time-limited retrieval URL for ``key``."""
        ...

    async def remove(self, key: str) -> None:
        """Delete the object stored under ``key``."""
        ...
