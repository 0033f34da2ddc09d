"""
Note orchestrator.

Owns the client-side state (note collection, form buffer, busy flag) and
sequences calls to the record service and the object store:

  - NoteOrchestrator.refresh()        reload and hydrate every note
  - NoteOrchestrator.create(form)     upload the image (if any), then create
  - NoteOrchestrator.delete(note)     delete the record, then its image
  - NoteOrchestrator.hydrate(note)    attach a signed image URL

Operations never raise on backend failures: errors are logged and the state
is left as it was. Every mutation publishes a fresh ``NotesState`` snapshot
to subscribers.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from typing import Callable, List, Optional

from cloudnotes.exceptions import CloudNotesException, StorageError
from cloudnotes.models import FormBuffer, Note, NotesState, PendingFile
from cloudnotes.services.base import ObjectStore, RecordService
from cloudnotes.services.storage import make_image_key

LOGGER = logging.getLogger(__name__)

Listener = Callable[[NotesState], None]

_UNSET = object()


class NoteOrchestrator:
    def __init__(
        self,
        records: RecordService,
        storage: ObjectStore,
        *,
        clock: Callable[[], float] = time.time,
    ):
        self._records = records
        self._storage = storage
        self._clock = clock
        self._state = NotesState()
        self._listeners: List[Listener] = []

    # ----------------------------- State -------------------------------------

    @property
    def state(self) -> NotesState:
        return self._state

    @property
    def notes(self) -> List[Note]:
        return list(self._state.notes)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def update_form(self, *, name=None, description=None, file=_UNSET) -> None:
        form = self._state.form
        self._publish(
            form=FormBuffer(
                name=form.name if name is None else name,
                description=form.description if description is None else description,
                file=form.file if file is _UNSET else file,
            )
        )

    def clear_form(self) -> None:
        self._publish(form=FormBuffer())

    # --------------------------- Operations ----------------------------------

    async def hydrate(self, note: Note) -> Note:
        """Return ``note`` with ``image_url`` set from its image key, if it has one."""
        if not note.image:
            return note
        try:
            url = await self._storage.get_signed_url(note.image)
        except StorageError as exc:
            LOGGER.warning("Could not get URL for image %s: %s", note.image, exc)
            return note
        return dataclasses.replace(note, image_url=url)

    async def refresh(self) -> None:
        self._publish(busy=True)
        try:
            fetched = await self._records.list()
            hydrated = await asyncio.gather(*(self.hydrate(n) for n in fetched))
            LOGGER.debug("Loaded %d notes", len(hydrated))
            self._publish(notes=tuple(hydrated))
        except CloudNotesException as exc:
            LOGGER.error("Failed to fetch notes: %s", exc)
        finally:
            self._publish(busy=False)

    async def create(self, form: Optional[FormBuffer] = None) -> Optional[Note]:
        """
        Create a note from ``form`` (default: the current form buffer).

        A blank name makes this a no-op. If the image uploads but the record
        cannot be created, the stored object is left behind.
        """
        form = self._state.form if form is None else form
        name = form.name.strip() if form.name else ""
        if not name:
            return None

        self._publish(busy=True)
        try:
            image_key = await self._upload(form.file) if form.file else None
            created = await self._records.create(
                form.name, form.description or None, image_key
            )
            LOGGER.info("Created note %s", created.id)
            self._publish(form=FormBuffer())
            created = await self.hydrate(created)
            self._publish(notes=(created,) + self._state.notes)
            return created
        except CloudNotesException as exc:
            LOGGER.error("Failed to create note: %s", exc)
            return None
        finally:
            self._publish(busy=False)

    async def _upload(self, file: PendingFile) -> str:
        key = make_image_key(file.name, self._clock())
        await self._storage.upload(key, file.data, file.content_type)
        LOGGER.debug("Uploaded %s as %s", file.name, key)
        return key

    async def delete(self, note: Note) -> bool:
        """Delete ``note`` and its image. Returns whether the note was removed."""
        if not note.id:
            return False

        self._publish(busy=True)
        try:
            await self._records.delete(note.id)
            if note.image:
                try:
                    await self._storage.remove(note.image)
                except StorageError as exc:
                    LOGGER.warning("Could not remove image %s: %s", note.image, exc)
            self._publish(
                notes=tuple(n for n in self._state.notes if n.id != note.id)
            )
            LOGGER.info("Deleted note %s", note.id)
            return True
        except CloudNotesException as exc:
            LOGGER.error("Failed to delete note %s: %s", note.id, exc)
            return False
        finally:
            self._publish(busy=False)
