"""Library base file."""

from __future__ import annotations

import logging
import os
from typing import Optional

import requests

from cloudnotes.auth import IdentityProvider
from cloudnotes.config import BackendOutputs, config_dir, load_outputs
from cloudnotes.orchestrator import NoteOrchestrator
from cloudnotes.services import (
    ImageStorage,
    NotesRecordService,
    ObjectStoreClient,
    RecordsClient,
)

LOGGER = logging.getLogger(__name__)

USER_AGENT = "cloudnotes/0.1"


class CloudNotesService:
    """
    A client for the managed notes backend.

    Wires the identity provider, the record service and the object store onto
    one authenticated HTTP session. ``notes`` is the orchestrator the UI drives.

    Usage:
        from cloudnotes import CloudNotesService
        api = CloudNotesService()
        api.auth.sign_in("user", "secret")
        asyncio.run(api.notes.refresh())
    """

    def __init__(
        self,
        outputs: Optional[BackendOutputs] = None,
        *,
        outputs_path: Optional[str] = None,
        session_dir: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.outputs = outputs or load_outputs(outputs_path)
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        state_dir = session_dir or str(config_dir())
        timeout = self.outputs.http.timeout

        self.auth = IdentityProvider(
            self.outputs.auth.url,
            self.session,
            os.path.join(state_dir, "session.json"),
            timeout=timeout,
        )
        self.auth.restore()

        self._records = NotesRecordService(
            RecordsClient(
                self.outputs.data.url,
                self.session,
                model_name=self.outputs.data.model_name,
                timeout=timeout,
            )
        )
        self._storage = ImageStorage(
            ObjectStoreClient(self.outputs.storage.url, self.session, timeout=timeout),
            url_expires_in=self.outputs.storage.url_expires_in,
        )
        self._notes: Optional[NoteOrchestrator] = None
        LOGGER.debug(
            "CloudNotesService ready (record type %s)", self.outputs.data.model_name
        )

    @property
    def records(self) -> NotesRecordService:
        return self._records

    @property
    def storage(self) -> ImageStorage:
        return self._storage

    @property
    def notes(self) -> NoteOrchestrator:
        """Orchestrator for the signed-in user's notes."""
        self.auth.require_session()
        if self._notes is None:
            self._notes = NoteOrchestrator(self._records, self._storage)
        return self._notes

    @property
    def account_name(self) -> str:
        return self.auth.current_user

    def __repr__(self) -> str:
        user = self.auth.current_user if self.auth.is_authenticated else None
        return f"<CloudNotesService: {user or 'not signed in'}>"
