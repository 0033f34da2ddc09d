"""
Record service for notes.

``RecordsClient`` is the low-level "escape hatch": it speaks GraphQL to the
data endpoint, returns typed Pydantic models and hides HTTP details.
``NotesRecordService`` is what the orchestrator uses: the same calls,
awaited off the event loop and converted into ``Note`` objects.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from cloudnotes.exceptions import ServiceAuthError, ServiceError
from cloudnotes.models import Note
from cloudnotes.models.records import (
    CreateNoteInput,
    DeleteNoteInput,
    GraphQLResponse,
    NoteConnection,
    NoteRecord,
)

from .http import HttpTransport

LOGGER = logging.getLogger(__name__)

_RECORD_FIELDS = "id name description image createdAt updatedAt owner"


def _document_name(operation: str) -> str:
    return operation[:1].upper() + operation[1:]


# ------------------------------ Raw client -----------------------------------


class RecordsClient:
    """
    Raw GraphQL client for one record type.

    Operations are named after the record type, so ``model_name="Notes"``
    maps onto ``listNotes``, ``createNotes`` and ``deleteNotes``.
    """

    def __init__(
        self,
        url: str,
        session: requests.Session,
        *,
        model_name: str = "Notes",
        timeout: float = 30.0,
    ):
        self._http = HttpTransport(
            url,
            session,
            error_cls=ServiceError,
            auth_error_cls=ServiceAuthError,
            timeout=timeout,
        )
        self.model_name = model_name
        LOGGER.info("RecordsClient initialized for record type %s.", model_name)

    def _execute(self, operation: str, document: str, variables: Dict[str, Any]):
        LOGGER.debug("Executing %s", operation)
        data = self._http.request_json(
            "POST", json_body={"query": document, "variables": variables}
        )
        try:
            envelope = GraphQLResponse.model_validate(data)
        except ValidationError as e:
            LOGGER.error("%s response validation failed.", operation)
            raise ServiceError(
                f"{operation} response validation failed", payload=data
            ) from e
        if envelope.errors:
            messages = "; ".join(err.message for err in envelope.errors)
            LOGGER.error("%s returned errors: %s", operation, messages)
            raise ServiceError(f"{operation} failed: {messages}", payload=data)
        result = (envelope.data or {}).get(operation)
        if result is None:
            raise ServiceError(f"{operation} returned no data", payload=data)
        return result

    # ----- List -----

    def list_records(self) -> NoteConnection:
        operation = f"list{self.model_name}"
        document = (
            f"query {_document_name(operation)} "
            f"{{ {operation} {{ items {{ {_RECORD_FIELDS} }} nextToken }} }}"
        )
        result = self._execute(operation, document, {})
        try:
            conn = NoteConnection.model_validate(result)
        except ValidationError as e:
            raise ServiceError(
                f"{operation} items validation failed", payload=result
            ) from e
        LOGGER.info("%s returned %d records.", operation, len(conn.items))
        if conn.next_token:
            LOGGER.debug("%s has further pages; only the first is read.", operation)
        return conn

    # ----- Create -----

    def create_record(
        self, name: str, description: Optional[str], image: Optional[str] = None
    ) -> NoteRecord:
        operation = f"create{self.model_name}"
        payload = CreateNoteInput(name=name, description=description, image=image)
        document = (
            f"mutation {_document_name(operation)}"
            f"($input: Create{self.model_name}Input!) "
            f"{{ {operation}(input: $input) {{ {_RECORD_FIELDS} }} }}"
        )
        result = self._execute(
            operation,
            document,
            {"input": payload.model_dump(by_alias=True, exclude_none=True)},
        )
        try:
            record = NoteRecord.model_validate(result)
        except ValidationError as e:
            raise ServiceError(
                f"{operation} record validation failed", payload=result
            ) from e
        LOGGER.info("%s created record %s.", operation, record.id)
        return record

    # ----- Delete -----

    def delete_record(self, record_id: str) -> None:
        operation = f"delete{self.model_name}"
        document = (
            f"mutation {_document_name(operation)}"
            f"($input: Delete{self.model_name}Input!) "
            f"{{ {operation}(input: $input) {{ id }} }}"
        )
        self._execute(
            operation,
            document,
            {"input": DeleteNoteInput(id=record_id).model_dump(by_alias=True)},
        )
        LOGGER.info("%s deleted record %s.", operation, record_id)


# ------------------------------ Async service --------------------------------


class NotesRecordService:
    """``RecordService`` backed by :class:`RecordsClient`."""

    def __init__(self, client: RecordsClient):
        self._raw = client

    @property
    def raw(self) -> RecordsClient:
        return self._raw

    async def list(self) -> List[Note]:
        conn = await asyncio.to_thread(self._raw.list_records)
        return [item.to_note() for item in conn.items if item is not None]

    async def create(
        self, name: str, description: Optional[str], image: Optional[str] = None
    ) -> Note:
        record = await asyncio.to_thread(
            self._raw.create_record, name, description, image
        )
        return record.to_note()

    async def delete(self, note_id: str) -> None:
        await asyncio.to_thread(self._raw.delete_record, note_id)
