"""
Pydantic wire models for the managed backend.

Covers:
    - GraphQL envelopes returned by the data endpoint
    - Note records (list/create/delete payloads)
    - Signed URL responses from the storage endpoint
    - Token responses from the identity endpoint
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from cloudnotes.models.note import Note
from cloudnotes.utils import underscore_to_camelcase


# ─── Base and Shared Config ──────────────────────────────────────────────────
class ConfigModel(BaseModel):
    """Base class providing camel-case aliases, population by name, and allowing extra fields."""

    model_config = ConfigDict(
        alias_generator=underscore_to_camelcase,
        populate_by_name=True,
        extra="allow",
    )


# ─── GraphQL envelope ───────────────────────────────────────────────────────
class GraphQLError(ConfigModel):
    """One entry of a GraphQL ``errors`` array."""

    message: str
    error_type: Optional[str] = None
    path: Optional[List[Union[str, int]]] = None


class GraphQLResponse(ConfigModel):
    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[GraphQLError]] = None


# ─── Note records ───────────────────────────────────────────────────────────
class NoteRecord(ConfigModel):
    """A record of the notes type as stored by the data endpoint."""

    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    """Storage key of the attached image, if any."""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    owner: Optional[str] = None

    def to_note(self) -> Note:
        return Note(
            id=self.id,
            name=self.name,
            description=self.description,
            image=self.image,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class NoteConnection(ConfigModel):
    """Result of a list query."""

    items: List[Optional[NoteRecord]] = Field(default_factory=list)
    next_token: Optional[str] = None


class CreateNoteInput(ConfigModel):
    name: str
    description: Optional[str] = None
    image: Optional[str] = None


class DeleteNoteInput(ConfigModel):
    id: str


# ─── Storage ────────────────────────────────────────────────────────────────
class SignedUrlResponse(ConfigModel):
    url: str
    expires_at: Optional[datetime] = None


# ─── Identity ───────────────────────────────────────────────────────────────
class AuthTokens(ConfigModel):
    """Tokens issued on sign-in."""

    access_token: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: int = 3600
    username: Optional[str] = None


class SignUpResponse(ConfigModel):
    user_confirmed: bool = False
    username: Optional[str] = None
