"""
Object store for note images.

REST layout of the storage endpoint:
  PUT    /objects/{key}              upload raw bytes
  POST   /objects/{key}/signed-url   issue a time-limited retrieval URL
  DELETE /objects/{key}              remove the object
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

import requests
from pydantic import ValidationError

from cloudnotes.exceptions import StorageAuthError, StorageError
from cloudnotes.models.records import SignedUrlResponse

from .http import HttpTransport

LOGGER = logging.getLogger(__name__)

IMAGE_PREFIX = "images"


def make_image_key(filename: str, now: float) -> str:
    """
    Key for an uploaded image: ``images/<epoch millis>-<filename>``.

    Traceable back to the original file, but two uploads of the same name
    within one millisecond collide.
    """
    return f"{IMAGE_PREFIX}/{int(now * 1000)}-{filename}"


def _object_path(key: str) -> str:
    return f"/objects/{quote(key, safe='/')}"


class ObjectStoreClient:
    """Raw storage client; methods map 1:1 to the endpoints above."""

    def __init__(self, url: str, session: requests.Session, *, timeout: float = 30.0):
        self._http = HttpTransport(
            url,
            session,
            error_cls=StorageError,
            auth_error_cls=StorageAuthError,
            timeout=timeout,
        )
        LOGGER.info("ObjectStoreClient initialized.")

    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        LOGGER.info("Uploading %d bytes to %s", len(data), key)
        self._http.request(
            "PUT",
            _object_path(key),
            data=data,
            headers={"Content-Type": content_type},
        )

    def signed_url(self, key: str, *, expires_in: int = 900) -> SignedUrlResponse:
        data = self._http.request_json(
            "POST",
            f"{_object_path(key)}/signed-url",
            json_body={"expiresIn": expires_in},
        )
        try:
            return SignedUrlResponse.model_validate(data)
        except ValidationError as e:
            raise StorageError(
                "Signed URL response validation failed", payload=data
            ) from e

    def delete_object(self, key: str) -> None:
        LOGGER.info("Removing object %s", key)
        self._http.request("DELETE", _object_path(key))


class ImageStorage:
    """``ObjectStore`` backed by :class:`ObjectStoreClient`."""

    def __init__(self, client: ObjectStoreClient, *, url_expires_in: int = 900):
        self._raw = client
        self._expires_in = url_expires_in

    @property
    def raw(self) -> ObjectStoreClient:
        return self._raw

    async def upload(self, key: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(self._raw.put_object, key, data, content_type)

    async def get_signed_url(self, key: str) -> str:
        resp = await asyncio.to_thread(
            self._raw.signed_url, key, expires_in=self._expires_in
        )
        return resp.url

    async def remove(self, key: str) -> None:
        await asyncio.to_thread(self._raw.delete_object, key)
