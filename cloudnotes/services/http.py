"""
Minimal HTTP transport shared by the data and storage clients.

  - JSON or raw-bytes bodies over a shared ``requests.Session``
  - Status codes mapped onto the caller's error classes
  - Bounded debug dumps of failing exchanges (CLOUDNOTES_DEBUG_MAX_BYTES)
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Dict, Optional, Type

import requests

from cloudnotes.exceptions import CloudNotesException

LOGGER = logging.getLogger(__name__)


class HttpTransport:
    def __init__(
        self,
        base_url: str,
        session: requests.Session,
        *,
        error_cls: Type[CloudNotesException],
        auth_error_cls: Type[CloudNotesException],
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._error_cls = error_cls
        self._auth_error_cls = auth_error_cls
        self._timeout = timeout
        LOGGER.debug("Initialized HttpTransport with base_url: %s", self._base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    def request(
        self,
        method: str,
        path: str = "",
        *,
        json_body: Optional[Dict] = None,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        url = f"{self._base_url}{path}"
        LOGGER.info("%s to %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                json=json_body,
                data=data,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            LOGGER.error("%s to %s failed: %s", method, url, exc)
            raise self._error_cls(f"{method} {url} failed: {exc}") from exc

        code = resp.status_code
        LOGGER.debug("%s to %s returned status %d", method, url, code)
        if code >= 400:
            self._dump_http_debug(method, url, json_body, resp)
            if code in (401, 403):
                LOGGER.error("%s to %s failed with auth error: %d", method, url, code)
                raise self._auth_error_cls(
                    f"HTTP {code}: unauthorized", status_code=code
                )
            try:
                body = resp.json()
            except ValueError:
                body = resp.text
            LOGGER.error("%s to %s failed with code %d", method, url, code)
            raise self._error_cls(f"HTTP {code}", payload=body, status_code=code)
        return resp

    def request_json(self, method: str, path: str = "", **kwargs) -> Dict:
        resp = self.request(method, path, **kwargs)
        try:
            return resp.json()
        except ValueError as exc:
            LOGGER.error("Failed to parse JSON response from %s", resp.url)
            raise self._error_cls("Invalid JSON response", payload=resp.text) from exc

    @staticmethod
    def _dump_http_debug(
        method: str, url: str, payload: Optional[Dict], resp: requests.Response
    ) -> None:
        if not os.getenv("CLOUDNOTES_DEBUG"):
            return
        ts = time.strftime("%Y%m%d-%H%M%S")
        out_dir = os.path.join("workspace", "cloudnotes_debug")
        path = os.path.join(out_dir, f"{ts}_{method.lower()}_http_exchange.txt")
        max_bytes = int(os.getenv("CLOUDNOTES_DEBUG_MAX_BYTES", "524288"))
        body_text = resp.text or ""
        if len(body_text) > max_bytes:
            body_text = body_text[:max_bytes] + "\n[truncated]\n"
        try:
            os.makedirs(out_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(f"{method} {url}\n")
                f.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n\n")
                f.write(f"status={resp.status_code}\n")
                f.write(f"headers={dict(resp.headers)}\n\n")
                f.write(body_text)
        except OSError as exc:
            LOGGER.debug("Could not write HTTP debug dump %s: %s", path, exc)
