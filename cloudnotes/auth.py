"""
Identity provider client.

Signs users in and out against the backend's auth endpoint and persists the
resulting session so later invocations start authenticated. The access token
is installed as a bearer header on the shared ``requests.Session``, which the
data and storage clients reuse.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import requests
from pydantic import BaseModel, ValidationError

from cloudnotes.exceptions import (
    AuthError,
    CloudNotesException,
    FailedLoginError,
    NotAuthenticatedError,
)
from cloudnotes.models.records import AuthTokens, SignUpResponse
from cloudnotes.services.http import HttpTransport

LOGGER = logging.getLogger(__name__)


class UserSession(BaseModel):
    """An authenticated session as persisted in ``session.json``."""

    username: str
    access_token: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class IdentityProvider:
    """Sign-in, sign-up and sign-out against the auth endpoint."""

    def __init__(
        self,
        url: str,
        session: requests.Session,
        session_path: str,
        *,
        timeout: float = 30.0,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._http = HttpTransport(
            url,
            session,
            error_cls=AuthError,
            auth_error_cls=FailedLoginError,
            timeout=timeout,
        )
        self._session = session
        self._session_path = session_path
        self._now = now
        self._user: Optional[UserSession] = None

    @property
    def session_path(self) -> str:
        return self._session_path

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and not self._user.is_expired(self._now())

    @property
    def current_user(self) -> str:
        """Display name of the signed-in user."""
        if not self.is_authenticated:
            raise NotAuthenticatedError("Not logged in")
        return self._user.username

    def require_session(self) -> UserSession:
        if not self.is_authenticated:
            raise NotAuthenticatedError("Not logged in")
        return self._user

    # ----- Sign in / restore -----

    def sign_in(self, username: str, password: str) -> UserSession:
        LOGGER.debug("Signing in %s", username)
        try:
            data = self._http.request_json(
                "POST",
                "/sign-in",
                json_body={"username": username, "password": password},
            )
        except AuthError as exc:
            # The auth endpoint answers bad credentials with 400.
            if isinstance(exc, FailedLoginError) or exc.status_code == 400:
                raise FailedLoginError(
                    f"Invalid username or password for {username}"
                ) from exc
            raise
        try:
            tokens = AuthTokens.model_validate(data)
        except ValidationError as e:
            raise AuthError("Sign-in response validation failed", payload=data) from e

        user = UserSession(
            username=tokens.username or username,
            access_token=tokens.access_token,
            expires_at=self._now() + timedelta(seconds=tokens.expires_in),
        )
        self._activate(user)
        self._save(user)
        LOGGER.info("Signed in as %s", user.username)
        return user

    def restore(self) -> Optional[UserSession]:
        """Reload a persisted session, if one exists and has not expired."""
        try:
            with open(self._session_path, "r", encoding="utf-8") as f:
                user = UserSession.model_validate(json.load(f))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            LOGGER.warning(
                "Ignoring unreadable session file %s: %s", self._session_path, exc
            )
            return None

        if user.is_expired(self._now()):
            LOGGER.info("Stored session for %s has expired", user.username)
            return None
        self._activate(user)
        LOGGER.debug("Restored session for %s", user.username)
        return user

    # ----- Sign up -----

    def sign_up(self, username: str, password: str, email: str) -> bool:
        """Register a user. Returns True when a confirmation code is still required."""
        data = self._http.request_json(
            "POST",
            "/sign-up",
            json_body={"username": username, "password": password, "email": email},
        )
        try:
            resp = SignUpResponse.model_validate(data)
        except ValidationError as e:
            raise AuthError("Sign-up response validation failed", payload=data) from e
        LOGGER.info("Signed up %s (confirmed=%s)", username, resp.user_confirmed)
        return not resp.user_confirmed

    def confirm_sign_up(self, username: str, code: str) -> None:
        self._http.request(
            "POST",
            "/confirm-sign-up",
            json_body={"username": username, "code": code},
        )
        LOGGER.info("Confirmed sign-up for %s", username)

    # ----- Sign out -----

    def sign_out(self) -> None:
        """Invalidate the session remotely (best effort) and forget it locally."""
        if self._user is not None:
            try:
                self._http.request("POST", "/sign-out")
            except CloudNotesException as exc:
                LOGGER.warning("Remote sign-out failed: %s", exc)
        self._user = None
        self._session.headers.pop("Authorization", None)
        if os.path.exists(self._session_path):
            os.remove(self._session_path)
        LOGGER.info("Signed out")

    # ----- Internals -----

    def _activate(self, user: UserSession) -> None:
        self._user = user
        self._session.headers["Authorization"] = f"Bearer {user.access_token}"

    def _save(self, user: UserSession) -> None:
        with open(self._session_path, "w", encoding="utf-8") as f:
            f.write(user.model_dump_json())
        # Ensure file has restrictive permissions
        os.chmod(self._session_path, 0o600)
