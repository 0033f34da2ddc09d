"""Library exceptions."""

from __future__ import annotations

from typing import Optional


class CloudNotesException(Exception):
    """Cloudnotes base exception."""

    def __init__(
        self,
        message: str,
        payload: Optional[object] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.payload = payload
        self.status_code = status_code


class ConfigError(CloudNotesException):
    """Backend outputs file missing or invalid."""


# Identity
class AuthError(CloudNotesException):
    """Identity provider error."""


class FailedLoginError(AuthError):
    """Wrong username or password, or unconfirmed account."""


class NotAuthenticatedError(AuthError):
    """No valid session is available."""


# Persistence
class ServiceError(CloudNotesException):
    """Record service (list/create/delete) failure."""


class ServiceAuthError(ServiceError):
    """Record service refused the session (401/403)."""


# Object store
class StorageError(CloudNotesException):
    """Object store (upload/signed URL/remove) failure."""


class StorageAuthError(StorageError):
    """Object store refused the session (401/403)."""
