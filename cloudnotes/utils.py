"""Utils."""

from __future__ import annotations

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError

KEYRING_SYSTEM = "cloudnotes://cloudnotes-password"

LOGGER = logging.getLogger(__name__)


def password_exists_in_keyring(username: str) -> bool:
    """Return true if the password of a username exists in the keyring."""
    return get_password_from_keyring(username) is not None


def get_password_from_keyring(username: str) -> Optional[str]:
    """Get the password from a username."""
    try:
        return keyring.get_password(KEYRING_SYSTEM, username)
    except KeyringError as exc:
        LOGGER.debug("Keyring lookup failed for %s: %s", username, exc)
        return None


def store_password_in_keyring(username: str, password: str) -> None:
    """Store the password of a username."""
    keyring.set_password(KEYRING_SYSTEM, username, password)


def delete_password_in_keyring(username: str) -> None:
    """Delete the password of a username."""
    try:
        keyring.delete_password(KEYRING_SYSTEM, username)
    except KeyringError as exc:
        LOGGER.debug("Keyring delete failed for %s: %s", username, exc)


def underscore_to_camelcase(word: str, initial_capital: bool = False) -> str:
    """Transform a word to camelCase."""
    words = [x.capitalize() or "_" for x in word.split("_")]
    if not initial_capital:
        words[0] = words[0].lower()

    return "".join(words)
