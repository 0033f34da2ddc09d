"""
Backend configuration.

The managed platform generates a JSON "outputs" file describing where its
identity, data and storage endpoints live. This module finds that file,
validates it and applies environment overrides:

  CLOUDNOTES_OUTPUTS      path to the outputs file
  CLOUDNOTES_MODEL_NAME   record type used by the data endpoint
  CLOUDNOTES_CONFIG_DIR   directory holding session.json / config.json
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cloudnotes.exceptions import ConfigError

LOGGER = logging.getLogger(__name__)

OUTPUTS_FILENAME = "cloudnotes_outputs.json"
DEFAULT_MODEL_NAME = "Notes"


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


class AuthOutputs(_Section):
    url: str


class DataOutputs(_Section):
    url: str
    # The backend schema may name this type differently ("Note" vs "Notes").
    model_name: str = DEFAULT_MODEL_NAME


class StorageOutputs(_Section):
    url: str
    url_expires_in: int = Field(default=900, gt=0)


class HttpOutputs(_Section):
    timeout: float = Field(default=30.0, gt=0)


class BackendOutputs(_Section):
    """Validated outputs file."""

    auth: AuthOutputs
    data: DataOutputs
    storage: StorageOutputs
    http: HttpOutputs = HttpOutputs()


def config_dir() -> Path:
    """Directory for per-user state (session, saved username)."""
    raw = os.getenv("CLOUDNOTES_CONFIG_DIR")
    path = Path(raw).expanduser() if raw else Path("~/.config/cloudnotes").expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path


def _candidate_paths(explicit: Optional[str]) -> List[Path]:
    if explicit:
        return [Path(explicit).expanduser()]
    env_path = os.getenv("CLOUDNOTES_OUTPUTS")
    if env_path:
        return [Path(env_path).expanduser()]
    return [
        Path.cwd() / OUTPUTS_FILENAME,
        Path("~/.config/cloudnotes/outputs.json").expanduser(),
    ]


def load_outputs(path: Optional[str] = None) -> BackendOutputs:
    """Locate, parse and validate the backend outputs file."""
    candidates = _candidate_paths(path)
    found = next((p for p in candidates if p.is_file()), None)
    if found is None:
        tried = ", ".join(str(p) for p in candidates)
        raise ConfigError(f"Backend outputs file not found (tried: {tried})")

    LOGGER.debug("Loading backend outputs from %s", found)
    try:
        with open(found, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read {found}: {exc}") from exc

    try:
        outputs = BackendOutputs.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid backend outputs in {found}", payload=exc.errors()
        ) from exc

    model_name = os.getenv("CLOUDNOTES_MODEL_NAME")
    if model_name:
        LOGGER.debug("Record type overridden from environment: %s", model_name)
        outputs.data.model_name = model_name
    return outputs
