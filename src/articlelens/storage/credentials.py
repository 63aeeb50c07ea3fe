"""
Persistence of the provider API key.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

import structlog

from ..config.config import StorageConfig
from ..utils.atomic import atomic_write_json

logger = structlog.get_logger(__name__)


@runtime_checkable
class CredentialStore(Protocol):
    """Loads and saves a single credential string."""

    def load(self) -> str:
        """Return the stored credential, or an empty string."""
        ...

    def save(self, value: str) -> None:
        """Persist ``value``, replacing any previous credential."""
        ...


class MemoryCredentialStore:
    """Keeps the credential in process memory only."""

    def __init__(self, value: str = "") -> None:
        self._value = value
        self.saves = 0

    def load(self) -> str:
        return self._value

    def save(self, value: str) -> None:
        self._value = value
        self.saves += 1


class FileCredentialStore:
    """Stores the credential in a JSON file readable only by its owner."""

    def __init__(self, path: Optional[Path] = None, key: Optional[str] = None) -> None:
        defaults = StorageConfig()
        self.path = Path(path) if path is not None else defaults.credential_path
        self.key = key or defaults.credential_key

    @classmethod
    def from_config(cls, config: StorageConfig) -> FileCredentialStore:
        return cls(config.credential_path, config.credential_key)

    def load(self) -> str:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return ""
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read credential file", path=str(self.path), error=str(e))
            return ""

        value = data.get(self.key, "") if isinstance(data, dict) else ""
        return value if isinstance(value, str) else ""

    def save(self, value: str) -> None:
        atomic_write_json(self.path, {self.key: value}, mode=0o600)
        logger.debug("Credential saved", path=str(self.path), empty=not value)
