"""
Abstract base class for key-value storage backends.

A synchronous stand-in for a browser's key-value store: string keys map to
opaque byte payloads. The weight store keeps its whole document under a
single key.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

from scalebook.core.exceptions import ScalebookError


@dataclass
class StorageMetadata:
    """Metadata for stored objects."""

    key: str
    size: int
    modified_at: datetime
    content_type: str = "application/octet-stream"


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> StorageMetadata:
        """Save data under ``key``, replacing any previous value."""

    @abstractmethod
    def load(self, key: str) -> bytes:
        """Load data from storage. Raises StorageKeyError if not found."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete an object. Returns True if deleted, False if didn't exist."""

    @abstractmethod
    def list_keys(self, prefix: str = "") -> Iterator[str]:
        """List keys with optional prefix filter."""

    def load_text(self, key: str, encoding: str = "utf-8") -> str:
        """Load and decode a text payload."""
        return self.load(key).decode(encoding)

    def save_text(self, key: str, text: str, encoding: str = "utf-8") -> StorageMetadata:
        """Encode and save a text payload."""
        return self.save(key, text.encode(encoding), content_type="application/json")


class StorageError(ScalebookError):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class StoragePermissionError(StorageError):
    """Raised when storage operation is not permitted."""
