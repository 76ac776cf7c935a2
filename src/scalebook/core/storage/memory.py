"""In-memory storage backend, for tests and embedding callers."""

from collections.abc import Iterator
from datetime import datetime

from .base import StorageBackend, StorageKeyError, StorageMetadata


class MemoryStorage(StorageBackend):
    """Dict-backed storage. Contents vanish with the instance."""

    def __init__(self, **config):
        super().__init__(**config)
        self._data: dict[str, bytes] = {}

    def save(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> StorageMetadata:
        self._data[key] = bytes(data)
        return StorageMetadata(key=key, size=len(data), modified_at=datetime.now(), content_type=content_type)

    def load(self, key: str) -> bytes:
        try:
            return self._data[key]
        except KeyError:
            raise StorageKeyError(f"Key not found: {key}") from None

    def exists(self, key: str) -> bool:
        return key in self._data

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def list_keys(self, prefix: str = "") -> Iterator[str]:
        for key in sorted(self._data):
            if key.startswith(prefix):
                yield key
