"""
Local filesystem storage backend.

Each key is one file under ``base_path``. Writes go through a temporary
file and ``os.replace`` so readers never observe a partial document.
"""

import os
import tempfile
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from loguru import logger

from .base import StorageBackend, StorageError, StorageKeyError, StorageMetadata, StoragePermissionError

_SUFFIX = ".json"


class LocalStorage(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: str = "~/.scalebook-data/storage", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a storage key to an absolute path under ``base_path``.

        Rejects unsafe keys (absolute paths, traversal, empty keys, and
        backslash-delimited paths) to prevent writes outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "\\" in raw_key:
            raise StoragePermissionError("Storage key cannot contain backslashes. Use '/' separators.")

        key_path = Path(raw_key)
        if key_path.is_absolute() or raw_key.startswith("~"):
            raise StoragePermissionError(f"Unsafe storage key '{key}': absolute paths are not allowed.")

        full_path = (self.base_path / (raw_key + _SUFFIX)).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path traversal is not allowed.") from e
        return full_path

    def save(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> StorageMetadata:
        path = self._get_full_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

        stat = path.stat()
        logger.debug(f"Saved {stat.st_size} bytes to {path}")
        return StorageMetadata(
            key=key,
            size=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime),
            content_type=content_type,
        )

    def load(self, key: str) -> bytes:
        path = self._get_full_path(key)
        if not path.exists():
            raise StorageKeyError(f"Key not found: {key}")

        try:
            return path.read_bytes()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def exists(self, key: str) -> bool:
        return self._get_full_path(key).exists()

    def delete(self, key: str) -> bool:
        path = self._get_full_path(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot delete {path}: {e}") from e
        return True

    def list_keys(self, prefix: str = "") -> Iterator[str]:
        for path in sorted(self.base_path.rglob(f"*{_SUFFIX}")):
            key = path.relative_to(self.base_path).as_posix()[: -len(_SUFFIX)]
            if prefix and not key.startswith(prefix):
                continue
            yield key
