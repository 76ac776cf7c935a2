"""WeightStore — the whole weight document kept under one storage key.

Every mutation is load → change one part → save the full document.  There
are no partial writes and no locking; two writers racing on the same
backend means the last one wins.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

from loguru import logger

from scalebook.core.config import DEFAULT_STORAGE_KEY
from scalebook.core.exceptions import DataSaveError, InvalidDataError
from scalebook.core.storage import StorageBackend, StorageError, StorageKeyError

from .models import SCHEMA_VERSION, Settings, Theme, WeightDocument, WeightGoal, WeightRecord


def _sort_newest_first(records: list[WeightRecord]) -> None:
    records.sort(key=lambda r: r.date, reverse=True)


class WeightStore:
    """Load/save the weight document through a :class:`StorageBackend`.

    Args:
        backend: Where the JSON document lives.
        key: Storage key for the document.
        default_height: Height (cm) used when a fresh document is created.
    """

    def __init__(
        self,
        backend: StorageBackend,
        key: str = DEFAULT_STORAGE_KEY,
        default_height: float | None = None,
    ):
        self.backend = backend
        self.key = key
        self.default_height = default_height

    def _default(self) -> WeightDocument:
        return WeightDocument.default(height=self.default_height)

    # ── whole-document I/O ────────────────────────────────────────────

    def load(self) -> WeightDocument:
        """Return the stored document, or defaults.

        Defaults are returned when nothing is stored yet, when the stored
        data cannot be read or parsed, and when its version tag differs from
        the current schema.  No migration is attempted.
        """
        try:
            raw = self.backend.load_text(self.key)
        except StorageKeyError:
            return self._default()
        except (StorageError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load weight data from '{self.key}': {e}")
            return self._default()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Stored weight data under '{self.key}' is not valid JSON: {e}")
            return self._default()

        version = payload.get("version") if isinstance(payload, dict) else None
        if version != SCHEMA_VERSION:
            logger.warning(f"Data version mismatch ({version!r} != {SCHEMA_VERSION!r}). Using default data.")
            return self._default()

        try:
            document = WeightDocument.from_dict(payload)
        except InvalidDataError as e:
            logger.error(f"Failed to load weight data from '{self.key}': {e}")
            return self._default()

        logger.debug(f"Loaded {len(document.records)} weight records")
        return document

    def save(self, document: WeightDocument) -> None:
        """Write the full document, stamping the current schema version.

        Raises:
            DataSaveError: If the backend rejects the write.
        """
        document.version = SCHEMA_VERSION
        text = json.dumps(document.to_dict(), ensure_ascii=False)
        try:
            self.backend.save_text(self.key, text)
        except StorageError as e:
            logger.error(f"Failed to save weight data to '{self.key}': {e}")
            raise DataSaveError("Failed to save data") from e
        logger.debug(f"Saved {len(document.records)} weight records")

    # ── mutators ──────────────────────────────────────────────────────

    def save_record(self, record: WeightRecord) -> None:
        """Insert or replace (by id) a record, keeping newest-first order."""
        document = self.load()
        for i, existing in enumerate(document.records):
            if existing.id == record.id:
                document.records[i] = record
                break
        else:
            document.records.append(record)
        _sort_newest_first(document.records)
        self.save(document)

    def delete_record(self, record_id: str) -> bool:
        """Remove a record.  Returns False if the id was unknown."""
        document = self.load()
        before = len(document.records)
        document.records = [r for r in document.records if r.id != record_id]
        self.save(document)
        return len(document.records) != before

    def save_goal(self, goal: WeightGoal) -> None:
        document = self.load()
        document.goal = goal
        self.save(document)

    def delete_goal(self) -> None:
        document = self.load()
        document.goal = None
        self.save(document)

    def update_settings(self, **changes: Any) -> Settings:
        """Merge ``changes`` into the stored settings and return the result."""
        document = self.load()
        if "theme" in changes:
            changes["theme"] = Theme(changes["theme"])
        document.settings = replace(document.settings, **changes)
        self.save(document)
        return document.settings

    def clear_all(self) -> None:
        """Remove the stored document.  Failures are logged, not raised."""
        try:
            self.backend.delete(self.key)
        except StorageError as e:
            logger.error(f"Failed to clear weight data: {e}")

    # ── export / import ───────────────────────────────────────────────

    def export_data(self) -> str:
        """The current document as pretty-printed JSON."""
        return json.dumps(self.load().to_dict(), indent=2, ensure_ascii=False)

    def import_data(self, json_data: str) -> WeightDocument:
        """Replace the stored document with ``json_data``.

        Raises:
            InvalidDataError: If the text is not a valid weight document.
            DataSaveError: If the write fails.
        """
        try:
            payload = json.loads(json_data)
        except json.JSONDecodeError as e:
            raise InvalidDataError("Invalid data format") from e

        document = WeightDocument.from_dict(payload)
        _sort_newest_first(document.records)
        self.save(document)
        logger.info(f"Imported {len(document.records)} weight records")
        return document
