"""
Local Storage Implementation

DESIGN DECISION: The entry collection lives in a single keyed slot as a JSON
array, exactly like a browser's localStorage. Two slot backends exist:
1. InMemoryKeyValueStore - tests and throwaway sessions
2. JsonFileKeyValueStore - a JSON object on disk, one property per slot

TRADEOFFS:
- Each save rewrites the whole file (fine for a personal ledger)
- No locking: two processes sharing a file will overwrite each other
- No schema version: unknown shapes are coerced on load, never migrated

EntryStorage sits on top of a slot backend and owns the entry <-> JSON
conversion. Loading never fails; saving fails loudly.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from src.audit import AuditLogger
from src.models.entry import Entry, RawEntryRecord
from src.services.storage.interface import (
    KeyValueStore,
    StorageReadError,
    StorageWriteError,
)


DEFAULT_STORAGE_KEY = "income_expense_entries_v1"


class InMemoryKeyValueStore(KeyValueStore):
    """Slots held in a plain dict. Lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Slots persisted as one JSON object in a file.

    Writes go to a temporary file in the same directory which then replaces
    the existing file, so a crash mid-write leaves the previous state intact.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read every slot. A missing file means no slots."""
        if not self._path.exists():
            return {}

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageReadError(f"Cannot read {self._path}: {e}") from e

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"{self._path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StorageReadError(f"{self._path} does not hold a JSON object")

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageWriteError(f"Cannot write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except StorageReadError:
            # A corrupt file is replaced rather than blocking every save
            items = {}
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        try:
            items = self._read_all()
        except StorageReadError:
            items = {}
        if key in items:
            del items[key]
            self._write_all(items)


class EntryStorage:
    """
    Serializes the entry collection to and from one slot.

    load() substitutes an empty collection for anything it cannot read.
    save() overwrites the slot and lets write failures propagate.
    """

    def __init__(
        self,
        slot: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._slot = slot
        self._key = key
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger("ledger.storage")

    @property
    def key(self) -> str:
        return self._key

    def _recovered(self, reason: str) -> list[Entry]:
        if self._audit_logger:
            self._audit_logger.log_storage_read_recovered(self._key, reason)
        else:
            self._logger.warning("storage_read_recovered", key=self._key, reason=reason)
        return []

    def _skipped(self, index: int, reason: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_storage_record_skipped(self._key, index, reason)
        else:
            self._logger.warning(
                "storage_record_skipped", key=self._key, index=index, reason=reason
            )

    def load(self) -> list[Entry]:
        """
        Read the collection.

        Never raises. Absent, malformed or non-array data yields [].
        Individual records are coerced; records that still cannot become a
        valid Entry, or repeat an earlier id, are skipped.
        """
        try:
            raw = self._slot.get_item(self._key)
        except StorageReadError as e:
            return self._recovered(str(e))

        if not raw:
            return []

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            return self._recovered(f"malformed JSON: {e}")

        if not isinstance(parsed, list):
            return self._recovered(f"expected a JSON array, got {type(parsed).__name__}")

        entries: list[Entry] = []
        seen_ids: set[str] = set()

        for index, item in enumerate(parsed):
            if not isinstance(item, dict):
                self._skipped(index, f"record is a {type(item).__name__}, not an object")
                continue

            try:
                entry = RawEntryRecord.from_raw(item).to_entry()
            except ValueError as e:
                self._skipped(index, str(e))
                continue

            if entry.id in seen_ids:
                self._skipped(index, f"duplicate id {entry.id}")
                continue

            seen_ids.add(entry.id)
            entries.append(entry)

        if self._audit_logger:
            self._audit_logger.log_storage_loaded(self._key, len(entries))

        return entries

    def save(self, entries: Iterable[Entry]) -> None:
        """
        Overwrite the slot with the full collection.

        Raises:
            StorageWriteError: If the backend cannot be written
        """
        payload = json.dumps(
            [entry.to_record() for entry in entries],
            ensure_ascii=False,
        )
        try:
            self._slot.set_item(self._key, payload)
        except StorageWriteError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_write_failed(self._key, str(e))
            else:
                self._logger.error("storage_write_failed", key=self._key, error=str(e))
            raise
