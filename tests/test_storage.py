"""Tests for the slot backends and the entry serializer."""

import json
import pytest
from decimal import Decimal

from src.models.audit import AuditEventType
from src.models.entry import Entry, EntryType
from src.services.storage import (
    DEFAULT_STORAGE_KEY,
    EntryStorage,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageWriteError,
)


def make_entries() -> list[Entry]:
    return [
        Entry(id="b", type=EntryType.EXPENSE, description="Rent",
              amount=Decimal("15000.00"), created_at=2000),
        Entry(id="a", type=EntryType.INCOME, description="Salary",
              amount=Decimal("50000.10"), created_at=1000),
    ]


class FailingSlot(KeyValueStore):
    """A slot whose writes always fail, like a full browser quota."""

    def get_item(self, key):
        return None

    def set_item(self, key, value):
        raise StorageWriteError("quota exceeded")

    def remove_item(self, key):
        raise StorageWriteError("quota exceeded")


class TestEntryStorageLoad:
    """Tests for EntryStorage.load."""

    def test_absent_slot_loads_empty(self, storage):
        """Test that an empty slot yields no entries."""
        assert storage.load() == []

    def test_malformed_json_loads_empty(self, slot, storage, audit_logger):
        """Test that unparseable data is replaced by an empty collection."""
        slot.set_item(DEFAULT_STORAGE_KEY, "{not json")
        assert storage.load() == []
        event = audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.STORAGE_READ_RECOVERED

    def test_non_array_loads_empty(self, slot, storage):
        """Test that a JSON object or number is not treated as entries."""
        slot.set_item(DEFAULT_STORAGE_KEY, json.dumps({"id": "a"}))
        assert storage.load() == []
        slot.set_item(DEFAULT_STORAGE_KEY, "42")
        assert storage.load() == []

    def test_records_are_coerced(self, slot, storage):
        """Test the permissive per-field defaults."""
        slot.set_item(DEFAULT_STORAGE_KEY, json.dumps([
            {"id": 5, "type": "EXPENSE", "amount": "12.345", "createdAt": 10},
        ]))
        [entry] = storage.load()
        assert entry.id == "5"
        assert entry.type == EntryType.INCOME
        assert entry.description == ""
        assert entry.amount == Decimal("12.35")
        assert entry.created_at == 10

    def test_invalid_records_are_skipped(self, slot, storage, audit_logger):
        """Test that non-objects, zero amounts and duplicate ids are dropped."""
        slot.set_item(DEFAULT_STORAGE_KEY, json.dumps([
            {"id": "ok", "type": "income", "description": "Gift", "amount": 10, "createdAt": 1},
            "garbage",
            {"id": "zero", "amount": "abc"},
            {"id": "ok", "type": "expense", "description": "Dup", "amount": 5, "createdAt": 2},
        ]))
        entries = storage.load()
        assert [e.id for e in entries] == ["ok"]
        assert entries[0].description == "Gift"

        skipped = [
            e for e in audit_logger.recent_events()
            if e.event_type == AuditEventType.STORAGE_RECORD_SKIPPED
        ]
        assert len(skipped) == 3

    def test_oversized_amount_is_skipped(self, slot, storage, audit_logger):
        """Test that an amount too large to round does not break loading."""
        slot.set_item(DEFAULT_STORAGE_KEY, json.dumps([
            {"id": "huge", "type": "income", "description": "Typo", "amount": 1e30, "createdAt": 1},
            {"id": "ok", "type": "expense", "description": "Rent", "amount": 15000, "createdAt": 2},
        ]))
        entries = storage.load()
        assert [e.id for e in entries] == ["ok"]
        event = audit_logger.recent_events()[1]
        assert event.event_type == AuditEventType.STORAGE_RECORD_SKIPPED

    def test_underscore_amount_is_skipped(self, slot, storage):
        """Test that "1_000" is not read as a number."""
        slot.set_item(DEFAULT_STORAGE_KEY, json.dumps([
            {"id": "a", "type": "income", "description": "Gift", "amount": "1_000", "createdAt": 1},
        ]))
        assert storage.load() == []

    def test_load_without_audit_logger(self, slot):
        """Test that recovery also works with plain structured logging."""
        slot.set_item(DEFAULT_STORAGE_KEY, "[[[")
        assert EntryStorage(slot).load() == []


class TestEntryStorageSave:
    """Tests for EntryStorage.save."""

    def test_round_trip(self, storage):
        """Test that load(save(entries)) == entries."""
        entries = make_entries()
        storage.save(entries)
        assert storage.load() == entries

    def test_persisted_layout(self, slot, storage):
        """Test the JSON array written to the slot."""
        storage.save(make_entries())
        data = json.loads(slot.get_item(DEFAULT_STORAGE_KEY))
        assert data[0] == {
            "id": "b",
            "type": "expense",
            "description": "Rent",
            "amount": 15000.0,
            "createdAt": 2000,
        }

    def test_save_overwrites(self, storage):
        """Test that each save replaces the previous state."""
        storage.save(make_entries())
        storage.save([])
        assert storage.load() == []

    def test_custom_key(self, slot):
        """Test that the slot key is configurable."""
        storage = EntryStorage(slot, key="other")
        storage.save(make_entries())
        assert slot.get_item("other") is not None
        assert slot.get_item(DEFAULT_STORAGE_KEY) is None

    def test_write_failure_propagates(self, audit_logger):
        """Test that write failures are not swallowed."""
        storage = EntryStorage(FailingSlot(), audit_logger=audit_logger)
        with pytest.raises(StorageWriteError):
            storage.save(make_entries())
        event = audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.STORAGE_WRITE_FAILED


class TestInMemoryKeyValueStore:
    """Tests for the in-memory slot backend."""

    def test_get_set_remove(self):
        """Test basic slot operations."""
        slot = InMemoryKeyValueStore()
        assert slot.get_item("k") is None
        slot.set_item("k", "v")
        assert slot.get_item("k") == "v"
        slot.remove_item("k")
        slot.remove_item("k")
        assert slot.get_item("k") is None


class TestJsonFileKeyValueStore:
    """Tests for the file-backed slot backend."""

    def test_missing_file(self, tmp_path):
        """Test that a missing file means empty slots."""
        slot = JsonFileKeyValueStore(tmp_path / "none.json")
        assert slot.get_item("k") is None

    def test_persists_across_instances(self, tmp_path):
        """Test that a value written by one instance is read by another."""
        path = tmp_path / "nested" / "ledger.json"
        JsonFileKeyValueStore(path).set_item("k", "v")
        assert JsonFileKeyValueStore(path).get_item("k") == "v"

    def test_keeps_other_slots(self, tmp_path):
        """Test that writing one slot leaves the others alone."""
        slot = JsonFileKeyValueStore(tmp_path / "ledger.json")
        slot.set_item("a", "1")
        slot.set_item("b", "2")
        slot.remove_item("a")
        assert slot.get_item("a") is None
        assert slot.get_item("b") == "2"

    def test_corrupt_file_loads_empty_entries(self, tmp_path):
        """Test that a corrupt file is treated as empty by EntryStorage."""
        path = tmp_path / "ledger.json"
        path.write_text("not json at all", encoding="utf-8")
        storage = EntryStorage(JsonFileKeyValueStore(path))
        assert storage.load() == []

        storage.save(make_entries())
        assert storage.load() == make_entries()

    def test_round_trip_through_file(self, tmp_path):
        """Test entries survive a full write and re-read from disk."""
        path = tmp_path / "ledger.json"
        EntryStorage(JsonFileKeyValueStore(path)).save(make_entries())
        assert EntryStorage(JsonFileKeyValueStore(path)).load() == make_entries()

    def test_unwritable_location(self, tmp_path):
        """Test that a write into a file-as-directory raises StorageWriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        slot = JsonFileKeyValueStore(blocker / "ledger.json")
        with pytest.raises(StorageWriteError):
            slot.set_item("k", "v")
