"""
Entry Store

The in-memory, ordered entry collection. Newest entries come first.

GUARANTEES:
- Every mutation is followed by a full save through EntryStorage
- Edits keep the entry's position, id and creation time
- Updating or removing an unknown id is a silent no-op

Input is assumed to be validated already (see src.validation).
"""

from decimal import Decimal
from typing import Optional

from src.models.entry import Entry, EntryType, new_entry_id, now_millis
from src.services.storage import EntryStorage


class EntryStore:
    """Owns the entry collection for one session."""

    def __init__(self, storage: EntryStorage):
        self._storage = storage
        self._entries: list[Entry] = storage.load()

    def _persist(self) -> None:
        self._storage.save(self._entries)

    def _index_of(self, entry_id: str) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def add(self, entry_type: EntryType, description: str, amount: Decimal) -> Entry:
        """Create an entry, put it first and persist."""
        entry = Entry(
            id=new_entry_id(),
            type=entry_type,
            description=description,
            amount=amount,
            created_at=now_millis(),
        )
        self._entries.insert(0, entry)
        self._persist()
        return entry

    def update(
        self,
        entry_id: str,
        description: str,
        amount: Decimal,
        entry_type: EntryType,
    ) -> Optional[Entry]:
        """
        Replace an entry's mutable fields in place and persist.

        Returns the updated entry, or None if no entry has this id.
        """
        index = self._index_of(entry_id)
        if index is None:
            return None

        updated = self._entries[index].with_changes(
            description=description,
            amount=amount,
            entry_type=entry_type,
        )
        self._entries[index] = updated
        self._persist()
        return updated

    def remove(self, entry_id: str) -> bool:
        """
        Drop an entry and persist.

        Returns False, without saving, if no entry has this id.
        """
        index = self._index_of(entry_id)
        if index is None:
            return False

        del self._entries[index]
        self._persist()
        return True

    def get(self, entry_id: str) -> Optional[Entry]:
        index = self._index_of(entry_id)
        return self._entries[index] if index is not None else None

    def all(self) -> list[Entry]:
        """All entries, newest first. The list is a copy."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
