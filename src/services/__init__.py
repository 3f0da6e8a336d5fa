"""Services package."""

from src.services.entry_store import EntryStore
from src.services.storage import (
    DEFAULT_STORAGE_KEY,
    EntryStorage,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Entry store
    "EntryStore",
    # Storage services
    "DEFAULT_STORAGE_KEY",
    "EntryStorage",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
