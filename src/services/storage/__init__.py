"""
Storage Services Package

Provides the slot interface, its in-memory and JSON-file backends, and the
entry serializer that sits on top of them.
"""

from src.services.storage.interface import (
    KeyValueStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from src.services.storage.local_storage import (
    DEFAULT_STORAGE_KEY,
    EntryStorage,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)

__all__ = [
    # Interfaces
    "KeyValueStore",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Local storage implementation
    "DEFAULT_STORAGE_KEY",
    "EntryStorage",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
