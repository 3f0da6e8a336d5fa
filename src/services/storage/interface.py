"""
Abstract Storage Interface

DESIGN DECISION: Persistence is modelled on browser local storage: a set of
named slots, each holding one string. The ledger only ever uses a single
slot, which holds the whole entry array as JSON.

This allows us to:
1. Use in-memory slots for testing
2. Back the slots with a JSON file for the Streamlit app
3. Keep entry serialization independent of where the bytes end up

The interface is intentionally tiny - read, write, remove.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a string key-value store.

    Any slot backend must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a slot.

        Args:
            key: The slot name

        Returns:
            The stored string, or None if the slot is empty

        Raises:
            StorageReadError: If the backend itself cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Overwrite a slot.

        Args:
            key: The slot name
            value: The string to store

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Empty a slot. Removing an empty slot is not an error.

        Raises:
            StorageWriteError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data is missing, unreadable or malformed."""
    pass


class StorageWriteError(StorageError):
    """Stored data could not be written (disk full, permissions, ...)."""
    pass
