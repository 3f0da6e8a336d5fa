"""Shared fixtures for the ledger tests."""

import pytest

from src.audit import AuditLogger
from src.config import get_settings
from src.services.entry_store import EntryStore
from src.services.storage import EntryStorage, InMemoryKeyValueStore
from src.view import ViewController


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def slot():
    return InMemoryKeyValueStore()


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=100)


@pytest.fixture
def storage(slot, audit_logger):
    return EntryStorage(slot, audit_logger=audit_logger)


@pytest.fixture
def store(storage):
    return EntryStore(storage)


@pytest.fixture
def controller(store, audit_logger):
    return ViewController(store, audit_logger=audit_logger)
