"""
Main Orchestrator for the Ledger

Wires the components together for one session:

    slot backend -> EntryStorage -> EntryStore -> ViewController
                         \\______ AuditLogger ______/

DESIGN DECISION: The ledger works with no configuration at all.
Settings only change where the slot file lives, which key is used,
and how amounts are displayed.
"""

from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from src.audit import AuditLogger, configure_logging, create_correlation_id
from src.config import get_settings
from src.services.entry_store import EntryStore
from src.services.storage import (
    EntryStorage,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from src.validation import EntryValidator
from src.view import ViewController


def create_slot_backend(
    use_file_storage: bool = True,
    storage_path: Optional[Union[str, Path]] = None,
) -> KeyValueStore:
    """
    Pick the slot backend.

    Args:
        use_file_storage: False keeps everything in memory.
        storage_path: Overrides the configured file path.
    """
    if not use_file_storage:
        return InMemoryKeyValueStore()

    path = storage_path or get_settings().storage.storage_path
    return JsonFileKeyValueStore(path)


def create_app_components(
    use_file_storage: bool = True,
    storage_path: Optional[Union[str, Path]] = None,
    slot: Optional[KeyValueStore] = None,
    correlation_id: Optional[UUID] = None,
) -> tuple[ViewController, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        use_file_storage: Whether to persist to the JSON slot file.
                    Set to False for testing without a file.
        storage_path: Overrides the configured slot file.
        slot: A ready-made slot backend; wins over the two options above.
        correlation_id: Ties this session's audit events together.

    Returns:
        (view_controller, audit_logger)
    """
    settings = get_settings()
    app_settings = settings.app

    configure_logging(app_settings.log_level)

    audit_logger = AuditLogger(
        history_size=app_settings.audit_history_size,
        correlation_id=correlation_id or create_correlation_id(),
    )

    storage = EntryStorage(
        slot=slot or create_slot_backend(use_file_storage, storage_path),
        key=settings.storage.storage_key,
        audit_logger=audit_logger,
    )

    controller = ViewController(
        store=EntryStore(storage),
        validator=EntryValidator(),
        audit_logger=audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )

    return controller, audit_logger
