"""Tests for configuration and component wiring."""

import json
import pytest
from decimal import Decimal
from pydantic import ValidationError

from src.config import get_settings, validate_all_settings
from src.orchestrator import create_app_components
from src.services.storage import InMemoryKeyValueStore


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_defaults(self):
        """Test that everything works with no environment at all."""
        settings = get_settings()
        assert settings.storage.storage_key == "income_expense_entries_v1"
        assert settings.app.currency_symbol == "₹"
        assert settings.app.description_max_length == 60

    def test_environment_override(self, monkeypatch, tmp_path):
        """Test LEDGER_ prefixed overrides."""
        monkeypatch.setenv("LEDGER_STORAGE_PATH", str(tmp_path / "x.json"))
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "$")
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "debug")
        settings = get_settings()
        assert settings.storage.storage_path == str(tmp_path / "x.json")
        assert settings.app.currency_symbol == "$"
        assert settings.app.log_level == "DEBUG"

    def test_invalid_setting_reported(self, monkeypatch, tmp_path):
        """Test validate_all_settings reports a bad storage path."""
        monkeypatch.setenv("LEDGER_STORAGE_PATH", str(tmp_path))
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["app"] is True


class TestCreateAppComponents:
    """Tests for the component factory."""

    def test_in_memory_components(self):
        """Test wiring without a storage file."""
        controller, audit_logger = create_app_components(use_file_storage=False)
        ok, _ = controller.submit_form("income", "Salary", "50000")
        assert ok
        assert controller.render().totals.income == Decimal("50000.00")
        assert audit_logger.correlation_id is not None

    def test_file_components_share_data(self, tmp_path):
        """Test that two sessions on the same file see the same entries."""
        path = tmp_path / "ledger.json"
        first, _ = create_app_components(storage_path=path)
        first.submit_form("expense", "Rent", "15000")

        second, _ = create_app_components(storage_path=path)
        assert [r.entry.description for r in second.render().rows] == ["Rent"]

    def test_explicit_slot_wins(self):
        """Test that a provided slot backend is used as-is."""
        slot = InMemoryKeyValueStore()
        controller, _ = create_app_components(slot=slot)
        controller.submit_form("income", "Gift", "10")
        assert slot.get_item("income_expense_entries_v1") is not None

    def test_bad_storage_path_raises_validation_error(self, monkeypatch, tmp_path):
        """Test that a misconfigured path fails loudly instead of loading nothing."""
        monkeypatch.setenv("LEDGER_STORAGE_PATH", str(tmp_path))
        with pytest.raises(ValidationError):
            create_app_components()

    def test_oversized_stored_amount_does_not_break_startup(self, tmp_path):
        """Test that one bad record leaves the rest of the file readable."""
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps({
            "income_expense_entries_v1": json.dumps([
                {"id": "huge", "type": "income", "description": "Typo", "amount": 1e30},
                {"id": "ok", "type": "income", "description": "Salary", "amount": 100},
            ]),
        }), encoding="utf-8")

        controller, _ = create_app_components(storage_path=path)
        assert len(controller.store) == 1
        assert controller.store.get("ok").amount == Decimal("100.00")
