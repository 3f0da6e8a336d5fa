"""
Configuration Management for the Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Everything has a sensible default, so the ledger runs with no .env file at all;
environment variables only override where the data lives and how it looks.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    storage_path: str = Field(
        default="data/ledger_storage.json",
        description="Path to the JSON file backing the key-value slots"
    )
    storage_key: str = Field(
        default="income_expense_entries_v1",
        min_length=1,
        description="Slot key holding the serialized entry collection"
    )

    @field_validator('storage_path')
    @classmethod
    def validate_storage_path(cls, v: str) -> str:
        """Reject a path that points at an existing directory."""
        if Path(v).is_dir():
            raise ValueError(f"Storage path {v} is a directory, expected a file")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )

    # Display
    app_title: str = Field(
        default="Income Expense Calculator",
        description="Title shown at the top of the page"
    )
    currency_symbol: str = Field(
        default="₹",
        max_length=3,
        description="Glyph prefixed to every displayed amount"
    )

    # Input limits
    description_max_length: int = Field(
        default=60,
        ge=1,
        le=500,
        description="Maximum description length accepted by the input widgets"
    )
    audit_history_size: int = Field(
        default=200,
        ge=0,
        description="How many recent audit events to keep in memory"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry describing each failure.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
