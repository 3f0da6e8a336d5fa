"""Input validation package."""

from src.validation.validator import (
    ERROR_MESSAGES,
    EntryValidationError,
    EntryValidator,
    ValidatedEntryInput,
)

__all__ = [
    "ERROR_MESSAGES",
    "EntryValidationError",
    "EntryValidator",
    "ValidatedEntryInput",
]
