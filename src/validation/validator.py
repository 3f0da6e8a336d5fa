"""
Entry Input Validation

Applied identically when creating an entry and when saving an inline edit.

Checks, in order (the first failure wins):
1. Description - trimmed, must not be empty
2. Amount - must parse as a finite number and be positive after rounding
   to two decimals, and no larger than MAX_AMOUNT
3. Type - must be exactly income or expense

IMPORTANT: Validation never mutates anything. A failure means the caller
aborts the action and shows the message; the user's input stays as typed.
The 60 character description limit is enforced by the input widget only.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.models.entry import (
    EntryType,
    ValidationErrorCode,
    coerce_amount,
    round_amount,
)


ERROR_MESSAGES = {
    ValidationErrorCode.EMPTY_DESCRIPTION: "Please enter a description.",
    ValidationErrorCode.INVALID_AMOUNT: "Please enter a valid positive amount.",
    ValidationErrorCode.INVALID_TYPE: "Please select a valid type.",
}


class EntryValidationError(Exception):
    """User input was rejected."""

    def __init__(self, code: ValidationErrorCode, message: str = ""):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        super().__init__(self.message)


class ValidatedEntryInput(BaseModel):
    """Input that passed every check, ready for the Entry Store."""
    model_config = ConfigDict(frozen=True)

    type: EntryType
    description: str
    amount: Decimal


class EntryValidator:
    """Validates create and edit input for entries."""

    def _validate_description(self, description: Any) -> str:
        text = str(description).strip() if description is not None else ""
        if not text:
            raise EntryValidationError(ValidationErrorCode.EMPTY_DESCRIPTION)
        return text

    def _validate_amount(self, amount: Any) -> Decimal:
        number = coerce_amount(amount)
        if number is None:
            raise EntryValidationError(ValidationErrorCode.INVALID_AMOUNT)

        # Checked after rounding so 0.004 cannot become a stored 0.00
        rounded = round_amount(number)
        if rounded <= 0:
            raise EntryValidationError(ValidationErrorCode.INVALID_AMOUNT)
        return rounded

    def _validate_type(self, entry_type: Any) -> EntryType:
        if isinstance(entry_type, EntryType):
            return entry_type
        if entry_type in ("income", "expense"):
            return EntryType(entry_type)
        raise EntryValidationError(ValidationErrorCode.INVALID_TYPE)

    def validate(
        self,
        entry_type: Any,
        description: Any,
        amount: Any,
    ) -> ValidatedEntryInput:
        """
        Run every check and return the cleaned input.

        Raises:
            EntryValidationError: On the first failing check
        """
        clean_description = self._validate_description(description)
        clean_amount = self._validate_amount(amount)
        clean_type = self._validate_type(entry_type)

        return ValidatedEntryInput(
            type=clean_type,
            description=clean_description,
            amount=clean_amount,
        )

    def is_valid(self, entry_type: Any, description: Any, amount: Any) -> bool:
        try:
            self.validate(entry_type, description, amount)
        except EntryValidationError:
            return False
        return True
