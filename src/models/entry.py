"""
Core Data Models for the Ledger

These models define the schemas for all data flowing through the system:
1. Entry - one recorded income or expense (the only persisted entity)
2. RawEntryRecord - a persisted record after defensive coercion
3. Totals - the derived income/expense/net figures
4. EntryDraft / EntryForm - transient input state for the edit and create forms

DESIGN DECISION: Amounts are Decimal, never float.
The persisted layout stores plain JSON numbers, so conversion to float
happens only at the serialization boundary.
"""

import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


TWO_PLACES = Decimal("0.01")

# Largest amount whose two-decimal value survives a round trip through a
# JSON number (15 significant digits)
MAX_AMOUNT = Decimal("9999999999999.99")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryType(str, Enum):
    """
    Kind of entry.

    There is no third state: anything that is not explicitly
    an expense is read back from storage as income.
    """
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Capitalized name used for badges and selectors."""
        return self.value.capitalize()


class EntryFilter(str, Enum):
    """Active list filter. Never affects totals."""
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def matches(self, entry_type: EntryType) -> bool:
        if self is EntryFilter.ALL:
            return True
        return self.value == entry_type.value


class ValidationErrorCode(str, Enum):
    """Reasons an add or edit is rejected."""
    EMPTY_DESCRIPTION = "empty_description"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_TYPE = "invalid_type"


# =============================================================================
# HELPERS
# =============================================================================

def round_amount(value: Decimal) -> Decimal:
    """Round to exactly two fractional digits."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def now_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def new_entry_id() -> str:
    return str(uuid4())


def coerce_number(value: Any) -> Optional[Decimal]:
    """
    Best-effort numeric conversion.

    Accepts ints, floats, Decimals and numeric strings.
    Returns None for anything else, including booleans, NaN, infinities
    and strings with digit-group underscores such as "1_000".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, str) and "_" in value:
        return None
    elif isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    else:
        return None

    if not number.is_finite():
        return None
    return number


def coerce_amount(value: Any) -> Optional[Decimal]:
    """
    Numeric conversion for money.

    Like coerce_number, but also returns None when the value rounded to two
    places is larger in magnitude than MAX_AMOUNT.
    """
    number = coerce_number(value)
    if number is None:
        return None
    try:
        rounded = round_amount(number)
    except InvalidOperation:
        return None
    if abs(rounded) > MAX_AMOUNT:
        return None
    return number


# =============================================================================
# CORE ENTRY MODEL
# =============================================================================

class Entry(BaseModel):
    """
    One recorded income or expense transaction.

    Entries are immutable values: an edit produces a new Entry with the same
    id and created_at, which replaces the old one at the same position.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    type: EntryType = Field(
        ...,
        description="Income or expense"
    )
    description: str = Field(
        default="",
        description="What the entry is for"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in INR, two fractional digits"
    )
    created_at: int = Field(
        default_factory=now_millis,
        alias="createdAt",
        description="Creation time, milliseconds since epoch"
    )

    @field_validator('amount')
    @classmethod
    def round_to_paise(cls, v: Decimal) -> Decimal:
        try:
            rounded = round_amount(v)
        except InvalidOperation as e:
            raise ValueError("Amount is too large") from e
        if rounded > MAX_AMOUNT:
            raise ValueError(f"Amount must not exceed {MAX_AMOUNT}")
        if rounded <= 0:
            raise ValueError("Amount must be at least 0.01 after rounding")
        return rounded

    def with_changes(
        self,
        description: str,
        amount: Decimal,
        entry_type: EntryType,
    ) -> "Entry":
        """Return a copy with the mutable fields replaced."""
        return Entry(
            id=self.id,
            type=entry_type,
            description=description,
            amount=amount,
            created_at=self.created_at,
        )

    def to_record(self) -> dict:
        """
        Convert to the persisted JSON shape.

        Returns keys in order: id, type, description, amount, createdAt
        """
        return {
            "id": self.id,
            "type": self.type.value,
            "description": self.description,
            "amount": float(self.amount),
            "createdAt": self.created_at,
        }


class RawEntryRecord(BaseModel):
    """
    A persisted record after permissive coercion.

    Every field falls back to a default instead of failing, so that
    a hand-edited or older payload still loads. Converting to an Entry
    is the strict step.
    """

    id: str = ""
    type: EntryType = EntryType.INCOME
    description: str = ""
    amount: Decimal = Decimal("0")
    created_at: int = Field(default_factory=now_millis, alias="createdAt")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator('type', mode='before')
    @classmethod
    def coerce_type(cls, v: Any) -> EntryType:
        # Only an explicit "expense" counts as an expense
        return EntryType.EXPENSE if v == "expense" else EntryType.INCOME

    @field_validator('description', mode='before')
    @classmethod
    def coerce_description(cls, v: Any) -> str:
        return str(v) if v else ""

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_stored_amount(cls, v: Any) -> Decimal:
        number = coerce_amount(v)
        return number if number is not None else Decimal("0")

    @field_validator('created_at', mode='before')
    @classmethod
    def coerce_created_at(cls, v: Any) -> int:
        number = coerce_number(v)
        if number is None or number == 0:
            return now_millis()
        return int(number)

    @classmethod
    def from_raw(cls, raw: dict) -> "RawEntryRecord":
        """Coerce one decoded JSON object."""
        return cls.model_validate({
            "id": raw.get("id"),
            "type": raw.get("type"),
            "description": raw.get("description"),
            "amount": raw.get("amount"),
            "createdAt": raw.get("createdAt"),
        })

    def to_entry(self) -> Entry:
        """
        Convert to a validated Entry.

        A missing id gets a fresh one.

        Raises:
            ValueError: If the amount is not positive
        """
        return Entry(
            id=self.id or new_entry_id(),
            type=self.type,
            description=self.description,
            amount=self.amount,
            created_at=self.created_at,
        )


# =============================================================================
# DERIVED FIGURES
# =============================================================================

class Totals(BaseModel):
    """Aggregate figures computed over every entry."""
    model_config = ConfigDict(frozen=True)

    income: Decimal = Decimal("0.00")
    expense: Decimal = Decimal("0.00")
    net: Decimal = Decimal("0.00")

    @property
    def net_tone(self) -> str:
        """Styling tag for the net balance."""
        return "positive" if self.net >= 0 else "negative"


# =============================================================================
# INPUT STATE
# =============================================================================

class EntryDraft(BaseModel):
    """
    Editable copy of an entry's mutable fields.

    amount is kept as the raw text the user typed; it is only parsed
    when the draft is saved.
    """

    description: str = ""
    amount: str = ""
    type: EntryType = EntryType.INCOME

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryDraft":
        return cls(
            description=entry.description,
            amount=format(entry.amount, "f"),
            type=entry.type,
        )


class EntryForm(BaseModel):
    """State of the create form."""

    type: EntryType = EntryType.INCOME
    description: str = ""
    amount: str = ""

    def cleared(self) -> "EntryForm":
        """Empty the text fields but keep the selected type."""
        return EntryForm(type=self.type)
