"""Tests for entry input validation."""

import pytest
from decimal import Decimal

from src.models.entry import EntryType, ValidationErrorCode
from src.validation import EntryValidationError, EntryValidator


@pytest.fixture
def validator():
    return EntryValidator()


class TestEntryValidator:
    """Tests for EntryValidator.validate."""

    def test_valid_input(self, validator):
        """Test that good input is cleaned and accepted."""
        result = validator.validate("income", "  Salary  ", "50000")
        assert result.type == EntryType.INCOME
        assert result.description == "Salary"
        assert result.amount == Decimal("50000.00")

    def test_amount_is_rounded(self, validator):
        """Test two-digit rounding of accepted amounts."""
        assert validator.validate(EntryType.EXPENSE, "x", "10.456").amount == Decimal("10.46")
        assert validator.validate(EntryType.EXPENSE, "x", 2.5).amount == Decimal("2.50")

    @pytest.mark.parametrize("description", ["", "   ", None, "\t\n"])
    def test_empty_description(self, validator, description):
        """Test that blank descriptions are rejected."""
        with pytest.raises(EntryValidationError) as exc:
            validator.validate("income", description, "10")
        assert exc.value.code == ValidationErrorCode.EMPTY_DESCRIPTION

    @pytest.mark.parametrize("amount", [
        0, "0", -5, "-5", "abc", "", None, "nan", "0.004",
        "1_000", 1e30, "1e30", "123456789012345678901234567", "10000000000000",
    ])
    def test_invalid_amount(self, validator, amount):
        """Test that zero, negative, unparseable and oversized amounts are rejected."""
        with pytest.raises(EntryValidationError) as exc:
            validator.validate("income", "Salary", amount)
        assert exc.value.code == ValidationErrorCode.INVALID_AMOUNT

    @pytest.mark.parametrize("amount, expected", [
        ("1e3", Decimal("1000.00")),
        (" 12.5 ", Decimal("12.50")),
        ("9999999999999.99", Decimal("9999999999999.99")),
    ])
    def test_amount_string_forms(self, validator, amount, expected):
        """Test exponent, padded and largest accepted amounts."""
        assert validator.validate("income", "Salary", amount).amount == expected

    @pytest.mark.parametrize("entry_type", ["", "Income", "transfer", None, 1])
    def test_invalid_type(self, validator, entry_type):
        """Test that only income and expense are accepted."""
        with pytest.raises(EntryValidationError) as exc:
            validator.validate(entry_type, "Salary", "10")
        assert exc.value.code == ValidationErrorCode.INVALID_TYPE

    def test_description_checked_first(self, validator):
        """Test that the first failing check determines the error."""
        with pytest.raises(EntryValidationError) as exc:
            validator.validate("bogus", " ", "-1")
        assert exc.value.code == ValidationErrorCode.EMPTY_DESCRIPTION

    def test_error_has_user_message(self, validator):
        """Test that every error carries a readable message."""
        with pytest.raises(EntryValidationError) as exc:
            validator.validate("income", "Salary", "abc")
        assert exc.value.message == "Please enter a valid positive amount."
        assert str(exc.value) == exc.value.message

    def test_is_valid(self, validator):
        """Test the boolean shortcut."""
        assert validator.is_valid("expense", "Rent", "15000")
        assert not validator.is_valid("expense", "Rent", "0")
