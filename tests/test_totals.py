"""Tests for totals and amount formatting."""

import pytest
from decimal import Decimal

from src.models.entry import Entry, EntryFilter, EntryType, Totals
from src.queries.totals import compute_totals, format_amount, format_currency
from src.view.projection import visible_entries


def entry(entry_id: str, entry_type: EntryType, amount: str) -> Entry:
    return Entry(id=entry_id, type=entry_type, description=entry_id,
                 amount=Decimal(amount), created_at=1)


class TestComputeTotals:
    """Tests for compute_totals."""

    def test_empty(self):
        """Test that no entries means all zeros."""
        assert compute_totals([]) == Totals(
            income=Decimal("0.00"), expense=Decimal("0.00"), net=Decimal("0.00")
        )

    def test_salary_and_rent(self):
        """Test the basic income/expense scenario."""
        totals = compute_totals([
            entry("rent", EntryType.EXPENSE, "15000"),
            entry("salary", EntryType.INCOME, "50000"),
        ])
        assert totals.income == Decimal("50000.00")
        assert totals.expense == Decimal("15000.00")
        assert totals.net == Decimal("35000.00")

    def test_net_is_income_minus_expense(self):
        """Test the net identity over a mixed collection."""
        entries = [
            entry("a", EntryType.INCOME, "0.10"),
            entry("b", EntryType.INCOME, "0.20"),
            entry("c", EntryType.EXPENSE, "1.05"),
            entry("d", EntryType.EXPENSE, "99.99"),
        ]
        totals = compute_totals(entries)
        assert totals.income == Decimal("0.30")
        assert totals.net == totals.income - totals.expense
        assert totals.net_tone == "negative"

    def test_totals_ignore_filter(self):
        """Test that totals are computed from all entries, not the visible ones."""
        entries = [
            entry("a", EntryType.INCOME, "100"),
            entry("b", EntryType.EXPENSE, "40"),
        ]
        expected = compute_totals(entries)
        for entry_filter in EntryFilter:
            visible = visible_entries(entries, entry_filter)
            assert len(visible) <= len(entries)
            assert compute_totals(entries) == expected


class TestFormatting:
    """Tests for Indian-grouped amount formatting."""

    @pytest.mark.parametrize("value,expected", [
        (Decimal("0"), "0.00"),
        (Decimal("5"), "5.00"),
        (Decimal("999.5"), "999.50"),
        (Decimal("1000"), "1,000.00"),
        (Decimal("50000"), "50,000.00"),
        (Decimal("100000"), "1,00,000.00"),
        (Decimal("1234567.891"), "12,34,567.89"),
        (Decimal("-35000"), "-35,000.00"),
    ])
    def test_format_amount(self, value, expected):
        """Test two decimals and lakh/crore grouping."""
        assert format_amount(value) == expected

    def test_format_amount_none(self):
        """Test that a missing value formats as zero."""
        assert format_amount(None) == "0.00"

    def test_format_currency(self):
        """Test currency prefix."""
        assert format_currency(Decimal("35000")) == "₹35,000.00"
        assert format_currency(Decimal("-1"), "$") == "$-1.00"
