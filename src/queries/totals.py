"""
Totals and Amount Formatting

DESIGN DECISION: Totals are always computed over the ENTIRE collection.
The list filter only changes which rows are shown; it never changes
the income, expense or net figures.

Formatting follows the Indian digit grouping convention
(last three digits, then groups of two): 12,34,567.89
"""

from decimal import Decimal
from typing import Iterable, Union

from src.models.entry import Entry, EntryType, Totals, round_amount


Number = Union[Decimal, int, float, str, None]


def compute_totals(entries: Iterable[Entry]) -> Totals:
    """Sum income and expense amounts and derive the net balance."""
    income = Decimal("0")
    expense = Decimal("0")

    for entry in entries:
        if entry.type == EntryType.INCOME:
            income += entry.amount
        else:
            expense += entry.amount

    return Totals(
        income=round_amount(income),
        expense=round_amount(expense),
        net=round_amount(income - expense),
    )


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)

    return ",".join(groups + [tail])


def format_amount(value: Number) -> str:
    """
    Format with exactly two decimals and Indian grouping.

    None and empty values format as 0.00.
    """
    amount = round_amount(Decimal(str(value)) if value else Decimal("0"))
    sign = "-" if amount < 0 else ""
    integer, fraction = f"{abs(amount):.2f}".split(".")
    return f"{sign}{_group_indian(integer)}.{fraction}"


def format_currency(value: Number, symbol: str = "₹") -> str:
    """Prefix a formatted amount with the currency glyph."""
    return f"{symbol}{format_amount(value)}"
