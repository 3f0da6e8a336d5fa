"""Derived figures package."""

from src.queries.totals import compute_totals, format_amount, format_currency

__all__ = ["compute_totals", "format_amount", "format_currency"]
