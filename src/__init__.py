"""
Income Expense Ledger - Source Package

A single-user ledger of income and expense entries with running totals,
filtering and inline editing, persisted to a local key-value slot.

DESIGN PRINCIPLES:
1. Validate before anything changes
2. Every change is saved immediately
3. Totals always cover every entry, whatever the filter
4. Unreadable stored data never crashes the app
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Accountant Team"
