"""
Pure projections from (entries, state) to what gets rendered.

No function here touches storage or a rendering surface.
"""

from typing import Iterable

from src.models.entry import Entry, EntryFilter
from src.queries.totals import compute_totals, format_currency
from src.view.state import AppState, EntryRow, LedgerView


def visible_entries(entries: Iterable[Entry], entry_filter: EntryFilter) -> list[Entry]:
    """Entries matching the filter, in collection order."""
    return [entry for entry in entries if entry_filter.matches(entry.type)]


def build_row(entry: Entry, state: AppState, currency_symbol: str = "₹") -> EntryRow:
    return EntryRow(
        entry=entry,
        type_label=entry.type.label,
        amount_display=format_currency(entry.amount, currency_symbol),
        amount_class=entry.type.value,
        draft=state.drafts.get(entry.id),
        awaiting_delete=state.pending_delete == entry.id,
    )


def build_view(
    entries: list[Entry],
    state: AppState,
    currency_symbol: str = "₹",
) -> LedgerView:
    """
    Project the full collection and the UI state into a LedgerView.

    Totals use every entry; rows use only the filtered subset.
    """
    totals = compute_totals(entries)
    rows = [
        build_row(entry, state, currency_symbol)
        for entry in visible_entries(entries, state.filter)
    ]

    return LedgerView(
        totals=totals,
        income_display=format_currency(totals.income, currency_symbol),
        expense_display=format_currency(totals.expense, currency_symbol),
        net_display=format_currency(totals.net, currency_symbol),
        net_tone=totals.net_tone,
        filter=state.filter,
        form=state.form,
        rows=rows,
    )
