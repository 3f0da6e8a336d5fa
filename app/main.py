"""
Streamlit Frontend for the Income Expense Ledger

This is a thin rendering adapter: every decision is made by the
ViewController, and this module only draws the LedgerView it returns
and forwards clicks back to it.

Layout:
1. Totals (income, expense, net) - always over every entry
2. Create form with a reset button
3. Filter (All / Income / Expense)
4. Entry list with inline edit and confirmed delete
"""

import streamlit as st
from pydantic import ValidationError

from src.audit import create_correlation_id
from src.config import get_settings
from src.models.entry import EntryFilter, EntryType
from src.orchestrator import create_app_components
from src.services.storage import StorageError, StorageWriteError
from src.view import DELETE_CONFIRM_PROMPT, EntryRow, LedgerView, ViewController


settings = get_settings().app

# Page configuration
st.set_page_config(
    page_title=settings.app_title,
    page_icon="💰",
    layout="centered",
)

# Custom CSS for the totals and amount colours
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .total-box {
        padding: 12px 16px;
        border-radius: 10px;
        background-color: #f6f8fa;
        margin: 4px 0;
    }
    .total-label {
        font-size: 0.9em;
        color: #6c757d;
    }
    .total-value {
        font-size: 1.6em;
        font-weight: bold;
        color: #2c3e50;
    }
    .positive { color: #28a745 !important; }
    .negative { color: #dc3545 !important; }
    .amount.income { color: #28a745; font-weight: bold; }
    .amount.expense { color: #dc3545; font-weight: bold; }
    .badge {
        display: inline-block;
        padding: 2px 8px;
        border-radius: 8px;
        background-color: #e9ecef;
        font-size: 0.8em;
    }
</style>
""", unsafe_allow_html=True)


TYPE_OPTIONS = list(EntryType)
FILTER_OPTIONS = list(EntryFilter)


def get_controller() -> ViewController:
    """Get or create this browser session's controller."""
    if "controller" not in st.session_state:
        correlation_id = create_correlation_id()
        try:
            controller, audit_logger = create_app_components(
                use_file_storage=True,
                correlation_id=correlation_id,
            )
        except (StorageError, ValidationError) as e:
            st.error(f"Failed to open the ledger: {e}")
            st.stop()
        st.session_state.controller = controller
        st.session_state.audit_logger = audit_logger
        st.session_state.form_generation = 0
    return st.session_state.controller


def run_action(action, *args):
    """Run a controller action, surfacing storage faults to the user."""
    try:
        return action(*args)
    except StorageWriteError as e:
        st.error(f"Could not save your entries: {e}")
        st.stop()


def render_totals(view: LedgerView) -> None:
    col1, col2, col3 = st.columns(3)
    boxes = [
        (col1, "Total Income", view.income_display, ""),
        (col2, "Total Expense", view.expense_display, ""),
        (col3, "Net Balance", view.net_display, view.net_tone),
    ]
    for col, label, value, tone in boxes:
        with col:
            st.markdown(f"""
            <div class="total-box">
                <div class="total-label">{label}</div>
                <div class="total-value {tone}">{value}</div>
            </div>
            """, unsafe_allow_html=True)


def render_form(controller: ViewController, view: LedgerView) -> None:
    """Create form. Widget keys change after a reset so they pick up the new state."""
    generation = st.session_state.form_generation
    form = view.form

    with st.form(f"entry_form_{generation}"):
        entry_type = st.radio(
            "Type",
            options=TYPE_OPTIONS,
            index=TYPE_OPTIONS.index(form.type),
            format_func=lambda t: t.label,
            horizontal=True,
        )
        description = st.text_input(
            "Description *",
            value=form.description,
            max_chars=settings.description_max_length,
            placeholder="e.g. Salary, Rent, Groceries",
        )
        amount = st.text_input(
            f"Amount ({settings.currency_symbol}) *",
            value=form.amount,
            placeholder="0.00",
        )
        submitted = st.form_submit_button("➕ Add Entry", type="primary")

    if st.button("↺ Reset"):
        controller.reset_form()
        st.session_state.form_generation += 1
        st.rerun()

    if submitted:
        ok, message = run_action(controller.submit_form, entry_type, description, amount)
        if ok:
            st.session_state.form_generation += 1
            st.rerun()
        else:
            st.error(message)


def render_filter(controller: ViewController, view: LedgerView) -> None:
    selected = st.radio(
        "Show",
        options=FILTER_OPTIONS,
        index=FILTER_OPTIONS.index(view.filter),
        format_func=lambda f: f.label,
        horizontal=True,
    )
    if selected != view.filter:
        controller.set_filter(selected)
        st.rerun()


def render_editing_row(controller: ViewController, row: EntryRow) -> None:
    entry_id = row.entry.id
    draft = row.draft

    col1, col2, col3 = st.columns([3, 2, 2])
    with col1:
        description = st.text_input(
            "Description",
            value=draft.description,
            max_chars=settings.description_max_length,
            key=f"edit_description_{entry_id}",
        )
    with col2:
        amount = st.text_input(
            "Amount",
            value=draft.amount,
            key=f"edit_amount_{entry_id}",
        )
    with col3:
        entry_type = st.selectbox(
            "Type",
            options=TYPE_OPTIONS,
            index=TYPE_OPTIONS.index(draft.type),
            format_func=lambda t: t.label,
            key=f"edit_type_{entry_id}",
        )

    controller.update_draft(entry_id, description=description, amount=amount, entry_type=entry_type)

    save_col, cancel_col = st.columns(2)
    with save_col:
        if st.button("💾 Save", key=f"save_{entry_id}", type="primary"):
            ok, message = run_action(controller.save_edit, entry_id)
            if ok:
                st.rerun()
            else:
                st.error(message)
    with cancel_col:
        if st.button("✖ Cancel", key=f"cancel_{entry_id}"):
            controller.cancel_edit(entry_id)
            st.rerun()


def render_display_row(controller: ViewController, row: EntryRow) -> None:
    entry_id = row.entry.id

    col1, col2, col3, col4 = st.columns([4, 2, 1, 1])
    with col1:
        st.markdown(
            f"{row.entry.description}<br><span class='badge'>{row.type_label}</span>",
            unsafe_allow_html=True,
        )
    with col2:
        st.markdown(
            f"<div class='amount {row.amount_class}'>{row.amount_display}</div>",
            unsafe_allow_html=True,
        )
    with col3:
        if st.button("Edit", key=f"edit_{entry_id}"):
            controller.start_edit(entry_id)
            st.rerun()
    with col4:
        if st.button("Delete", key=f"delete_{entry_id}"):
            controller.request_delete(entry_id)
            st.rerun()

    if row.awaiting_delete:
        st.warning(DELETE_CONFIRM_PROMPT)
        yes_col, no_col = st.columns(2)
        with yes_col:
            if st.button("Yes, delete", key=f"confirm_delete_{entry_id}", type="primary"):
                run_action(controller.resolve_delete, True)
                st.rerun()
        with no_col:
            if st.button("No, keep it", key=f"decline_delete_{entry_id}"):
                controller.resolve_delete(False)
                st.rerun()


def render_list(controller: ViewController, view: LedgerView) -> None:
    if view.is_empty:
        st.info("No entries to show. Add one above.")
        return

    for row in view.rows:
        with st.container(border=True):
            if row.is_editing:
                render_editing_row(controller, row)
            else:
                render_display_row(controller, row)


def render_activity() -> None:
    audit_logger = st.session_state.get("audit_logger")
    if audit_logger is None:
        return

    with st.expander("🕑 Recent activity"):
        events = audit_logger.recent_events(limit=20)
        if not events:
            st.caption("Nothing yet.")
        for event in events:
            st.caption(f"{event.timestamp:%H:%M:%S} · {event.description}")


def main():
    """Main application entry point."""
    controller = get_controller()
    view = controller.render()

    st.title(f"💰 {settings.app_title}")

    render_totals(view)
    st.markdown("---")

    st.subheader("Add Entry")
    render_form(controller, view)
    st.markdown("---")

    st.subheader("Entries")
    render_filter(controller, view)
    render_list(controller, view)

    render_activity()


if __name__ == "__main__":
    main()
