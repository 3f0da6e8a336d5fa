"""
View Controller

Turns user actions into validated store mutations and state transitions.

Flow for every mutating action:
1. Validate input (abort with a message on failure, nothing changes)
2. Mutate the Entry Store (which persists)
3. Update AppState
4. The caller re-renders via render()

Per-row state machine:
    Display --start_edit--> Editing
    Editing --cancel_edit--> Display (draft discarded)
    Editing --save_edit (valid)--> Display (entry updated)
    Editing --save_edit (invalid)--> Editing (draft kept)

Deleting needs an explicit confirmation. request_delete() marks the row,
resolve_delete() carries out or drops the request. delete() does both in one
call given a synchronous confirm callback.
"""

from typing import Callable, Optional

from src.audit import AuditLogger
from src.models.entry import EntryDraft, EntryFilter, EntryForm, EntryType
from src.services.entry_store import EntryStore
from src.validation import EntryValidationError, EntryValidator
from src.view.projection import build_view
from src.view.state import AppState, LedgerView


DELETE_CONFIRM_PROMPT = "Delete this entry?"


class ViewController:
    """
    Controller for one ledger session.

    Holds the Entry Store and the current AppState.
    """

    def __init__(
        self,
        store: EntryStore,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "₹",
        state: Optional[AppState] = None,
    ):
        self._store = store
        self._validator = validator or EntryValidator()
        self._audit_logger = audit_logger
        self._currency_symbol = currency_symbol
        self.state = state or AppState()

    @property
    def store(self) -> EntryStore:
        return self._store

    def render(self) -> LedgerView:
        """Project current entries and state. Calling it twice gives the same view."""
        return build_view(self._store.all(), self.state, self._currency_symbol)

    # -------------------------------------------------------------------------
    # Filter
    # -------------------------------------------------------------------------

    def set_filter(self, entry_filter: EntryFilter) -> None:
        entry_filter = EntryFilter(entry_filter)
        previous = self.state.filter
        if previous == entry_filter:
            return

        self.state = self.state.with_filter(entry_filter)
        if self._audit_logger:
            self._audit_logger.log_filter_changed(previous.value, entry_filter.value)

    # -------------------------------------------------------------------------
    # Create form
    # -------------------------------------------------------------------------

    def submit_form(
        self,
        entry_type: object,
        description: object,
        amount: object,
    ) -> tuple[bool, str]:
        """
        Validate and add a new entry.

        Returns:
            (success, message). On failure the form keeps what was typed.
        """
        try:
            form_type = EntryType(entry_type)
        except ValueError:
            form_type = self.state.form.type
        self.state = self.state.with_form(EntryForm(
            type=form_type,
            description="" if description is None else str(description),
            amount="" if amount is None else str(amount),
        ))

        try:
            valid = self._validator.validate(entry_type, description, amount)
        except EntryValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed("add", e.code.value, e.message)
            return False, e.message

        entry = self._store.add(valid.type, valid.description, valid.amount)
        self.state = self.state.with_form(self.state.form.cleared())

        if self._audit_logger:
            self._audit_logger.log_entry_added(
                entry.id, entry.type.value, format(entry.amount, "f")
            )
        return True, f"{entry.type.label} added."

    def reset_form(self) -> None:
        """Clear the form and select income."""
        self.state = self.state.with_form(EntryForm())
        if self._audit_logger:
            self._audit_logger.log_form_reset()

    # -------------------------------------------------------------------------
    # Inline edit
    # -------------------------------------------------------------------------

    def start_edit(self, entry_id: str) -> bool:
        """
        Put a row into Editing, capturing its current values.

        A row already being edited keeps its draft.
        Returns False if the entry does not exist.
        """
        if self.state.is_editing(entry_id):
            return True

        entry = self._store.get(entry_id)
        if entry is None:
            return False

        self.state = self.state.with_draft(entry_id, EntryDraft.from_entry(entry))
        if self._audit_logger:
            self._audit_logger.log_edit_started(entry_id)
        return True

    def update_draft(
        self,
        entry_id: str,
        description: Optional[str] = None,
        amount: Optional[str] = None,
        entry_type: Optional[EntryType] = None,
    ) -> None:
        """Record what the user has typed into an editing row."""
        draft = self.state.drafts.get(entry_id)
        if draft is None:
            return

        changes = {}
        if description is not None:
            changes["description"] = description
        if amount is not None:
            changes["amount"] = str(amount)
        if entry_type is not None:
            changes["type"] = entry_type

        self.state = self.state.with_draft(entry_id, draft.model_copy(update=changes))

    def cancel_edit(self, entry_id: str) -> None:
        """Discard the draft; the row shows the stored values again."""
        if not self.state.is_editing(entry_id):
            return

        self.state = self.state.without_draft(entry_id)
        if self._audit_logger:
            self._audit_logger.log_edit_cancelled(entry_id)

    def save_edit(self, entry_id: str) -> tuple[bool, str]:
        """
        Validate the row's draft and commit it.

        Returns:
            (success, message). On failure the row stays in Editing.
            Saving a draft whose entry was deleted meanwhile just closes it.
        """
        draft = self.state.drafts.get(entry_id)
        if draft is None:
            return False, "This entry is not being edited."

        try:
            valid = self._validator.validate(draft.type, draft.description, draft.amount)
        except EntryValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    "edit", e.code.value, e.message, entry_id=entry_id
                )
            return False, e.message

        before = self._store.get(entry_id)
        updated = self._store.update(entry_id, valid.description, valid.amount, valid.type)
        self.state = self.state.without_draft(entry_id)

        if updated is None:
            if self._audit_logger:
                self._audit_logger.log_update_target_missing(entry_id)
            return True, ""

        if self._audit_logger:
            changes = {}
            if before.description != updated.description:
                changes["description"] = updated.description
            if before.amount != updated.amount:
                changes["amount"] = format(updated.amount, "f")
            if before.type != updated.type:
                changes["type"] = updated.type.value
            self._audit_logger.log_entry_updated(entry_id, changes)

        return True, "Entry updated."

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def request_delete(self, entry_id: str) -> bool:
        """Ask for confirmation before deleting. False if the entry is gone."""
        if self._store.get(entry_id) is None:
            return False

        self.state = self.state.with_pending_delete(entry_id)
        if self._audit_logger:
            self._audit_logger.log_delete_requested(entry_id)
        return True

    def resolve_delete(self, accepted: bool) -> bool:
        """
        Answer the pending confirmation.

        Returns True if an entry was removed.
        """
        entry_id = self.state.pending_delete
        if entry_id is None:
            return False

        self.state = self.state.with_pending_delete(None)

        if not accepted:
            if self._audit_logger:
                self._audit_logger.log_delete_declined(entry_id)
            return False

        removed = self._store.remove(entry_id)
        self.state = self.state.without_draft(entry_id)
        if removed and self._audit_logger:
            self._audit_logger.log_entry_deleted(entry_id)
        return removed

    def delete(self, entry_id: str, confirm: Callable[[str], bool]) -> bool:
        """Delete after a synchronous confirm(prompt) returns True."""
        if not self.request_delete(entry_id):
            return False
        return self.resolve_delete(bool(confirm(DELETE_CONFIRM_PROMPT)))
