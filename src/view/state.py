"""
View State Models

AppState is the single explicit state object for one ledger session. It is
never mutated in place: every transition returns a new AppState, so the
controller can be tested without any rendering surface.

Per-row edit mode is a mapping from entry id to an EntryDraft. A row whose id
is in the mapping is in Editing; every other row is in Display. Several rows
may be editing at once.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.entry import Entry, EntryDraft, EntryFilter, EntryForm, Totals


class AppState(BaseModel):
    """Transient UI state. Nothing here is persisted."""
    model_config = ConfigDict(frozen=True)

    filter: EntryFilter = EntryFilter.ALL
    drafts: dict[str, EntryDraft] = Field(default_factory=dict)
    form: EntryForm = Field(default_factory=EntryForm)
    pending_delete: Optional[str] = Field(
        default=None,
        description="Entry id awaiting delete confirmation"
    )

    def is_editing(self, entry_id: str) -> bool:
        return entry_id in self.drafts

    def with_filter(self, entry_filter: EntryFilter) -> "AppState":
        return self.model_copy(update={"filter": entry_filter})

    def with_draft(self, entry_id: str, draft: EntryDraft) -> "AppState":
        drafts = dict(self.drafts)
        drafts[entry_id] = draft
        return self.model_copy(update={"drafts": drafts})

    def without_draft(self, entry_id: str) -> "AppState":
        drafts = {k: v for k, v in self.drafts.items() if k != entry_id}
        return self.model_copy(update={"drafts": drafts})

    def with_form(self, form: EntryForm) -> "AppState":
        return self.model_copy(update={"form": form})

    def with_pending_delete(self, entry_id: Optional[str]) -> "AppState":
        return self.model_copy(update={"pending_delete": entry_id})


class EntryRow(BaseModel):
    """One rendered list row."""
    model_config = ConfigDict(frozen=True)

    entry: Entry
    type_label: str
    amount_display: str
    amount_class: str
    draft: Optional[EntryDraft] = None
    awaiting_delete: bool = False

    @property
    def is_editing(self) -> bool:
        return self.draft is not None


class LedgerView(BaseModel):
    """Everything the rendering adapter needs for one pass."""
    model_config = ConfigDict(frozen=True)

    totals: Totals
    income_display: str
    expense_display: str
    net_display: str
    net_tone: str
    filter: EntryFilter
    form: EntryForm
    rows: list[EntryRow] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Show the empty-state placeholder instead of a list."""
        return not self.rows
