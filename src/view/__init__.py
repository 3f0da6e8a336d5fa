"""View package: state, pure projections and the controller."""

from src.view.controller import DELETE_CONFIRM_PROMPT, ViewController
from src.view.projection import build_row, build_view, visible_entries
from src.view.state import AppState, EntryRow, LedgerView

__all__ = [
    "AppState",
    "DELETE_CONFIRM_PROMPT",
    "EntryRow",
    "LedgerView",
    "ViewController",
    "build_row",
    "build_view",
    "visible_entries",
]
