"""Per-viewing-session state for the match detail screen."""

from __future__ import annotations

from ..schemas import DisplaySelection, Match, RoundLayout
from .live_latch import LatchState
from .match_display import resolve_display_state


class MatchViewSession:
    """Holds the selection and latch states for one match being viewed.

    The resolver is re-run on every data refresh; this object only carries
    what must survive between runs. Attaching a different match resets it.
    """

    def __init__(self, match_id: str | None = None) -> None:
        self.match_id = match_id
        self.selected_index: int | None = 0
        self.selection_latch = LatchState.not_fired
        self.scroll_latch = LatchState.not_fired

    def attach(self, match_id: str | None) -> None:
        if match_id == self.match_id:
            return
        self.match_id = match_id
        self.selected_index = 0
        self.selection_latch = LatchState.not_fired
        self.scroll_latch = LatchState.not_fired

    def select(self, index: int) -> None:
        """Record a user-driven map change."""
        self.selected_index = index

    def evaluate(self, match: Match, layout: RoundLayout | None = None) -> DisplaySelection:
        self.attach(match.vlr_id)
        resolution = resolve_display_state(
            match,
            selected_index=self.selected_index,
            selection_latch=self.selection_latch,
            scroll_latch=self.scroll_latch,
            layout=layout,
        )
        self.selection_latch = resolution.selection_latch
        self.scroll_latch = resolution.scroll_latch
        if resolution.selection.selected_index is not None:
            self.selected_index = resolution.selection.selected_index
        return resolution.selection
