"""Display state for the match detail screen.

Pure derivation from a match snapshot plus the session's latch states:

- which maps are shown (depends on the overall match status)
- which map is selected (jumps to the live map once, when the match goes live)
- where the round timeline should scroll (once, to the last decided round)

Match and map statuses are only eventually consistent upstream, so every
combination must produce a usable view; nothing here raises on partial data.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..schemas import (
    DisplayedMap,
    DisplaySelection,
    MapData,
    MapStatus,
    Match,
    MatchStatus,
    RoundLayout,
)
from . import live_latch
from .live_latch import LatchState
from .round_labels import last_decided_round_index

logger = logging.getLogger(__name__)

# Maps shown while the match is live: anything already scheduled to be played.
_LIVE_MATCH_VISIBLE = frozenset({MapStatus.upcoming, MapStatus.live, MapStatus.completed})
# Otherwise only maps with something to show. A live map under a completed
# match stays visible; upstream can lag on map status.
_SETTLED_MATCH_VISIBLE = frozenset({MapStatus.live, MapStatus.completed})


@dataclass(frozen=True)
class DisplayResolution:
    """Derived selection plus the latch states to carry into the next evaluation."""

    selection: DisplaySelection
    selection_latch: LatchState
    scroll_latch: LatchState


def filter_display_maps(match_status: MatchStatus, maps: Sequence[MapData]) -> list[DisplayedMap]:
    """Return the maps eligible for display, in play order."""
    visible = _LIVE_MATCH_VISIBLE if match_status is MatchStatus.live else _SETTLED_MATCH_VISIBLE
    return [
        DisplayedMap(source_index=index, map=map_)
        for index, map_ in enumerate(maps)
        if map_.status in visible
    ]


def first_live_index(displayed: Sequence[DisplayedMap]) -> int | None:
    for index, entry in enumerate(displayed):
        if entry.map.status is MapStatus.live:
            return index
    return None


def compute_scroll_anchor(
    entry_index: int,
    entry_widths: Sequence[float],
    viewport_width: float,
    gap: float = 0,
) -> float | None:
    """Scroll offset that centers ``entry_index`` in the viewport.

    The offset is clamped to the scrollable range. Returns None when the
    measurements don't cover the entry or are not usable.
    """
    if viewport_width <= 0 or entry_index < 0 or entry_index >= len(entry_widths):
        return None
    if any(width < 0 for width in entry_widths) or gap < 0:
        return None

    left = sum(entry_widths[:entry_index]) + gap * entry_index
    midpoint = left + entry_widths[entry_index] / 2
    content_width = sum(entry_widths) + gap * (len(entry_widths) - 1)
    max_offset = max(0.0, content_width - viewport_width)
    return min(max(midpoint - viewport_width / 2, 0.0), max_offset)


def _scroll_anchor_for(map_: MapData, layout: RoundLayout) -> float | None:
    round_index = last_decided_round_index(map_.rounds)
    if round_index is None:
        return None
    return compute_scroll_anchor(
        round_index,
        layout.entry_widths,
        layout.viewport_width,
        layout.gap,
    )


def resolve_display_state(
    match: Match,
    *,
    selected_index: int | None = 0,
    selection_latch: LatchState = LatchState.not_fired,
    scroll_latch: LatchState = LatchState.not_fired,
    layout: RoundLayout | None = None,
) -> DisplayResolution:
    """Derive the detail-screen view of ``match`` for one evaluation.

    Args:
        match: Current match snapshot.
        selected_index: Selection carried from the previous evaluation or the
            user's last navigation, as an index into the displayed maps.
        selection_latch: Whether the live auto-select already happened.
        scroll_latch: Whether the live auto-scroll already happened.
        layout: Round timeline measurements for the selected map, if rendered.

    Returns:
        DisplayResolution with the selection and the updated latch states.
    """
    displayed = filter_display_maps(match.status, match.maps)
    next_selection_latch = live_latch.advance(selection_latch, match.status)

    if not displayed:
        return DisplayResolution(
            selection=DisplaySelection(has_data=False),
            selection_latch=next_selection_latch,
            scroll_latch=scroll_latch,
        )

    selected = selected_index if selected_index is not None and 0 <= selected_index < len(displayed) else 0

    if live_latch.should_fire(selection_latch, match.status):
        live_index = first_live_index(displayed)
        if live_index is not None:
            selected = live_index
        logger.info(
            "live_selection_latch_fired",
            extra={"vlr_id": match.vlr_id, "selected_index": selected, "live_map_found": live_index is not None},
        )

    scroll_anchor: float | None = None
    selected_map = displayed[selected].map
    if (
        scroll_latch is LatchState.not_fired
        and match.status is MatchStatus.live
        and selected_map.status is MapStatus.live
        and layout is not None
    ):
        scroll_anchor = _scroll_anchor_for(selected_map, layout)
        if scroll_anchor is not None:
            scroll_latch = LatchState.fired
            logger.info(
                "live_scroll_latch_fired",
                extra={"vlr_id": match.vlr_id, "scroll_anchor": scroll_anchor},
            )

    return DisplayResolution(
        selection=DisplaySelection(
            displayed_sub_events=displayed,
            selected_index=selected,
            has_data=True,
            scroll_anchor=scroll_anchor,
        ),
        selection_latch=next_selection_latch,
        scroll_latch=scroll_latch,
    )
