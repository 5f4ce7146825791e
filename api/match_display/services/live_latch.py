"""One-shot latch for actions tied to a match going live.

Auto-selecting the live map and auto-scrolling the round timeline must
happen at most once per viewing session; afterwards the user owns the
selection and the scroll position, however often the upstream data
refreshes. The latch is stored next to the session, never inside the
resolvers, so the resolvers stay plain functions of their inputs.
"""

from __future__ import annotations

from enum import Enum

from ..schemas import MatchStatus


class LatchState(str, Enum):
    not_fired = "not_fired"
    fired = "fired"


def should_fire(state: LatchState, match_status: MatchStatus) -> bool:
    """True when this evaluation is the first one to see the match live."""
    return state is LatchState.not_fired and match_status is MatchStatus.live


def advance(state: LatchState, match_status: MatchStatus) -> LatchState:
    """Next latch state. ``fired`` is terminal until the session is reset."""
    if should_fire(state, match_status):
        return LatchState.fired
    return state
