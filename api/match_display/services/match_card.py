"""Match card and home feed derivations.

Pure helpers so clients don't need to duplicate winner or badge logic.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo
from typing import Any

from ..schemas import Match, MatchStatus, PlayerStatLine
from ..utils.datetime_utils import Clock, now_utc
from .time_display import format_match_time

LIVE_SECTION = "Live"
UPCOMING_SECTION = "Upcoming"
RESULTS_EMPTY_MESSAGE = "No completed matches found."


def match_winner(match: Match) -> str | None:
    """Return "team1" or "team2" for a completed match with a strict winner."""
    if match.status is not MatchStatus.completed or match.team1 is None or match.team2 is None:
        return None
    if match.team1.score > match.team2.score:
        return "team1"
    if match.team2.score > match.team1.score:
        return "team2"
    return None


def card_header(
    match: Match,
    *,
    now: Clock = now_utc,
    viewer_tz: tzinfo | None = None,
) -> dict[str, Any]:
    """Header badge for a match card.

    Live matches show the LIVE badge, upcoming ones their start time,
    completed ones neither.
    """
    time_label = None
    if match.status is MatchStatus.upcoming:
        time_label = format_match_time(match.time, now=now, viewer_tz=viewer_tz)
    return {
        "is_live": match.status is MatchStatus.live,
        "time_label": time_label,
    }


def build_home_sections(
    live: Sequence[Match],
    upcoming: Sequence[Match],
) -> tuple[list[tuple[str, list[Match]]], bool]:
    """Group home feed matches into titled sections, skipping empty ones.

    Returns:
        (sections, is_empty) where sections is an ordered list of
        (title, matches) pairs.
    """
    sections: list[tuple[str, list[Match]]] = []
    if live:
        sections.append((LIVE_SECTION, list(live)))
    if upcoming:
        sections.append((UPCOMING_SECTION, list(upcoming)))
    return sections, not sections


def build_results_feed(matches: Sequence[Match]) -> tuple[list[Match], bool]:
    """Completed matches for the results screen, in the order given.

    Anything not yet completed is dropped so a stale snapshot never shows
    up as a result.
    """
    completed = [match for match in matches if match.status is MatchStatus.completed]
    return completed, not completed


def format_kda(stats: PlayerStatLine) -> str:
    """Kills/deaths/assists line for a scoreboard row, e.g. "21/14/5"."""
    return f"{stats.kills}/{stats.deaths}/{stats.assists}"
