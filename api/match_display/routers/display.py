"""Display endpoints for the mobile client.

The client sends match snapshots it already fetched and gets back the
derived view state. The service keeps no per-viewer state; the latch
states travel with each request.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from zoneinfo import ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from ..schemas import DisplaySelection, MapData, Match, RoundLayout
from ..services.live_latch import LatchState
from ..services.match_card import (
    RESULTS_EMPTY_MESSAGE,
    build_home_sections,
    build_results_feed,
    card_header,
    format_kda,
    match_winner,
)
from ..services.match_display import resolve_display_state
from ..services.round_labels import is_round_decided, win_condition_label
from ..services.time_display import format_match_time
from ..utils.datetime_utils import now_utc, zone

router = APIRouter(prefix="/api/display", tags=["display"])
logger = logging.getLogger(__name__)


class _CamelRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TimeLabelRequest(_CamelRequest):
    time: str
    timezone: str | None = None


class TimeLabelResponse(_CamelRequest):
    time: str
    label: str


class MatchDisplayRequest(_CamelRequest):
    match: Match
    selected_index: int | None = Field(0, alias="selectedIndex")
    selection_latch: LatchState = Field(LatchState.not_fired, alias="selectionLatch")
    scroll_latch: LatchState = Field(LatchState.not_fired, alias="scrollLatch")
    layout: RoundLayout | None = None


class MatchDisplayResponse(_CamelRequest):
    selection: DisplaySelection
    selection_latch: LatchState = Field(..., alias="selectionLatch")
    scroll_latch: LatchState = Field(..., alias="scrollLatch")


class ScoreboardRow(_CamelRequest):
    player_name: str = Field(..., alias="playerName")
    team_name: str | None = Field(None, alias="teamName")
    agent: str | None = None
    kda: str
    acs: float
    adr: float


class RoundEntry(_CamelRequest):
    round_number: int = Field(..., alias="roundNumber")
    winning_team: str | None = Field(None, alias="winningTeam")
    decided: bool
    label: str


class MapDetailResponse(_CamelRequest):
    name: str
    score: str
    picked_by: str | None = Field(None, alias="pickedBy")
    scoreboard: list[ScoreboardRow]
    rounds: list[RoundEntry]


class HomeFeedRequest(_CamelRequest):
    live: list[Match] = Field(default_factory=list)
    upcoming: list[Match] = Field(default_factory=list)
    timezone: str | None = None


class MatchCard(_CamelRequest):
    vlr_id: str | None = Field(None, alias="vlrId")
    status: str
    is_live: bool = Field(..., alias="isLive")
    time_label: str | None = Field(None, alias="timeLabel")
    winner: str | None = None
    team1: str | None = None
    team2: str | None = None
    score: str | None = None
    event: str | None = None


class HomeSection(_CamelRequest):
    title: str
    matches: list[MatchCard]


class HomeFeedResponse(_CamelRequest):
    sections: list[HomeSection]
    is_empty: bool = Field(..., alias="isEmpty")


class ResultsFeedRequest(_CamelRequest):
    completed: list[Match] = Field(default_factory=list)
    timezone: str | None = None


class ResultsFeedResponse(_CamelRequest):
    matches: list[MatchCard]
    is_empty: bool = Field(..., alias="isEmpty")
    empty_message: str | None = Field(None, alias="emptyMessage")


def _resolve_viewer_zone(name: str | None) -> tzinfo | None:
    if not name:
        return None
    try:
        return zone(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown timezone: {name}",
        ) from exc


def _match_card(match: Match, viewer_tz: tzinfo | None) -> MatchCard:
    header = card_header(match, now=now_utc, viewer_tz=viewer_tz)
    score = None
    if match.team1 is not None and match.team2 is not None:
        score = f"{match.team1.score} - {match.team2.score}"
    return MatchCard(
        vlr_id=match.vlr_id,
        status=match.status.value,
        is_live=header["is_live"],
        time_label=header["time_label"],
        winner=match_winner(match),
        team1=match.team1.name if match.team1 else None,
        team2=match.team2.name if match.team2 else None,
        score=score,
        event=match.event.name if match.event else None,
    )


@router.post("/time", response_model=TimeLabelResponse, response_model_by_alias=True)
async def time_label(payload: TimeLabelRequest) -> TimeLabelResponse:
    """
    Format an upstream schedule time for the viewer.

    Example request:
        POST /api/display/time
        {"time": "2026-01-15T19:00:00Z", "timezone": "America/Los_Angeles"}
    Example response:
        {"time": "2026-01-15T19:00:00Z", "label": "Thursday, January 15, 4:00 PM"}
    """
    viewer_tz = _resolve_viewer_zone(payload.timezone)
    label = format_match_time(payload.time, now=now_utc, viewer_tz=viewer_tz)
    return TimeLabelResponse(time=payload.time, label=label)


@router.post("/match", response_model=MatchDisplayResponse, response_model_by_alias=True)
async def match_display(payload: MatchDisplayRequest) -> MatchDisplayResponse:
    """Derive the detail-screen state for a match.

    Callers echo back ``selectionLatch``/``scrollLatch`` from the previous
    response so the live auto-select and auto-scroll happen only once.
    """
    resolution = resolve_display_state(
        payload.match,
        selected_index=payload.selected_index,
        selection_latch=payload.selection_latch,
        scroll_latch=payload.scroll_latch,
        layout=payload.layout,
    )
    return MatchDisplayResponse(
        selection=resolution.selection,
        selection_latch=resolution.selection_latch,
        scroll_latch=resolution.scroll_latch,
    )


@router.post("/map", response_model=MapDetailResponse, response_model_by_alias=True)
async def map_detail(payload: MapData) -> MapDetailResponse:
    """Scoreboard rows and labelled round timeline for one map."""
    return MapDetailResponse(
        name=payload.name,
        score=f"{payload.team1_score} - {payload.team2_score}",
        picked_by=payload.picked_by,
        scoreboard=[
            ScoreboardRow(
                player_name=player.player_name,
                team_name=player.team_name,
                agent=player.agent.name,
                kda=format_kda(player.stats),
                acs=player.stats.acs,
                adr=player.stats.adr,
            )
            for player in payload.stats
        ],
        rounds=[
            RoundEntry(
                round_number=round_.round_number,
                winning_team=round_.winning_team,
                decided=is_round_decided(round_),
                label=win_condition_label(round_.win_condition),
            )
            for round_ in payload.rounds
        ],
    )


@router.post("/home", response_model=HomeFeedResponse, response_model_by_alias=True)
async def home_feed(payload: HomeFeedRequest) -> HomeFeedResponse:
    """Live and upcoming sections for the home screen, empty sections omitted."""
    viewer_tz = _resolve_viewer_zone(payload.timezone)
    sections, is_empty = build_home_sections(payload.live, payload.upcoming)
    logger.debug(
        "home_feed_built",
        extra={
            "live_count": len(payload.live),
            "upcoming_count": len(payload.upcoming),
            "viewer_tz": viewer_tz,
        },
    )
    return HomeFeedResponse(
        sections=[
            HomeSection(title=title, matches=[_match_card(match, viewer_tz) for match in matches])
            for title, matches in sections
        ],
        is_empty=is_empty,
    )


@router.post("/results", response_model=ResultsFeedResponse, response_model_by_alias=True)
async def results_feed(payload: ResultsFeedRequest) -> ResultsFeedResponse:
    """
    Completed match cards for the results screen.

    Example request:
        POST /api/display/results
        {"completed": [{"vlrId": "1001", "status": "completed", ...}]}
    Example response:
        {"matches": [{"vlrId": "1001", "winner": "team1", ...}], "isEmpty": false, "emptyMessage": null}
    """
    viewer_tz = _resolve_viewer_zone(payload.timezone)
    completed, is_empty = build_results_feed(payload.completed)
    dropped = len(payload.completed) - len(completed)
    if dropped:
        logger.debug(
            "results_feed_dropped_unfinished",
            extra={"dropped_count": dropped, "viewer_tz": viewer_tz},
        )
    return ResultsFeedResponse(
        matches=[_match_card(match, viewer_tz) for match in completed],
        is_empty=is_empty,
        empty_message=RESULTS_EMPTY_MESSAGE if is_empty else None,
    )
