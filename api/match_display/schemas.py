"""Pydantic models for match records as delivered by the upstream query layer.

Field names follow the upstream camelCase shape via aliases; Python code
populates and reads them by snake_case name.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchStatus(str, Enum):
    upcoming = "upcoming"
    live = "live"
    completed = "completed"


class MapStatus(str, Enum):
    unplayed = "unplayed"
    upcoming = "upcoming"
    live = "live"
    completed = "completed"


_MAP_STATUS_VALUES = frozenset(status.value for status in MapStatus)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Round(_CamelModel):
    """One round of a map; winner and condition stay null until it is decided."""

    round_number: int = Field(..., alias="roundNumber")
    winning_team: str | None = Field(None, alias="winningTeam")
    win_condition: str | None = Field(None, alias="winCondition")


class AgentInfo(_CamelModel):
    name: str | None = None
    icon_url: str | None = Field(None, alias="iconUrl")


class PlayerStatLine(_CamelModel):
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    acs: float = 0
    adr: float = 0
    kast_percent: float = Field(0, alias="kastPercent")
    headshot_percent: float = Field(0, alias="headshotPercent")
    first_kills: int = Field(0, alias="firstKills")
    first_deaths: int = Field(0, alias="firstDeaths")


class PlayerStats(_CamelModel):
    player_id: str | None = Field(None, alias="playerId")
    player_name: str = Field(..., alias="playerName")
    team_name: str | None = Field(None, alias="teamName")
    agent: AgentInfo = Field(default_factory=AgentInfo)
    stats: PlayerStatLine = Field(default_factory=PlayerStatLine)


class MapData(_CamelModel):
    """A single map (sub-event) within a match."""

    name: str = ""
    status: MapStatus = MapStatus.unplayed
    picked_by: str | None = Field(None, alias="pickedBy")
    team1_score: int = Field(0, alias="team1Score")
    team2_score: int = Field(0, alias="team2Score")
    stats: list[PlayerStats] = Field(default_factory=list)
    rounds: list[Round] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _tolerate_unknown_status(cls, value: Any) -> Any:
        # Producers occasionally send statuses we don't model; hide those maps.
        if isinstance(value, MapStatus):
            return value
        if isinstance(value, str) and value.strip().lower() in _MAP_STATUS_VALUES:
            return value.strip().lower()
        return MapStatus.unplayed

    @field_validator("rounds", "stats", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class TeamInfo(_CamelModel):
    team_id: str | None = Field(None, alias="teamId")
    name: str = ""
    short_name: str | None = Field(None, alias="shortName")
    score: int = 0
    logo_url: str | None = Field(None, alias="logoUrl")


class EventInfo(_CamelModel):
    event_id: str | None = Field(None, alias="eventId")
    name: str = ""
    series: str = ""


class Match(_CamelModel):
    """Match record with its ordered maps."""

    vlr_id: str | None = Field(None, alias="vlrId")
    status: MatchStatus
    time: str = ""
    team1: TeamInfo | None = None
    team2: TeamInfo | None = None
    event: EventInfo | None = None
    maps: list[MapData] = Field(default_factory=list)

    @field_validator("maps", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class DisplayedMap(_CamelModel):
    """A map eligible for display, with its position in the match's map list."""

    source_index: int = Field(..., alias="sourceIndex")
    map: MapData


class DisplaySelection(_CamelModel):
    """Derived per-session view state for a match detail screen."""

    displayed_sub_events: list[DisplayedMap] = Field(
        default_factory=list, alias="displayedSubEvents"
    )
    selected_index: int | None = Field(None, alias="selectedIndex")
    has_data: bool = Field(False, alias="hasData")
    scroll_anchor: float | None = Field(None, alias="scrollAnchor")


class RoundLayout(_CamelModel):
    """Measured widths of the round timeline, supplied by the presentation layer."""

    entry_widths: list[float] = Field(default_factory=list, alias="entryWidths")
    viewport_width: float = Field(..., alias="viewportWidth")
    gap: float = 0
