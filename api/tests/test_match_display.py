"""Tests for match_display: map filtering, live selection and scroll anchor."""

from __future__ import annotations

import pytest

from match_display.schemas import MapData, MapStatus, Match, MatchStatus, Round, RoundLayout
from match_display.services.live_latch import LatchState
from match_display.services.match_display import (
    compute_scroll_anchor,
    filter_display_maps,
    first_live_index,
    resolve_display_state,
)


def _map(status: str, name: str = "", rounds: list[Round] | None = None) -> MapData:
    return MapData(name=name or status, status=status, rounds=rounds or [])


def _match(status: str, *maps: MapData) -> Match:
    return Match(vlr_id="1001", status=status, time="2026-01-15T19:00:00Z", maps=list(maps))


def _round(number: int, winner: str | None = None, condition: str | None = None) -> Round:
    return Round(round_number=number, winning_team=winner, win_condition=condition)


def _statuses(displayed) -> list[MapStatus]:
    return [entry.map.status for entry in displayed]


# ---------------------------------------------------------------------------
# filter_display_maps
# ---------------------------------------------------------------------------


class TestFilterDisplayMaps:
    def test_completed_match_drops_unplayed(self):
        displayed = filter_display_maps(MatchStatus.completed, [_map("completed"), _map("unplayed")])
        assert len(displayed) == 1
        assert displayed[0].map.status is MapStatus.completed
        assert displayed[0].source_index == 0

    @pytest.mark.parametrize("match_status", [MatchStatus.completed, MatchStatus.upcoming])
    def test_settled_match_shows_only_played_maps(self, match_status):
        maps = [_map("completed"), _map("upcoming"), _map("live"), _map("unplayed")]
        displayed = filter_display_maps(match_status, maps)
        assert _statuses(displayed) == [MapStatus.completed, MapStatus.live]
        assert MapStatus.upcoming not in _statuses(displayed)
        assert MapStatus.unplayed not in _statuses(displayed)

    def test_completed_match_keeps_lagging_live_map(self):
        displayed = filter_display_maps(MatchStatus.completed, [_map("completed"), _map("live")])
        assert _statuses(displayed) == [MapStatus.completed, MapStatus.live]

    def test_live_match_keeps_upcoming_maps_in_order(self):
        maps = [_map("completed", "Ascent"), _map("live", "Bind"), _map("upcoming", "Haven"), _map("unplayed", "Lotus")]
        displayed = filter_display_maps(MatchStatus.live, maps)
        assert [entry.map.name for entry in displayed] == ["Ascent", "Bind", "Haven"]
        assert [entry.source_index for entry in displayed] == [0, 1, 2]

    def test_live_match_skips_interleaved_unplayed(self):
        maps = [_map("unplayed"), _map("upcoming"), _map("unplayed"), _map("completed")]
        displayed = filter_display_maps(MatchStatus.live, maps)
        assert _statuses(displayed) == [MapStatus.upcoming, MapStatus.completed]
        assert [entry.source_index for entry in displayed] == [1, 3]

    def test_unknown_map_status_is_hidden(self):
        displayed = filter_display_maps(MatchStatus.live, [_map("postponed"), _map("live")])
        assert _statuses(displayed) == [MapStatus.live]

    def test_empty_input(self):
        assert filter_display_maps(MatchStatus.live, []) == []


class TestFirstLiveIndex:
    def test_finds_first_live(self):
        displayed = filter_display_maps(MatchStatus.live, [_map("completed"), _map("live"), _map("live")])
        assert first_live_index(displayed) == 1

    def test_none_when_no_live_map(self):
        displayed = filter_display_maps(MatchStatus.live, [_map("completed"), _map("upcoming")])
        assert first_live_index(displayed) is None


# ---------------------------------------------------------------------------
# resolve_display_state: selection
# ---------------------------------------------------------------------------


class TestResolveSelection:
    def test_no_maps_is_no_data(self):
        resolution = resolve_display_state(_match("live"))
        assert resolution.selection.has_data is False
        assert resolution.selection.selected_index is None
        assert resolution.selection.displayed_sub_events == []

    def test_all_unplayed_is_no_data(self):
        resolution = resolve_display_state(_match("completed", _map("unplayed"), _map("unplayed")))
        assert resolution.selection.has_data is False
        assert resolution.selection.selected_index is None

    def test_completed_scenario(self):
        resolution = resolve_display_state(_match("completed", _map("completed"), _map("unplayed")))
        assert resolution.selection.has_data is True
        assert len(resolution.selection.displayed_sub_events) == 1
        assert resolution.selection.selected_index == 0

    def test_going_live_selects_live_map(self):
        match = _match("live", _map("completed"), _map("live"), _map("upcoming"))
        resolution = resolve_display_state(match)
        assert resolution.selection.selected_index == 1
        assert resolution.selection_latch is LatchState.fired

    def test_going_live_without_live_map_keeps_selection(self):
        """Match marked live while every map still says upcoming."""
        match = _match("live", _map("upcoming"), _map("upcoming"))
        resolution = resolve_display_state(match)
        assert resolution.selection.has_data is True
        assert resolution.selection.selected_index == 0
        assert resolution.selection_latch is LatchState.fired

    def test_fired_latch_does_not_move_selection(self):
        match = _match("live", _map("completed"), _map("live"))
        resolution = resolve_display_state(match, selected_index=0, selection_latch=LatchState.fired)
        assert resolution.selection.selected_index == 0
        assert resolution.selection_latch is LatchState.fired

    def test_latch_not_consumed_before_live(self):
        match = _match("upcoming", _map("completed"), _map("live"))
        resolution = resolve_display_state(match)
        assert resolution.selection_latch is LatchState.not_fired
        assert resolution.selection.selected_index == 0

    def test_out_of_range_selection_clamped(self):
        match = _match("completed", _map("completed"))
        resolution = resolve_display_state(match, selected_index=4)
        assert resolution.selection.selected_index == 0

    def test_none_selection_defaults_to_first(self):
        match = _match("completed", _map("completed"), _map("completed"))
        resolution = resolve_display_state(match, selected_index=None)
        assert resolution.selection.selected_index == 0

    def test_carried_selection_kept(self):
        match = _match("completed", _map("completed"), _map("completed"))
        resolution = resolve_display_state(match, selected_index=1)
        assert resolution.selection.selected_index == 1


# ---------------------------------------------------------------------------
# compute_scroll_anchor
# ---------------------------------------------------------------------------


class TestComputeScrollAnchor:
    def test_centers_entry(self):
        assert compute_scroll_anchor(1, [40, 40, 40], viewport_width=60) == 30

    def test_clamps_to_start(self):
        assert compute_scroll_anchor(0, [40, 40, 40], viewport_width=100) == 0

    def test_clamps_to_end(self):
        assert compute_scroll_anchor(2, [40, 40, 40], viewport_width=100) == 20

    def test_gap_between_entries(self):
        assert compute_scroll_anchor(1, [40, 40, 40], viewport_width=60, gap=10) == 40

    def test_uneven_widths(self):
        # left edge 50, midpoint 60, centered offset 40
        assert compute_scroll_anchor(1, [50, 20, 100], viewport_width=40) == 40

    def test_content_narrower_than_viewport(self):
        assert compute_scroll_anchor(2, [10, 10, 10], viewport_width=200) == 0

    @pytest.mark.parametrize(
        "index,widths,viewport,gap",
        [
            (3, [40, 40, 40], 60, 0),
            (-1, [40, 40, 40], 60, 0),
            (0, [], 60, 0),
            (0, [40], 0, 0),
            (0, [40, -5], 60, 0),
            (0, [40, 40], 60, -1),
        ],
    )
    def test_unusable_measurements(self, index, widths, viewport, gap):
        assert compute_scroll_anchor(index, widths, viewport, gap) is None


# ---------------------------------------------------------------------------
# resolve_display_state: scroll anchor
# ---------------------------------------------------------------------------


class TestResolveScrollAnchor:
    @staticmethod
    def _live_match(rounds: list[Round]) -> Match:
        return _match("live", _map("completed"), _map("live", rounds=rounds))

    LAYOUT = RoundLayout(entry_widths=[40, 40, 40], viewport_width=60)

    def test_anchor_on_last_decided_round(self):
        rounds = [_round(1, "A", "elim"), _round(2, "B", "defuse"), _round(3)]
        resolution = resolve_display_state(self._live_match(rounds), layout=self.LAYOUT)
        assert resolution.selection.selected_index == 1
        assert resolution.selection.scroll_anchor == 30
        assert resolution.scroll_latch is LatchState.fired

    def test_round_missing_condition_not_decided(self):
        rounds = [_round(1, "A", "elim"), _round(2, "B", None), _round(3)]
        resolution = resolve_display_state(self._live_match(rounds), layout=self.LAYOUT)
        assert resolution.selection.scroll_anchor == 0

    def test_anchor_computed_once(self):
        rounds = [_round(1, "A", "elim"), _round(2, "B", "defuse"), _round(3)]
        first = resolve_display_state(self._live_match(rounds), layout=self.LAYOUT)
        second = resolve_display_state(
            self._live_match(rounds),
            selected_index=first.selection.selected_index,
            selection_latch=first.selection_latch,
            scroll_latch=first.scroll_latch,
            layout=self.LAYOUT,
        )
        assert second.selection.scroll_anchor is None
        assert second.scroll_latch is LatchState.fired

    def test_waits_for_layout(self):
        rounds = [_round(1, "A", "elim"), _round(2, "B", "defuse")]
        without_layout = resolve_display_state(self._live_match(rounds))
        assert without_layout.selection.scroll_anchor is None
        assert without_layout.scroll_latch is LatchState.not_fired

        with_layout = resolve_display_state(
            self._live_match(rounds),
            selected_index=without_layout.selection.selected_index,
            selection_latch=without_layout.selection_latch,
            scroll_latch=without_layout.scroll_latch,
            layout=RoundLayout(entry_widths=[40, 40], viewport_width=40),
        )
        assert with_layout.selection.scroll_anchor == 40
        assert with_layout.scroll_latch is LatchState.fired

    def test_no_decided_rounds(self):
        resolution = resolve_display_state(self._live_match([_round(1), _round(2)]), layout=self.LAYOUT)
        assert resolution.selection.scroll_anchor is None
        assert resolution.scroll_latch is LatchState.not_fired

    def test_empty_rounds(self):
        resolution = resolve_display_state(self._live_match([]), layout=self.LAYOUT)
        assert resolution.selection.has_data is True
        assert resolution.selection.scroll_anchor is None

    def test_selected_map_not_live(self):
        rounds = [_round(1, "A", "elim")]
        match = _match("live", _map("completed", rounds=rounds), _map("upcoming"))
        resolution = resolve_display_state(match, layout=self.LAYOUT)
        assert resolution.selection.scroll_anchor is None

    def test_completed_match_never_scrolls(self):
        rounds = [_round(1, "A", "elim")]
        match = _match("completed", _map("live", rounds=rounds))
        resolution = resolve_display_state(match, layout=self.LAYOUT)
        assert resolution.selection.scroll_anchor is None
        assert resolution.scroll_latch is LatchState.not_fired
