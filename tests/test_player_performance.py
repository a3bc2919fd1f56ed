"""Tests for player performance and rating."""

import pytest

from conftest import AWAY, HOME, make_event
from matchpulse.core.models import PlayerPerformance
from matchpulse.domains.player_performance import (
    calculate_player_rating,
    compute_player_performance,
    top_performers,
)


class TestComputePlayerPerformance:
    """Tests for compute_player_performance."""

    def test_two_goals_single_record(self):
        """Two goals by one player merge into one named record."""
        events = [
            make_event("goal", HOME, 10, player_id="p1", playerName="Alex"),
            make_event("goal", HOME, 30, player_id="p1"),
        ]
        players = compute_player_performance(events)

        assert len(players) == 1
        assert players[0].player_id == "p1"
        assert players[0].player_name == "Alex"
        assert players[0].goals == 2

    def test_placeholder_name(self):
        """Players without a name get 'Player ' plus the first six id chars."""
        players = compute_player_performance([make_event("pass", HOME, player_id="abcdefghij")])
        assert players[0].player_name == "Player abcdef"

    def test_short_id_placeholder(self):
        players = compute_player_performance([make_event("pass", HOME, player_id="p9")])
        assert players[0].player_name == "Player p9"

    def test_first_name_wins(self):
        """A later playerName does not replace the first one."""
        events = [
            make_event("pass", HOME, player_id="p1", playerName="Alex"),
            make_event("pass", HOME, player_id="p1", playerName="Alexander"),
        ]
        assert compute_player_performance(events)[0].player_name == "Alex"

    def test_late_name_not_adopted(self):
        """A name arriving after the first event keeps the placeholder."""
        events = [
            make_event("pass", HOME, player_id="p1"),
            make_event("pass", HOME, player_id="p1", playerName="Alex"),
        ]
        assert compute_player_performance(events)[0].player_name == "Player p1"

    def test_events_without_player_skipped(self):
        """Team-level events create no player record."""
        events = [make_event("corner", HOME), make_event("goal", AWAY, player_id="p2")]
        players = compute_player_performance(events)
        assert [p.player_id for p in players] == ["p2"]

    def test_first_appearance_order(self):
        """Output keeps the order in which players first appear."""
        events = [
            make_event("pass", HOME, player_id="b"),
            make_event("pass", AWAY, player_id="a"),
            make_event("pass", HOME, player_id="b"),
            make_event("pass", HOME, player_id="c"),
        ]
        assert [p.player_id for p in compute_player_performance(events)] == ["b", "a", "c"]

    def test_team_from_first_event(self):
        """The team of a player is fixed by the first event seen."""
        events = [
            make_event("pass", HOME, player_id="p1"),
            make_event("pass", AWAY, player_id="p1"),
        ]
        assert compute_player_performance(events)[0].team_id == HOME

    def test_counters(self):
        """Every player counter increments from its event type."""
        types = ["goal", "assist", "yellow_card", "red_card", "shot", "pass", "tackle", "save"]
        events = [make_event(t, HOME, player_id="p1") for t in types]
        player = compute_player_performance(events)[0]
        for attr in (
            "goals",
            "assists",
            "yellow_cards",
            "red_cards",
            "shots",
            "passes",
            "tackles",
            "saves",
        ):
            assert getattr(player, attr) == 1, attr

    def test_unmapped_types_create_record_only(self):
        """Corners and unknown types register the player without counting."""
        events = [make_event("corner", HOME, player_id="p1"), make_event("bicycle", HOME, player_id="p1")]
        player = compute_player_performance(events)[0]
        assert player == PlayerPerformance(player_id="p1", player_name="Player p1", team_id=HOME)

    @pytest.mark.parametrize("minute,expected", [(0, 0), (30, 30), (90, 90), (117, 90)])
    def test_minutes_played_capped(self, minute, expected):
        """Minutes played is the current minute capped at 90."""
        players = compute_player_performance([make_event("pass", HOME, player_id="p1")], minute)
        assert players[0].minutes_played == expected


class TestPlayerRating:
    """Tests for the display rating."""

    def test_zero_record(self):
        player = PlayerPerformance(player_id="p", player_name="P", team_id=HOME)
        assert calculate_player_rating(player) == 0.0

    def test_weighted_sum(self):
        """goals*3 + assists*2 + shots*0.5 + passes*0.1 + tackles + minutes*0.01, / 10."""
        player = PlayerPerformance(
            player_id="p",
            player_name="P",
            team_id=HOME,
            goals=1,
            assists=1,
            shots=2,
            passes=10,
            tackles=1,
            minutes_played=90,
        )
        # 3 + 2 + 1 + 1 + 1 + 0.9 = 8.9
        assert calculate_player_rating(player) == pytest.approx(0.89)

    def test_capped_at_ten(self):
        player = PlayerPerformance(player_id="p", player_name="P", team_id=HOME, goals=50)
        assert calculate_player_rating(player) == 10.0


class TestTopPerformers:
    """Tests for top_performers."""

    def test_sorted_by_rating(self):
        players = [
            PlayerPerformance(player_id="a", player_name="A", team_id=HOME, passes=1),
            PlayerPerformance(player_id="b", player_name="B", team_id=HOME, goals=2),
            PlayerPerformance(player_id="c", player_name="C", team_id=AWAY, goals=1),
        ]
        assert [p.player_id for p in top_performers(players, 2)] == ["b", "c"]

    def test_ties_keep_input_order(self):
        players = [
            PlayerPerformance(player_id=pid, player_name=pid, team_id=HOME, goals=1)
            for pid in ("x", "y", "z")
        ]
        assert [p.player_id for p in top_performers(players, 3)] == ["x", "y", "z"]

    def test_non_positive_limit(self):
        players = [PlayerPerformance(player_id="a", player_name="A", team_id=HOME)]
        assert top_performers(players, 0) == []
        assert top_performers(players, -1) == []
