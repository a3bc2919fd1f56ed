"""
Incremental match aggregation.

MatchAggregator keeps running counts per team and per player and updates
them in O(1) per event. Its outputs are identical to the batch functions in
matchpulse.domains for the same event sequence.
"""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter, deque
from collections.abc import Iterable

from matchpulse.core.constants import KNOWN_EVENT_TYPES, MOMENTUM_MIN_EVENTS, MOMENTUM_WINDOW
from matchpulse.core.diagnostics import EventDiagnostics
from matchpulse.core.models import MatchEvent, MatchStatistics, PlayerPerformance
from matchpulse.domains.momentum import clamp_momentum, score_momentum_event
from matchpulse.domains.player_performance import (
    apply_player_event,
    minutes_played,
    new_player_performance,
)
from matchpulse.domains.team_stats import build_team_statistics

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class _TeamTally:
    type_counts: Counter = dataclasses.field(default_factory=Counter)
    shots_on_target: int = 0

    def add(self, event: MatchEvent) -> None:
        self.type_counts[event.type] += 1
        if event.is_on_target:
            self.shots_on_target += 1


class MatchAggregator:
    """
    Running statistics for one match.

    Usage:
        aggregator = MatchAggregator("home-id", "away-id")
        for event in stream:
            aggregator.add(event)
            stats = aggregator.team_statistics(current_minute)
    """

    def __init__(
        self,
        home_team_id: str,
        away_team_id: str,
        diagnostics: EventDiagnostics | None = None,
    ) -> None:
        self.home_team_id = home_team_id
        self.away_team_id = away_team_id
        self.diagnostics = diagnostics

        self._home = _TeamTally()
        self._away = _TeamTally()
        self._players: dict[str, PlayerPerformance] = {}
        self._recent: deque[tuple[str, str]] = deque(maxlen=MOMENTUM_WINDOW)
        self.event_count = 0

    def add(self, event: MatchEvent) -> None:
        """Fold one event into the running totals."""
        self.event_count += 1
        self._recent.append((event.type, event.team_id))
        if self.diagnostics is not None:
            self.diagnostics.record_event()

        is_home = event.team_id == self.home_team_id
        is_away = event.team_id == self.away_team_id
        if not (is_home or is_away):
            if self.diagnostics is not None:
                self.diagnostics.record_stray_team(event.team_id)
        elif event.type in KNOWN_EVENT_TYPES:
            if is_home:
                self._home.add(event)
            if is_away:
                self._away.add(event)
        elif self.diagnostics is not None:
            self.diagnostics.record_unrecognized_type(event.type)

        if event.player_id:
            player = self._players.get(event.player_id)
            if player is None:
                player = new_player_performance(event)
                self._players[event.player_id] = player
            apply_player_event(player, event)

    def extend(self, events: Iterable[MatchEvent]) -> None:
        for event in events:
            self.add(event)

    def team_statistics(self, current_minute: int = 0) -> MatchStatistics:
        return MatchStatistics(
            home=build_team_statistics(
                self._home.type_counts, self._home.shots_on_target, current_minute
            ),
            away=build_team_statistics(
                self._away.type_counts, self._away.shots_on_target, current_minute
            ),
        )

    def player_performance(self, current_minute: int = 0) -> list[PlayerPerformance]:
        """Copies of the running player records with minutes played filled in."""
        played = minutes_played(current_minute)
        return [
            dataclasses.replace(player, minutes_played=played) for player in self._players.values()
        ]

    def momentum(self) -> int:
        if self.event_count < MOMENTUM_MIN_EVENTS:
            return 0
        score = sum(
            score_momentum_event(event_type, team_id, self.home_team_id)
            for event_type, team_id in self._recent
        )
        return clamp_momentum(score)

    def reset(self) -> None:
        self._home = _TeamTally()
        self._away = _TeamTally()
        self._players.clear()
        self._recent.clear()
        self.event_count = 0
