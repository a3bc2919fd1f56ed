"""
Player Performance Module

Builds per-player counters from the match event stream and derives a
0-10 display rating from them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from matchpulse.core.constants import (
    FULL_TIME_MINUTE,
    MAX_PLAYER_RATING,
    PLAYER_COUNTERS,
    PLAYER_NAME_ID_CHARS,
    PLAYER_RATING_SCALE,
    PLAYER_RATING_WEIGHTS,
)
from matchpulse.core.models import MatchEvent, PlayerPerformance

logger = logging.getLogger(__name__)


def placeholder_player_name(player_id: str) -> str:
    return f"Player {player_id[:PLAYER_NAME_ID_CHARS]}"


def new_player_performance(event: MatchEvent) -> PlayerPerformance:
    """Zeroed record for a player seen for the first time in event."""
    player_id = event.player_id or ""
    return PlayerPerformance(
        player_id=player_id,
        player_name=event.player_name or placeholder_player_name(player_id),
        team_id=event.team_id,
    )


def apply_player_event(player: PlayerPerformance, event: MatchEvent) -> None:
    """Increment the counter matching event.type, if there is one."""
    attr = PLAYER_COUNTERS.get(event.type)
    if attr is not None:
        setattr(player, attr, getattr(player, attr) + 1)


def minutes_played(current_minute: int) -> int:
    """Minutes credited to every player: current minute capped at full time."""
    return max(0, min(current_minute, FULL_TIME_MINUTE))


def compute_player_performance(
    events: Iterable[MatchEvent], current_minute: int = 0
) -> list[PlayerPerformance]:
    """
    Build one PlayerPerformance per distinct player id.

    Output order follows each player's first appearance in the stream.
    Events without a player id are skipped. The player name comes from
    data.playerName on first sight, else a placeholder derived from the id.

    Args:
        events: Match events in arrival order
        current_minute: Current match minute

    Returns:
        List of PlayerPerformance records
    """
    players: dict[str, PlayerPerformance] = {}

    for event in events:
        if not event.player_id:
            continue
        player = players.get(event.player_id)
        if player is None:
            player = new_player_performance(event)
            players[event.player_id] = player
        apply_player_event(player, event)

    played = minutes_played(current_minute)
    for player in players.values():
        player.minutes_played = played

    return list(players.values())


def calculate_player_rating(player: PlayerPerformance) -> float:
    """
    Weighted 0-10 display rating.

    goals*3 + assists*2 + shots*0.5 + passes*0.1 + tackles + minutes*0.01,
    divided by 10 and clamped.
    """
    total = sum(getattr(player, stat) * weight for stat, weight in PLAYER_RATING_WEIGHTS.items())
    return max(0.0, min(MAX_PLAYER_RATING, total / PLAYER_RATING_SCALE))


def top_performers(players: Iterable[PlayerPerformance], limit: int = 5) -> list[PlayerPerformance]:
    """Highest rated players first; ties keep their input order."""
    ranked = sorted(players, key=calculate_player_rating, reverse=True)
    return ranked[: max(0, limit)]
