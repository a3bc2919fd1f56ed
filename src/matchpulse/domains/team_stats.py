"""
Team Statistics Module

Folds a match event list into home/away TeamStatistics:
- Category counts (goals, cards, corners, shots, ...)
- Shots on target (shot events with data.onTarget)
- Possession and pass accuracy display heuristics

Everything here is a pure function of its inputs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from matchpulse.core.constants import (
    BASE_PASS_ACCURACY,
    KNOWN_EVENT_TYPES,
    MAX_PASS_ACCURACY,
    NEUTRAL_POSSESSION,
    PASS_ACCURACY_ASSIST_BONUS,
    PASS_ACCURACY_GOAL_BONUS,
    TEAM_COUNTERS,
)
from matchpulse.core.diagnostics import EventDiagnostics
from matchpulse.core.models import MatchEvent, MatchStatistics, TeamStatistics

logger = logging.getLogger(__name__)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def calculate_possession(shots: int, passes: int, current_minute: int) -> float:
    """
    Possession heuristic: (shots + passes) / (minutes * 2) * 100.

    Not a measured quantity. Returns the neutral 50 before kick-off.
    """
    if current_minute <= 0:
        return NEUTRAL_POSSESSION
    possession = (shots + passes) / (current_minute * 2) * 100
    return clamp(possession, 0.0, 100.0)


def calculate_pass_accuracy(passes: int, goals: int, assists: int) -> float:
    """Pass accuracy heuristic driven by goals and assists, capped at 95."""
    if passes > 0:
        accuracy = min(
            MAX_PASS_ACCURACY,
            BASE_PASS_ACCURACY
            + goals * PASS_ACCURACY_GOAL_BONUS
            + assists * PASS_ACCURACY_ASSIST_BONUS,
        )
    else:
        accuracy = BASE_PASS_ACCURACY
    return clamp(accuracy, 0.0, 100.0)


def build_team_statistics(
    type_counts: Mapping[str, int], shots_on_target: int, current_minute: int
) -> TeamStatistics:
    """
    Build TeamStatistics from per-type counts.

    Shared by the batch path and the incremental aggregator so both apply
    the same heuristics.
    """
    counts = {name: int(type_counts.get(event_type, 0)) for name, event_type in TEAM_COUNTERS.items()}
    return TeamStatistics(
        **counts,
        shots_on_target=shots_on_target,
        possession=calculate_possession(counts["shots"], counts["passes"], current_minute),
        pass_accuracy=calculate_pass_accuracy(
            counts["passes"], counts["goals"], counts["assists"]
        ),
    )


def calculate_team_statistics(
    team_events: Iterable[MatchEvent],
    current_minute: int = 0,
    diagnostics: EventDiagnostics | None = None,
) -> TeamStatistics:
    """Count one team's events in a single pass."""
    type_counts: dict[str, int] = {}
    shots_on_target = 0

    for event in team_events:
        if event.type not in KNOWN_EVENT_TYPES:
            if diagnostics is not None:
                diagnostics.record_unrecognized_type(event.type)
            continue
        type_counts[event.type] = type_counts.get(event.type, 0) + 1
        if event.is_on_target:
            shots_on_target += 1

    return build_team_statistics(type_counts, shots_on_target, current_minute)


def compute_team_statistics(
    events: Iterable[MatchEvent],
    home_team_id: str,
    away_team_id: str,
    current_minute: int = 0,
    diagnostics: EventDiagnostics | None = None,
) -> MatchStatistics:
    """
    Compute home and away statistics from the full event list.

    Events whose team id matches neither side are left out of both.
    Unknown event types are not counted in any category.

    Args:
        events: Match events in arrival order
        home_team_id: Home team identifier
        away_team_id: Away team identifier
        current_minute: Current match minute (drives the possession heuristic)
        diagnostics: Optional counter for events that could not be placed

    Returns:
        MatchStatistics with home and away TeamStatistics
    """
    home_events: list[MatchEvent] = []
    away_events: list[MatchEvent] = []

    for event in events:
        if diagnostics is not None:
            diagnostics.record_event()
        # Two independent filters: identical ids put the event on both sides
        if event.team_id == home_team_id:
            home_events.append(event)
        if event.team_id == away_team_id:
            away_events.append(event)
        if event.team_id not in (home_team_id, away_team_id) and diagnostics is not None:
            diagnostics.record_stray_team(event.team_id)

    return MatchStatistics(
        home=calculate_team_statistics(home_events, current_minute, diagnostics),
        away=calculate_team_statistics(away_events, current_minute, diagnostics),
    )
