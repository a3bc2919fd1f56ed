"""
Momentum Module

A bounded signal for which side dominated the most recent events.
Positive values favour the home team.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from matchpulse.core.constants import (
    MOMENTUM_BOUND,
    MOMENTUM_MIN_EVENTS,
    MOMENTUM_WEIGHTS,
    MOMENTUM_WINDOW,
)
from matchpulse.core.models import MatchEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MomentumIndicator:
    """Display label for a momentum value."""

    variant: str  # success, info, warning, danger
    text: str


def score_momentum_event(event_type: str, team_id: str, home_team_id: str) -> int:
    """Signed momentum contribution of one event. Any non-home team is the opponent."""
    weight = MOMENTUM_WEIGHTS.get(event_type, 0)
    return weight if team_id == home_team_id else -weight


def clamp_momentum(score: int) -> int:
    return max(-MOMENTUM_BOUND, min(MOMENTUM_BOUND, score))


def compute_momentum(events: Sequence[MatchEvent], home_team_id: str) -> int:
    """
    Momentum over the last five events, clamped to [-10, 10].

    goal +/-10, shot +/-2, corner +/-1, yellow card -/+1, red card -/+3,
    signed positive for the home team. Fewer than two events is neutral (0).
    """
    if len(events) < MOMENTUM_MIN_EVENTS:
        return 0

    score = sum(
        score_momentum_event(event.type, event.team_id, home_team_id)
        for event in events[-MOMENTUM_WINDOW:]
    )
    return clamp_momentum(score)


def momentum_indicator(momentum: int) -> MomentumIndicator:
    """Map a momentum value to its dashboard label."""
    if momentum > 5:
        return MomentumIndicator("success", "Home Team Dominating")
    if momentum > 0:
        return MomentumIndicator("info", "Home Team Slight Edge")
    if momentum > -5:
        return MomentumIndicator("warning", "Away Team Slight Edge")
    return MomentumIndicator("danger", "Away Team Dominating")
