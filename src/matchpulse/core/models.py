"""
Data models for MatchPulse.

MatchEvent and MatchState arrive from the live feed. TeamStatistics,
PlayerPerformance and MatchStatistics are derived views: they are rebuilt
from the event list and never persisted.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from matchpulse.core.constants import (
    HALF_TIME_MINUTE,
    KNOWN_EVENT_TYPES,
    EventType,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Payload Parsing Helpers
# =============================================================================


def _pick(payload: dict[str, Any], *keys: str) -> Any:
    """Return the first key present (and not None) in payload."""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def parse_minute(value: Any) -> int:
    """Parse a match minute. Raises ValueError for negative or non-integer input."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid minute: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid minute: {value!r}")
        value = int(value)
    try:
        minute = int(value)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid minute: {value!r}") from None
    if minute < 0:
        raise ValueError(f"Invalid minute: {minute} (must be >= 0)")
    return minute


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO string, epoch seconds or datetime into an aware datetime.

    The timestamp is display-only, so anything unparsable (including epoch
    values outside the platform range) becomes None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        logger.debug(f"Ignoring unparsable timestamp {value!r}: {e}")
        return None
    logger.debug(f"Ignoring timestamp of type {type(value).__name__}")
    return None


# =============================================================================
# Feed Models
# =============================================================================


@dataclass(frozen=True)
class MatchEvent:
    """A single discrete occurrence during a match."""

    id: str
    type: str
    team_id: str
    minute: int
    player_id: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    timestamp: datetime | None = None
    match_id: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        # Store a read-only copy of the payload
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def event_type(self) -> EventType | None:
        """The EventType for this event, or None if the type is unrecognised."""
        if self.type in KNOWN_EVENT_TYPES:
            return EventType(self.type)
        return None

    @property
    def is_known_type(self) -> bool:
        return self.type in KNOWN_EVENT_TYPES

    @property
    def is_on_target(self) -> bool:
        """True for shots flagged on target."""
        if self.type != EventType.SHOT:
            return False
        return bool(self.data.get("onTarget") or self.data.get("on_target"))

    @property
    def player_name(self) -> str | None:
        name = self.data.get("playerName") or self.data.get("player_name")
        return str(name) if name else None

    @property
    def is_first_half(self) -> bool:
        return self.minute <= HALF_TIME_MINUTE

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> MatchEvent:
        """
        Build an event from a feed payload.

        Accepts camelCase (teamId, playerId, matchId) and snake_case keys.
        A missing id is generated, a missing type becomes "other".

        Raises:
            ValueError: If the team id is missing or the minute is invalid.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Event payload must be a mapping, got {type(payload).__name__}")

        team_id = _pick(payload, "teamId", "team_id")
        if team_id is None or str(team_id) == "":
            raise ValueError(f"Event {payload.get('id', '?')} has no team id")

        data = payload.get("data")
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError(f"Event data must be a mapping, got {type(data).__name__}")

        event_id = payload.get("id")
        player_id = _pick(payload, "playerId", "player_id")
        match_id = _pick(payload, "matchId", "match_id")

        return cls(
            id=str(event_id) if event_id is not None else uuid.uuid4().hex,
            type=str(_pick(payload, "type", "event_type") or EventType.OTHER.value),
            team_id=str(team_id),
            minute=parse_minute(payload.get("minute", 0)),
            player_id=str(player_id) if player_id not in (None, "") else None,
            data=dict(data),
            timestamp=parse_timestamp(payload.get("timestamp")),
            match_id=str(match_id) if match_id is not None else None,
            description=payload.get("description"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "type": self.type,
            "team_id": self.team_id,
            "minute": self.minute,
            "player_id": self.player_id,
            "data": dict(self.data),
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "match_id": self.match_id,
            "description": self.description,
        }


@dataclass
class MatchState:
    """Latest clock/score state of a live match."""

    match_id: str
    status: str = "scheduled"
    current_minute: int = 0
    home_score: int = 0
    away_score: int = 0
    current_period: str = "first_half"  # first_half, halftime, second_half, extra_time, penalties
    injury_time: int = 0

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> MatchState:
        match_id = _pick(payload, "matchId", "match_id")
        if match_id is None:
            raise ValueError("Match state has no match id")
        return cls(
            match_id=str(match_id),
            status=str(payload.get("status", "scheduled")),
            current_minute=parse_minute(_pick(payload, "currentMinute", "current_minute") or 0),
            home_score=int(_pick(payload, "homeScore", "home_score") or 0),
            away_score=int(_pick(payload, "awayScore", "away_score") or 0),
            current_period=str(_pick(payload, "currentPeriod", "current_period") or "first_half"),
            injury_time=int(_pick(payload, "injuryTime", "injury_time") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# Derived Views
# =============================================================================


@dataclass
class TeamStatistics:
    """Per-team counts plus the possession / pass accuracy heuristics."""

    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    corners: int = 0
    fouls: int = 0
    shots: int = 0
    shots_on_target: int = 0
    saves: int = 0
    offsides: int = 0
    throw_ins: int = 0
    free_kicks: int = 0
    penalties: int = 0
    possession: float = 50.0  # Heuristic, not measured
    passes: int = 0
    pass_accuracy: float = 70.0  # Heuristic, not measured

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MatchStatistics:
    """Home/away statistics pair."""

    home: TeamStatistics
    away: TeamStatistics

    def to_dict(self) -> dict[str, Any]:
        return {"home": self.home.to_dict(), "away": self.away.to_dict()}


@dataclass
class PlayerPerformance:
    """Per-player counters built from the event stream."""

    player_id: str
    player_name: str
    team_id: str
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    minutes_played: int = 0
    shots: int = 0
    passes: int = 0
    tackles: int = 0
    saves: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
