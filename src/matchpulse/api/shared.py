"""
Shared utilities for the MatchPulse API.

Contains input validation, request models and the event conversion helper
used across all route modules.
"""

import logging
import re
from typing import Any

from fastapi import HTTPException
from pydantic import BaseModel, Field

from matchpulse import __version__
from matchpulse.core.constants import TimeRange
from matchpulse.core.loader import events_from_dicts
from matchpulse.core.models import MatchEvent
from matchpulse.domains.timeline import parse_time_range

logger = logging.getLogger(__name__)

__all__ = [
    "__version__",
    "EventBatchRequest",
    "LiveSessionRequest",
    "MatchRequest",
    "MomentumRequest",
    "StateUpdateRequest",
    "parse_events",
    "validate_match_id",
    "validate_time_range",
]

# =============================================================================
# Input Validation
# =============================================================================

MATCH_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_.:-]{1,64}$")


def validate_match_id(match_id: str) -> str:
    """Validate match_id format. Raises HTTPException if invalid."""
    if not match_id or not MATCH_ID_PATTERN.match(match_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid match_id: must be 1-64 characters of letters, digits, '_', '.', ':' or '-'",
        )
    return match_id


def validate_time_range(time_range: str) -> TimeRange:
    """Parse a time range. Raises HTTPException if unknown."""
    try:
        return parse_time_range(time_range)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def parse_events(payloads: list[dict[str, Any]]) -> list[MatchEvent]:
    """Convert raw feed payloads. Raises HTTPException on the first bad event."""
    try:
        return events_from_dicts(payloads)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


# =============================================================================
# Request Models
# =============================================================================


class MatchRequest(BaseModel):
    events: list[dict[str, Any]] = Field(..., description="Match events in arrival order")
    home_team_id: str = Field(..., min_length=1, description="Home team identifier")
    away_team_id: str = Field(..., min_length=1, description="Away team identifier")
    current_minute: int = Field(0, ge=0, description="Current match minute")
    time_range: str = Field("all", description="all, first_half or second_half")


class MomentumRequest(BaseModel):
    events: list[dict[str, Any]] = Field(..., description="Match events in arrival order")
    home_team_id: str = Field(..., min_length=1, description="Home team identifier")


class LiveSessionRequest(BaseModel):
    match_id: str = Field(..., description="Match identifier")
    home_team_id: str = Field(..., min_length=1, description="Home team identifier")
    away_team_id: str = Field(..., min_length=1, description="Away team identifier")


class EventBatchRequest(BaseModel):
    events: list[dict[str, Any]] = Field(..., description="Events to append, in order")


class StateUpdateRequest(BaseModel):
    status: str = Field("live", description="scheduled, live, halftime, finished, ...")
    current_minute: int = Field(0, ge=0, description="Current match minute")
    home_score: int = Field(0, ge=0)
    away_score: int = Field(0, ge=0)
    current_period: str = Field("first_half", description="Current period of play")
    injury_time: int = Field(0, ge=0)
