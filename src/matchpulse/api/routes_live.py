"""
Live session route handlers.

Endpoints:
- POST /api/live/sessions - create and start a session
- GET /api/live/sessions - list sessions
- GET /api/live/sessions/{match_id} - statistics snapshot
- GET /api/live/sessions/{match_id}/stats - session bookkeeping
- POST /api/live/sessions/{match_id}/events - publish events to the session
- POST /api/live/sessions/{match_id}/state - publish a clock/score update
- DELETE /api/live/sessions/{match_id} - end a session
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from matchpulse.api.shared import (
    EventBatchRequest,
    LiveSessionRequest,
    StateUpdateRequest,
    parse_events,
    validate_match_id,
    validate_time_range,
)
from matchpulse.core.models import MatchState
from matchpulse.live.session import LiveMatchSession, get_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


def _require_session(match_id: str) -> LiveMatchSession:
    validate_match_id(match_id)
    session = get_manager().get_session(match_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"No live session for match {match_id}")
    return session


# NOTE: Static path routes must come BEFORE parameterized routes to avoid conflicts


@router.post("/api/live/sessions", status_code=201)
async def create_session(request: LiveSessionRequest) -> dict[str, Any]:
    """Create a live session bound to the default hub."""
    validate_match_id(request.match_id)
    try:
        session = get_manager().create_session(
            request.match_id, request.home_team_id, request.away_team_id
        )
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return session.get_session_stats()


@router.get("/api/live/sessions")
async def list_sessions() -> dict[str, Any]:
    sessions = get_manager().list_sessions()
    return {"sessions": sessions, "total": len(sessions)}


@router.get("/api/live/sessions/{match_id}")
async def session_snapshot(
    match_id: str,
    time_range: str | None = Query(None, description="all, first_half or second_half"),
) -> dict[str, Any]:
    """Current statistics, players and momentum of a live match."""
    session = _require_session(match_id)
    if time_range is not None:
        validate_time_range(time_range)
    return session.snapshot(time_range)


@router.get("/api/live/sessions/{match_id}/stats")
async def session_stats(match_id: str) -> dict[str, Any]:
    return _require_session(match_id).get_session_stats()


@router.post("/api/live/sessions/{match_id}/events")
async def publish_events(match_id: str, request: EventBatchRequest) -> dict[str, Any]:
    """
    Publish events for a match through the hub.

    Events carrying a different match id are not accepted by the session
    and are reported back as rejected.
    """
    session = _require_session(match_id)
    events = parse_events(request.events)

    hub = get_manager().hub
    rejected_before = session.rejected_events
    for event in events:
        hub.publish_event(match_id, event)

    return {
        "received": len(events),
        "rejected": session.rejected_events - rejected_before,
        "event_count": session.aggregator.event_count,
        "momentum": session.momentum(),
    }


@router.post("/api/live/sessions/{match_id}/state")
async def publish_state(match_id: str, request: StateUpdateRequest) -> dict[str, Any]:
    session = _require_session(match_id)
    state = MatchState(match_id=match_id, **request.model_dump())
    get_manager().hub.publish_state(state)
    return session.state.to_dict()


@router.delete("/api/live/sessions/{match_id}")
async def end_session(match_id: str) -> dict[str, Any]:
    """End a session and return its final bookkeeping."""
    validate_match_id(match_id)
    stats = get_manager().end_session(match_id)
    if stats is None:
        raise HTTPException(status_code=404, detail=f"No live session for match {match_id}")
    return stats
