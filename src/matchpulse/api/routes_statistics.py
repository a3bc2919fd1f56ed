"""
Stateless statistics route handlers.

Endpoints:
- POST /api/statistics - home/away team statistics for an event list
- POST /api/players - player performance for an event list
- POST /api/momentum - momentum of the latest events
- POST /api/report - full match report (statistics, players, momentum)
"""

import logging
from typing import Any

from fastapi import APIRouter, Query

from matchpulse.api.shared import (
    MatchRequest,
    MomentumRequest,
    parse_events,
    validate_time_range,
)
from matchpulse.core.config import get_config
from matchpulse.core.diagnostics import get_diagnostics
from matchpulse.domains.momentum import compute_momentum, momentum_indicator
from matchpulse.domains.player_performance import (
    calculate_player_rating,
    compute_player_performance,
    top_performers,
)
from matchpulse.domains.team_stats import compute_team_statistics
from matchpulse.domains.timeline import filter_events_by_time_range
from matchpulse.export import build_match_report

logger = logging.getLogger(__name__)

router = APIRouter(tags=["statistics"])


@router.post("/api/statistics")
async def team_statistics(request: MatchRequest) -> dict[str, Any]:
    """Team statistics for both sides over the requested time range."""
    time_range = validate_time_range(request.time_range)
    events = filter_events_by_time_range(parse_events(request.events), time_range)

    stats = compute_team_statistics(
        events,
        request.home_team_id,
        request.away_team_id,
        request.current_minute,
        get_diagnostics(),
    )
    logger.debug(f"Computed statistics over {len(events)} events ({time_range.value})")
    return {"time_range": time_range.value, "event_count": len(events), **stats.to_dict()}


@router.post("/api/players")
async def player_performance(
    request: MatchRequest,
    top: int | None = Query(
        None, ge=0, le=100, description="Only return the N highest rated players (0 = all)"
    ),
) -> dict[str, Any]:
    """
    Per-player performance.

    top defaults to statistics.top_performers; 0 returns every player in
    first-appearance order.
    """
    time_range = validate_time_range(request.time_range)
    events = filter_events_by_time_range(parse_events(request.events), time_range)

    players = compute_player_performance(events, request.current_minute)
    if top is None:
        top = get_config().statistics.top_performers
    if top:
        players = top_performers(players, top)

    return {
        "time_range": time_range.value,
        "players": [
            {**p.to_dict(), "rating": round(calculate_player_rating(p), 2)} for p in players
        ],
    }


@router.post("/api/momentum")
async def momentum(request: MomentumRequest) -> dict[str, Any]:
    """Momentum in [-10, 10] from the last five events."""
    value = compute_momentum(parse_events(request.events), request.home_team_id)
    indicator = momentum_indicator(value)
    return {"momentum": value, "variant": indicator.variant, "text": indicator.text}


@router.post("/api/report")
async def match_report(request: MatchRequest) -> dict[str, Any]:
    validate_time_range(request.time_range)
    return build_match_report(
        parse_events(request.events),
        request.home_team_id,
        request.away_team_id,
        request.current_minute,
        request.time_range,
    )
