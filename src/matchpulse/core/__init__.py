"""
MatchPulse Core - Foundation modules for event handling.

This module contains the fundamental components:
- constants: Event types, selectors and heuristic constants
- models: Feed models and derived statistics views
- config: Application configuration management
- diagnostics: Counters for events the aggregators cannot place
- loader: Reading recorded event streams from disk
"""

from matchpulse.core.constants import (
    FULL_TIME_MINUTE,
    HALF_TIME_MINUTE,
    KNOWN_EVENT_TYPES,
    MOMENTUM_BOUND,
    MOMENTUM_WINDOW,
    EventType,
    TimeRange,
)
from matchpulse.core.diagnostics import EventDiagnostics, get_diagnostics, reset_diagnostics
from matchpulse.core.loader import events_from_dataframe, events_from_dicts, load_events
from matchpulse.core.models import (
    MatchEvent,
    MatchState,
    MatchStatistics,
    PlayerPerformance,
    TeamStatistics,
)

__all__ = [
    "FULL_TIME_MINUTE",
    "HALF_TIME_MINUTE",
    "KNOWN_EVENT_TYPES",
    "MOMENTUM_BOUND",
    "MOMENTUM_WINDOW",
    "EventDiagnostics",
    "EventType",
    "MatchEvent",
    "MatchState",
    "MatchStatistics",
    "PlayerPerformance",
    "TeamStatistics",
    "TimeRange",
    "events_from_dataframe",
    "events_from_dicts",
    "get_diagnostics",
    "load_events",
    "reset_diagnostics",
]
