"""
MatchPulse - Live Football Match Statistics

Folds a live stream of match events (goals, cards, shots, passes, ...) into
team statistics, player performance and a bounded momentum signal.

Usage:
    from matchpulse import MatchEvent, compute_team_statistics, compute_momentum

    events = [MatchEvent.from_dict(payload) for payload in feed]
    stats = compute_team_statistics(events, "home-id", "away-id", current_minute=60)
    print(stats.home.goals, stats.away.goals, compute_momentum(events, "home-id"))
"""

__version__ = "0.1.0"
__author__ = "MatchPulse Contributors"

_LAZY_IMPORTS = {
    "MatchEvent": "matchpulse.core.models",
    "MatchState": "matchpulse.core.models",
    "TeamStatistics": "matchpulse.core.models",
    "PlayerPerformance": "matchpulse.core.models",
    "MatchStatistics": "matchpulse.core.models",
    "EventType": "matchpulse.core.constants",
    "TimeRange": "matchpulse.core.constants",
    "load_events": "matchpulse.core.loader",
    "compute_team_statistics": "matchpulse.domains.team_stats",
    "compute_player_performance": "matchpulse.domains.player_performance",
    "compute_momentum": "matchpulse.domains.momentum",
    "filter_events_by_time_range": "matchpulse.domains.timeline",
    "MatchAggregator": "matchpulse.live.aggregator",
    "LiveMatchSession": "matchpulse.live.session",
    "MatchEventHub": "matchpulse.live.hub",
}


def __getattr__(name):
    """Lazy import so `import matchpulse` stays light."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'matchpulse' has no attribute '{name}'")
    import importlib

    return getattr(importlib.import_module(module_name), name)


__all__ = ["__version__", *_LAZY_IMPORTS]
