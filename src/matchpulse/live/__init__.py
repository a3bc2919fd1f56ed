"""
MatchPulse Live - running statistics for matches in progress.

- aggregator: O(1)-per-event MatchAggregator
- hub: in-process publish/subscribe by match id
- session: LiveMatchSession and LiveMatchManager
"""

from matchpulse.live.aggregator import MatchAggregator
from matchpulse.live.hub import MatchEventHub, get_hub
from matchpulse.live.session import (
    LiveMatchManager,
    LiveMatchSession,
    get_manager,
    reset_manager,
)

__all__ = [
    "LiveMatchManager",
    "LiveMatchSession",
    "MatchAggregator",
    "MatchEventHub",
    "get_hub",
    "get_manager",
    "reset_manager",
]
