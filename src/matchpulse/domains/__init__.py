"""
MatchPulse Domains - statistics computed from match events.

- team_stats: home/away TeamStatistics
- player_performance: per-player counters and rating
- momentum: recent-dominance signal
- timeline: half filtering
"""

from matchpulse.domains.momentum import (
    MomentumIndicator,
    compute_momentum,
    momentum_indicator,
)
from matchpulse.domains.player_performance import (
    calculate_player_rating,
    compute_player_performance,
    top_performers,
)
from matchpulse.domains.team_stats import (
    calculate_pass_accuracy,
    calculate_possession,
    compute_team_statistics,
)
from matchpulse.domains.timeline import (
    filter_events_by_time_range,
    parse_time_range,
    split_halves,
)

__all__ = [
    "MomentumIndicator",
    "calculate_pass_accuracy",
    "calculate_player_rating",
    "calculate_possession",
    "compute_momentum",
    "compute_player_performance",
    "compute_team_statistics",
    "filter_events_by_time_range",
    "momentum_indicator",
    "parse_time_range",
    "split_halves",
    "top_performers",
]
