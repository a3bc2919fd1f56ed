"""
Time-range filtering for match events.

Splits events at the half-time minute. The boundary is fixed: minute 45
belongs to the first half and minute 46 is always second half, even if it
was first-half stoppage time.
"""

from __future__ import annotations

from collections.abc import Iterable

from matchpulse.core.constants import HALF_TIME_MINUTE, TimeRange
from matchpulse.core.models import MatchEvent


def parse_time_range(value: str | TimeRange) -> TimeRange:
    """Raises ValueError for an unknown selector."""
    try:
        return TimeRange(value)
    except ValueError:
        valid = ", ".join(t.value for t in TimeRange)
        raise ValueError(f"Invalid time range: {value!r} (expected one of {valid})") from None


def filter_events_by_time_range(
    events: Iterable[MatchEvent], time_range: str | TimeRange = TimeRange.ALL
) -> list[MatchEvent]:
    """Return the events falling into the selected half, in original order."""
    selected = parse_time_range(time_range)

    if selected == TimeRange.ALL:
        return list(events)
    if selected == TimeRange.FIRST_HALF:
        return [e for e in events if e.minute <= HALF_TIME_MINUTE]
    return [e for e in events if e.minute > HALF_TIME_MINUTE]


def split_halves(events: Iterable[MatchEvent]) -> tuple[list[MatchEvent], list[MatchEvent]]:
    """Partition events into (first_half, second_half)."""
    first: list[MatchEvent] = []
    second: list[MatchEvent] = []
    for event in events:
        (first if event.minute <= HALF_TIME_MINUTE else second).append(event)
    return first, second
