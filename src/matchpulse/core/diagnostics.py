"""
Event diagnostics.

The aggregators accept unknown event types and stray team ids without
complaint. This module counts what they let through so the loss is visible.
"""

import logging
import threading
from collections import Counter
from typing import Any

logger = logging.getLogger(__name__)


class EventDiagnostics:
    """Thread-safe counters for events the aggregators could not place."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._unrecognized: Counter[str] = Counter()
        self._stray_teams: Counter[str] = Counter()
        self.events_seen = 0

    def record_event(self) -> None:
        with self._lock:
            self.events_seen += 1

    def record_unrecognized_type(self, event_type: str) -> None:
        """Count an event type outside the known enumeration."""
        with self._lock:
            first_time = event_type not in self._unrecognized
            self._unrecognized[event_type] += 1
        if first_time:
            logger.warning(f"Unrecognized event type ignored by statistics: {event_type!r}")
        else:
            logger.debug(f"Unrecognized event type: {event_type!r}")

    def record_stray_team(self, team_id: str) -> None:
        """Count an event whose team id matches neither side."""
        with self._lock:
            self._stray_teams[team_id] += 1
        logger.debug(f"Event for unknown team {team_id!r} excluded from team statistics")

    @property
    def unrecognized_types(self) -> dict[str, int]:
        with self._lock:
            return dict(self._unrecognized)

    @property
    def stray_teams(self) -> dict[str, int]:
        with self._lock:
            return dict(self._stray_teams)

    @property
    def total_unrecognized(self) -> int:
        with self._lock:
            return sum(self._unrecognized.values())

    def reset(self) -> None:
        with self._lock:
            self._unrecognized.clear()
            self._stray_teams.clear()
            self.events_seen = 0

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            return {
                "events_seen": self.events_seen,
                "unrecognized_types": dict(self._unrecognized),
                "unrecognized_total": sum(self._unrecognized.values()),
                "stray_teams": dict(self._stray_teams),
            }


_default_diagnostics: EventDiagnostics | None = None


def get_diagnostics() -> EventDiagnostics:
    """Get the process-wide diagnostics instance."""
    global _default_diagnostics
    if _default_diagnostics is None:
        _default_diagnostics = EventDiagnostics()
    return _default_diagnostics


def reset_diagnostics() -> None:
    """Clear the process-wide counters."""
    get_diagnostics().reset()
