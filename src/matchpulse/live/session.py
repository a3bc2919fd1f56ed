"""
Live match sessions.

A LiveMatchSession owns the event list and latest MatchState for one match
and keeps a MatchAggregator current as events arrive. The session owner
controls the lifecycle: start() subscribes to the hub, stop() unsubscribes.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Callable
from datetime import datetime
from typing import Any

from matchpulse.core.config import LiveConfig, get_config
from matchpulse.core.constants import TimeRange
from matchpulse.core.diagnostics import EventDiagnostics, get_diagnostics
from matchpulse.core.models import MatchEvent, MatchState, MatchStatistics, PlayerPerformance
from matchpulse.domains.momentum import momentum_indicator
from matchpulse.domains.player_performance import compute_player_performance
from matchpulse.domains.team_stats import compute_team_statistics
from matchpulse.domains.timeline import filter_events_by_time_range, parse_time_range
from matchpulse.live.aggregator import MatchAggregator
from matchpulse.live.hub import MatchEventHub, Unsubscribe

logger = logging.getLogger(__name__)


class LiveMatchSession:
    """
    Statistics for one live match.

    Events are counted in arrival order. Duplicate ids are logged but still
    counted; deduplication belongs to the transport.
    """

    def __init__(
        self,
        match_id: str,
        home_team_id: str,
        away_team_id: str,
        config: LiveConfig | None = None,
        diagnostics: EventDiagnostics | None = None,
    ):
        self.match_id = match_id
        self.home_team_id = home_team_id
        self.away_team_id = away_team_id
        self.config = config or LiveConfig()
        self.diagnostics = diagnostics or get_diagnostics()

        self.events: list[MatchEvent] = []
        self.state = MatchState(match_id=match_id)
        self.aggregator = MatchAggregator(home_team_id, away_team_id, self.diagnostics)

        self.event_callbacks: list[Callable[[LiveMatchSession, MatchEvent], None]] = []
        self._unsubscribers: list[Unsubscribe] = []
        # Ids of the retained events; with a history limit, duplicates are
        # detected within the retained window only
        self._retained_ids: Counter[str] = Counter()
        self._lock = threading.RLock()

        self.started_at = datetime.now()
        self.duplicate_events = 0
        self.rejected_events = 0
        self.active = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, hub: MatchEventHub | None = None) -> None:
        """Activate the session and, if a hub is given, subscribe to it."""
        self.active = True
        self.started_at = datetime.now()
        if hub is not None:
            self._unsubscribers.append(hub.subscribe_events(self.match_id, self.ingest_event))
            self._unsubscribers.append(hub.subscribe_state(self.match_id, self.update_state))
            logger.info(f"Session {self.match_id} subscribed to live feed")

    def stop(self) -> None:
        """Unsubscribe from the hub and stop accepting events."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.active = False
        logger.info(f"Session {self.match_id} stopped after {self.aggregator.event_count} events")

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest_event(self, event: MatchEvent) -> bool:
        """
        Append an event and update the running statistics.

        Returns:
            False if the session is inactive or the event belongs to another match
        """
        if not self.active:
            logger.debug(f"Session {self.match_id} inactive, dropping event {event.id}")
            return False

        if event.match_id is not None and event.match_id != self.match_id:
            self.rejected_events += 1
            logger.warning(
                f"Event {event.id} for match {event.match_id} sent to session {self.match_id}"
            )
            return False

        with self._lock:
            if event.id in self._retained_ids:
                self.duplicate_events += 1
                if self.config.warn_on_duplicate_ids:
                    logger.warning(f"Duplicate event id {event.id} in match {self.match_id}")
            self._retained_ids[event.id] += 1

            self.events.append(event)
            limit = self.config.event_history_limit
            overflow = len(self.events) - limit
            if limit and overflow > 0:
                for dropped in self.events[:overflow]:
                    self._retained_ids[dropped.id] -= 1
                    if not self._retained_ids[dropped.id]:
                        del self._retained_ids[dropped.id]
                del self.events[:overflow]

            self.aggregator.add(event)
            callbacks = list(self.event_callbacks)

        for callback in callbacks:
            try:
                callback(self, event)
            except Exception:
                logger.exception(f"Event callback failed for match {self.match_id}")

        return True

    def update_state(self, state: MatchState) -> None:
        if state.match_id != self.match_id:
            logger.warning(f"State for match {state.match_id} sent to session {self.match_id}")
            return
        with self._lock:
            self.state = state

    def register_callback(self, callback: Callable[[LiveMatchSession, MatchEvent], None]) -> None:
        """Call callback(session, event) after each accepted event."""
        self.event_callbacks.append(callback)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_minute(self) -> int:
        return self.state.current_minute

    def filtered_events(self, time_range: str | TimeRange = TimeRange.ALL) -> list[MatchEvent]:
        with self._lock:
            return filter_events_by_time_range(list(self.events), time_range)

    def team_statistics(self, time_range: str | TimeRange = TimeRange.ALL) -> MatchStatistics:
        """Home/away statistics; the full match comes from the running totals."""
        selected = parse_time_range(time_range)
        with self._lock:
            if selected == TimeRange.ALL:
                return self.aggregator.team_statistics(self.current_minute)
            events = filter_events_by_time_range(self.events, selected)
        return compute_team_statistics(
            events, self.home_team_id, self.away_team_id, self.current_minute
        )

    def player_performance(
        self, time_range: str | TimeRange = TimeRange.ALL
    ) -> list[PlayerPerformance]:
        selected = parse_time_range(time_range)
        with self._lock:
            if selected == TimeRange.ALL:
                return self.aggregator.player_performance(self.current_minute)
            events = filter_events_by_time_range(self.events, selected)
        return compute_player_performance(events, self.current_minute)

    def momentum(self) -> int:
        with self._lock:
            return self.aggregator.momentum()

    def snapshot(self, time_range: str | TimeRange | None = None) -> dict[str, Any]:
        """Everything a statistics view needs, as plain data."""
        time_range = time_range or self.config.default_time_range
        momentum = self.momentum()
        indicator = momentum_indicator(momentum)
        return {
            "match_id": self.match_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "time_range": parse_time_range(time_range).value,
            "state": self.state.to_dict(),
            "statistics": self.team_statistics(time_range).to_dict(),
            "players": [p.to_dict() for p in self.player_performance(time_range)],
            "momentum": momentum,
            "momentum_indicator": {"variant": indicator.variant, "text": indicator.text},
            "event_count": self.aggregator.event_count,
        }

    def get_session_stats(self) -> dict[str, Any]:
        """Get session bookkeeping."""
        duration = (datetime.now() - self.started_at).total_seconds()
        return {
            "match_id": self.match_id,
            "active": self.active,
            "started_at": self.started_at.isoformat(),
            "duration_seconds": round(duration, 1),
            "events_received": self.aggregator.event_count,
            "events_retained": len(self.events),
            "duplicate_events": self.duplicate_events,
            "rejected_events": self.rejected_events,
            "current_minute": self.current_minute,
            "score": {"home": self.state.home_score, "away": self.state.away_score},
        }


class LiveMatchManager:
    """Creates and tracks live sessions by match id."""

    def __init__(self, hub: MatchEventHub | None = None, config: LiveConfig | None = None):
        self.hub = hub
        self.config = config
        self.sessions: dict[str, LiveMatchSession] = {}
        self._lock = threading.Lock()

    def create_session(
        self, match_id: str, home_team_id: str, away_team_id: str
    ) -> LiveMatchSession:
        """Create and start a session. Raises ValueError if one already exists."""
        with self._lock:
            if match_id in self.sessions:
                raise ValueError(f"Session already exists for match {match_id}")
            session = LiveMatchSession(
                match_id, home_team_id, away_team_id, config=self.config
            )
            self.sessions[match_id] = session
        session.start(self.hub)
        logger.info(f"Created live session for match {match_id}")
        return session

    def get_session(self, match_id: str) -> LiveMatchSession | None:
        return self.sessions.get(match_id)

    def end_session(self, match_id: str) -> dict[str, Any] | None:
        """End a session and return its stats."""
        with self._lock:
            session = self.sessions.pop(match_id, None)
        if session:
            session.stop()
            return session.get_session_stats()
        return None

    def list_sessions(self) -> list[dict[str, Any]]:
        return [
            {
                "match_id": s.match_id,
                "active": s.active,
                "home_team_id": s.home_team_id,
                "away_team_id": s.away_team_id,
                "events_received": s.aggregator.event_count,
            }
            for s in self.sessions.values()
        ]


_default_manager: LiveMatchManager | None = None


def get_manager() -> LiveMatchManager:
    """Get or create the default session manager (default hub, global live config)."""
    global _default_manager
    if _default_manager is None:
        from matchpulse.live.hub import get_hub

        _default_manager = LiveMatchManager(hub=get_hub(), config=get_config().live)
    return _default_manager


def reset_manager() -> None:
    """Stop every default session and drop the default manager."""
    global _default_manager
    if _default_manager is not None:
        for match_id in list(_default_manager.sessions):
            _default_manager.end_session(match_id)
    _default_manager = None
