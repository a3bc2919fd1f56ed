"""
In-process match event hub.

Stands in for the real-time transport: publishers push events and state
updates for a match id, subscribers receive them through callbacks. Each
subscription returns a callable that removes it.
"""

import logging
import threading
from collections.abc import Callable

from matchpulse.core.models import MatchEvent, MatchState

logger = logging.getLogger(__name__)

EventCallback = Callable[[MatchEvent], None]
StateCallback = Callable[[MatchState], None]
Unsubscribe = Callable[[], None]


class MatchEventHub:
    """Publish/subscribe keyed by match id."""

    def __init__(self) -> None:
        self._event_subscribers: dict[str, list[EventCallback]] = {}
        self._state_subscribers: dict[str, list[StateCallback]] = {}
        self._lock = threading.Lock()

    def _subscribe(self, registry: dict[str, list], match_id: str, callback: Callable) -> Unsubscribe:
        with self._lock:
            registry.setdefault(match_id, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = registry.get(match_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    registry.pop(match_id, None)

        return unsubscribe

    def subscribe_events(self, match_id: str, callback: EventCallback) -> Unsubscribe:
        """Receive every event published for match_id."""
        return self._subscribe(self._event_subscribers, match_id, callback)

    def subscribe_state(self, match_id: str, callback: StateCallback) -> Unsubscribe:
        """Receive every state update published for match_id."""
        return self._subscribe(self._state_subscribers, match_id, callback)

    def _deliver(self, registry: dict[str, list], match_id: str, payload: object) -> int:
        with self._lock:
            callbacks = list(registry.get(match_id, []))

        delivered = 0
        for callback in callbacks:
            try:
                callback(payload)
                delivered += 1
            except Exception:
                logger.exception(f"Subscriber failed for match {match_id}")
        return delivered

    def publish_event(self, match_id: str, event: MatchEvent) -> int:
        """Deliver an event; returns the number of subscribers that took it."""
        return self._deliver(self._event_subscribers, match_id, event)

    def publish_state(self, state: MatchState) -> int:
        """Deliver a state update to the subscribers of state.match_id."""
        return self._deliver(self._state_subscribers, state.match_id, state)

    def subscriber_count(self, match_id: str) -> int:
        with self._lock:
            return len(self._event_subscribers.get(match_id, [])) + len(
                self._state_subscribers.get(match_id, [])
            )


_default_hub: MatchEventHub | None = None


def get_hub() -> MatchEventHub:
    """Get or create the default hub."""
    global _default_hub
    if _default_hub is None:
        _default_hub = MatchEventHub()
    return _default_hub
