"""Shared fixtures for MatchPulse tests."""

import pytest

from matchpulse.core.config import reset_config
from matchpulse.core.diagnostics import reset_diagnostics
from matchpulse.core.models import MatchEvent
from matchpulse.live.session import reset_manager

HOME = "home-fc"
AWAY = "away-united"


def make_event(
    event_type: str,
    team_id: str = HOME,
    minute: int = 1,
    player_id: str | None = None,
    event_id: str | None = None,
    **data,
) -> MatchEvent:
    """Build a MatchEvent with sensible defaults for tests."""
    make_event.counter += 1
    return MatchEvent(
        id=event_id or f"evt-{make_event.counter}",
        type=event_type,
        team_id=team_id,
        minute=minute,
        player_id=player_id,
        data=data,
    )


make_event.counter = 0


@pytest.fixture(autouse=True)
def clean_globals():
    """Reset process-wide diagnostics, config and live sessions around each test."""
    reset_diagnostics()
    reset_config()
    reset_manager()
    yield
    reset_diagnostics()
    reset_config()
    reset_manager()
