"""
Miscellaneous route handlers.

Endpoints:
- GET /health - health check
- GET /about - API summary
- GET /api/diagnostics - counters for events the statistics could not place
- POST /api/diagnostics/reset - clear those counters
"""

import logging
from typing import Any

from fastapi import APIRouter

from matchpulse.api.shared import __version__
from matchpulse.core.constants import KNOWN_EVENT_TYPES, TimeRange
from matchpulse.core.diagnostics import get_diagnostics, reset_diagnostics

logger = logging.getLogger(__name__)

router = APIRouter(tags=["misc"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@router.get("/about")
async def about() -> dict[str, Any]:
    """Describe the event vocabulary and time ranges the API understands."""
    return {
        "name": "MatchPulse",
        "version": __version__,
        "event_types": sorted(KNOWN_EVENT_TYPES),
        "time_ranges": [r.value for r in TimeRange],
        "notes": {
            "possession": "Heuristic from shots and passes per minute, not measured",
            "pass_accuracy": "Heuristic from goals and assists, not measured",
            "momentum": "Weighted sum of the last five events, clamped to [-10, 10]",
        },
    }


@router.get("/api/diagnostics")
async def diagnostics() -> dict[str, Any]:
    return get_diagnostics().to_dict()


@router.post("/api/diagnostics/reset")
async def diagnostics_reset() -> dict[str, str]:
    reset_diagnostics()
    logger.info("Event diagnostics reset")
    return {"status": "reset"}
