"""
MatchPulse Web API

FastAPI application for live football match statistics.

The app is assembled here from route modules:
- routes_statistics: stateless statistics over a posted event list
- routes_live: live sessions fed through the event hub
- routes_misc: health, about, diagnostics
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from matchpulse.api.shared import __version__

logger = logging.getLogger(__name__)

# =============================================================================
# FastAPI App Creation
# =============================================================================

app = FastAPI(
    title="MatchPulse API",
    description=(
        "Live football match statistics - team counts, heuristic possession "
        "and pass accuracy, player performance and momentum"
    ),
    version=__version__,
)

# =============================================================================
# CORS Configuration
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def no_cache_middleware(request: Request, call_next):
    """Disable client caching for API responses."""
    response = await call_next(request)
    if "/api/" in request.url.path:
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
        response.headers["Pragma"] = "no-cache"
    return response


# =============================================================================
# Global Exception Handler
# =============================================================================


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred. Please try again later.",
        },
    )


# =============================================================================
# Include Route Modules
# =============================================================================

from matchpulse.api.routes_live import router as live_router  # noqa: E402
from matchpulse.api.routes_misc import router as misc_router  # noqa: E402
from matchpulse.api.routes_statistics import router as statistics_router  # noqa: E402

app.include_router(statistics_router)
app.include_router(live_router)
app.include_router(misc_router)
