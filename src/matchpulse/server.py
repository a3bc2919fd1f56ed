"""
MatchPulse Web Server Entry Point

Provides the `matchpulse-web` command to start the FastAPI server.

Usage:
    matchpulse-web                    # Start on default port 7860
    matchpulse-web --port 8000        # Start on custom port
    matchpulse-web --host 127.0.0.1   # Bind to localhost only
    matchpulse-web --reload           # Enable auto-reload for development
"""

import argparse
import logging

import uvicorn

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the MatchPulse web server."""
    parser = argparse.ArgumentParser(
        description="MatchPulse Live Match Statistics - Web Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    matchpulse-web                     Start server on http://0.0.0.0:7860
    matchpulse-web --port 8000         Start on port 8000
    matchpulse-web --host 127.0.0.1    Bind to localhost only
    matchpulse-web --reload            Enable auto-reload (development)
        """,
    )
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=7860, help="Port to bind to (default: 7860)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level (default: info)",
    )

    args = parser.parse_args()

    logger.info("Starting MatchPulse web server on http://%s:%s", args.host, args.port)
    logger.info("Press Ctrl+C to stop")

    uvicorn.run(
        "matchpulse.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,  # live sessions are held in process memory
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
