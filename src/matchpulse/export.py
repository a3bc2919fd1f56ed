"""
Export Functionality for MatchPulse

Builds a match report from an event list and writes it out:
- JSON (complete report)
- CSV (team statistics side by side, or one row per player)
"""

import csv
import json
import logging
from collections.abc import Sequence
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any

from matchpulse.core.config import ExportConfig
from matchpulse.core.constants import KNOWN_EVENT_TYPES, TimeRange
from matchpulse.core.models import MatchEvent
from matchpulse.domains.momentum import compute_momentum, momentum_indicator
from matchpulse.domains.player_performance import (
    calculate_player_rating,
    compute_player_performance,
)
from matchpulse.domains.team_stats import compute_team_statistics
from matchpulse.domains.timeline import filter_events_by_time_range, parse_time_range

logger = logging.getLogger(__name__)


# ============================================================================
# Report Building
# ============================================================================


def build_match_report(
    events: Sequence[MatchEvent],
    home_team_id: str,
    away_team_id: str,
    current_minute: int = 0,
    time_range: str | TimeRange = TimeRange.ALL,
) -> dict[str, Any]:
    """
    Compute every statistics view for a match into one plain dictionary.

    Momentum always uses the full event list; statistics and players use
    the selected time range.
    """
    selected = parse_time_range(time_range)
    filtered = filter_events_by_time_range(events, selected)

    statistics = compute_team_statistics(filtered, home_team_id, away_team_id, current_minute)
    players = compute_player_performance(filtered, current_minute)
    momentum = compute_momentum(events, home_team_id)
    indicator = momentum_indicator(momentum)
    unrecognized = sorted({e.type for e in filtered if e.type not in KNOWN_EVENT_TYPES})

    return {
        "match": {
            "home_team_id": home_team_id,
            "away_team_id": away_team_id,
            "current_minute": current_minute,
            "time_range": selected.value,
            "event_count": len(filtered),
            "score": f"{statistics.home.goals} - {statistics.away.goals}",
        },
        "statistics": statistics.to_dict(),
        "players": [
            {**player.to_dict(), "rating": round(calculate_player_rating(player), 2)}
            for player in players
        ],
        "momentum": {
            "value": momentum,
            "variant": indicator.variant,
            "text": indicator.text,
        },
        "unrecognized_event_types": unrecognized,
    }


# ============================================================================
# JSON Export
# ============================================================================


def export_to_json(
    report: dict[str, Any],
    output_path: Path | None = None,
    indent: int = 2,
    include_metadata: bool = True,
) -> str:
    """
    Export a match report to JSON.

    Args:
        report: Report from build_match_report
        output_path: Optional path to write the file
        indent: JSON indentation level
        include_metadata: Whether to include export metadata

    Returns:
        JSON string
    """
    export_data = report
    if include_metadata:
        export_data = {
            "_metadata": {
                "exported_at": datetime.now().isoformat(),
                "format": "matchpulse_json",
                "version": "1.0",
            },
            **report,
        }

    json_str = json.dumps(export_data, indent=indent, default=str)

    if output_path:
        output_path.write_text(json_str)
        logger.info(f"Exported JSON to: {output_path}")

    return json_str


# ============================================================================
# CSV Export
# ============================================================================


def _write_csv(rows: list[dict[str, Any]], delimiter: str) -> str:
    if not rows:
        return ""
    output = StringIO()
    writer = csv.DictWriter(output, fieldnames=list(rows[0].keys()), delimiter=delimiter)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return output.getvalue()


def export_team_statistics_csv(
    report: dict[str, Any], output_path: Path | None = None, delimiter: str = ","
) -> str:
    """One row per statistic with home and away columns."""
    home = report["statistics"]["home"]
    away = report["statistics"]["away"]
    rows = [{"statistic": key, "home": home[key], "away": away[key]} for key in home]

    csv_str = _write_csv(rows, delimiter)
    if output_path:
        output_path.write_text(csv_str)
        logger.info(f"Exported team statistics CSV to: {output_path}")
    return csv_str


def export_players_csv(
    report: dict[str, Any], output_path: Path | None = None, delimiter: str = ","
) -> str:
    """One row per player."""
    csv_str = _write_csv(report["players"], delimiter)
    if output_path:
        output_path.write_text(csv_str)
        logger.info(f"Exported player CSV to: {output_path}")
    return csv_str


def export_report(
    report: dict[str, Any],
    output_path: Path,
    format: str | None = None,
    config: ExportConfig | None = None,
) -> None:
    """
    Write a report in the format given, else detected from the extension.
    A path without an extension uses the configured default format.

    CSV output writes team statistics to the path and players to a sibling
    file with a ``_players`` suffix.
    """
    config = config or ExportConfig()
    if format is None:
        format = output_path.suffix.lstrip(".").lower() or config.default_format

    if format == "json":
        export_to_json(
            report, output_path, indent=config.json_indent, include_metadata=config.include_metadata
        )
    elif format == "csv":
        export_team_statistics_csv(report, output_path, delimiter=config.csv_delimiter)
        players_path = output_path.with_name(f"{output_path.stem}_players{output_path.suffix}")
        export_players_csv(report, players_path, delimiter=config.csv_delimiter)
    else:
        raise ValueError(f"Unsupported export format: {format}")
