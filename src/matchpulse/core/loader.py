"""
Event loading.

Reads recorded match event streams from JSON, JSON Lines or CSV files into
MatchEvent objects. CSV columns prefixed with ``data.`` (or ``data_``) are
folded into the event's data payload.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from matchpulse.core.models import MatchEvent

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".jsonl", ".ndjson", ".csv")
DATA_COLUMN_PREFIXES = ("data.", "data_")


def events_from_dicts(payloads: Iterable[dict[str, Any]]) -> list[MatchEvent]:
    """Convert feed payloads to events, preserving order."""
    events = []
    for index, payload in enumerate(payloads):
        try:
            events.append(MatchEvent.from_dict(payload))
        except ValueError as e:
            raise ValueError(f"Invalid event at position {index}: {e}") from e
    return events


def _coerce_scalar(value: Any) -> Any:
    """Turn CSV "true"/"false" text into bools."""
    if not isinstance(value, str):
        return value
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    return value


def events_from_dataframe(df: pd.DataFrame) -> list[MatchEvent]:
    """
    Convert a DataFrame with one row per event into MatchEvent objects.

    Missing cells become None; ``data.*`` columns populate the data payload.
    """
    if df.empty:
        return []

    data_columns = [c for c in df.columns if str(c).startswith(DATA_COLUMN_PREFIXES)]
    clean = df.astype(object).where(pd.notna(df), None)

    payloads = []
    for row in clean.to_dict(orient="records"):
        data = {}
        for column in data_columns:
            value = row.pop(column)
            if value is not None:
                data[str(column)[len("data.") :]] = _coerce_scalar(value)
        if data:
            row["data"] = data
        payloads.append(row)

    return events_from_dicts(payloads)


def _read_json(path: Path) -> list[dict[str, Any]]:
    with open(path) as f:
        content = json.load(f)
    if isinstance(content, dict):
        content = content.get("events", [])
    if not isinstance(content, list):
        raise ValueError(f"Expected a list of events in {path}")
    return content


def _read_jsonl(path: Path) -> list[dict[str, Any]]:
    payloads = []
    with open(path) as f:
        for line_num, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                payloads.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num} of {path}: {e}") from e
    return payloads


def load_events(path: Path) -> list[MatchEvent]:
    """
    Load a recorded event stream from disk.

    Args:
        path: .json (list or {"events": [...]}), .jsonl/.ndjson or .csv file

    Returns:
        Events in file order

    Raises:
        ValueError: For unsupported formats or malformed events
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        events = events_from_dicts(_read_json(path))
    elif suffix in (".jsonl", ".ndjson"):
        events = events_from_dicts(_read_jsonl(path))
    elif suffix == ".csv":
        events = events_from_dataframe(pd.read_csv(path, dtype=str))
    else:
        raise ValueError(
            f"Unsupported event file format: {suffix} (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )

    logger.info(f"Loaded {len(events)} events from {path}")
    return events
