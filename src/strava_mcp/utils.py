"""
Shared utility functions for the Strava MCP server.

Date conversions, formatting and serialization helpers used by the tool modules.
"""

import dataclasses
import json
from datetime import datetime, timezone
from enum import Enum, IntEnum


def date_to_epoch(date_str: str) -> int:
    """Convert a YYYY-MM-DD string to epoch seconds at UTC midnight.

    Args:
        date_str: Date in YYYY-MM-DD format

    Returns:
        Epoch seconds (e.g. 1770768000)
    """
    day = datetime.strptime(date_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return int(day.timestamp())


def format_duration(seconds: int) -> str:
    """Format seconds into human-readable duration.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1h01m01s" or "25m30s"
    """
    if not seconds or seconds <= 0:
        return "0s"
    seconds = int(seconds)
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    if h > 0:
        return f"{h}h{m:02d}m{s:02d}s"
    if m > 0:
        return f"{m}m{s:02d}s"
    return f"{s}s"


def format_distance(meters: float) -> str:
    """Format distance in meters to human-readable string.

    Returns:
        Formatted string like "10.0 km" or "800 m"
    """
    if not meters or meters <= 0:
        return "0 m"
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{int(meters)} m"


def format_pace(speed_mps: float) -> str:
    """Format a Strava speed (meters/second) as min:sec/km.

    Returns:
        Formatted string like "5:30/km", or None for a zero speed
    """
    if not speed_mps or speed_mps <= 0:
        return None
    sec_per_km = round(1000 / speed_mps)
    return f"{sec_per_km // 60}:{sec_per_km % 60:02d}/km"


def to_dict(obj):
    """Turn a model (or list of models) into JSON-ready data without None values.

    IntEnums become lowercase names, other enums their API value.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return to_dict({f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)})
    if isinstance(obj, IntEnum):
        return obj.name.lower()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: to_dict(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, (list, tuple)):
        return [to_dict(i) for i in obj]
    return obj


def to_json(obj, not_found: str = "Not found") -> str:
    """Serialize a model result for a tool response; None becomes an error payload."""
    if obj is None:
        return json.dumps({"error": not_found}, indent=2)
    return json.dumps(to_dict(obj), indent=2)
