"""Display formatting for summary values.

Missing or invalid values render as ``--``.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

MISSING = "--"


def _valid(value: Any) -> bool:
    return (
        value is not None
        and not isinstance(value, bool)
        and isinstance(value, (int, float))
        and math.isfinite(value)
    )


def format_duration(seconds: float | None) -> str:
    """Seconds → ``H:MM:SS`` (or ``M:SS`` under an hour)."""
    if not _valid(seconds) or seconds < 0:
        return MISSING
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_distance(meters: float | None) -> str:
    """Meters → kilometers with two decimals."""
    if not _valid(meters) or meters < 0:
        return MISSING
    return f"{meters / 1000:.2f}"


def format_pace(speed_ms: float | None) -> str:
    """Speed in m/s → pace ``M:SS`` per km."""
    if not _valid(speed_ms) or speed_ms <= 0:
        return MISSING
    pace_min_km = 1000 / (speed_ms * 60)
    minutes = int(pace_min_km)
    seconds = round((pace_min_km - minutes) * 60)
    if seconds == 60:
        minutes, seconds = minutes + 1, 0
    return f"{minutes}:{seconds:02d}"


def format_date(value: datetime | str | None) -> str:
    if value is None or value == "":
        return MISSING
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return str(value)


def format_file_size(num_bytes: int) -> str:
    """Human-readable size, e.g. ``1.5 KB``."""
    if num_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.log(num_bytes, 1024)), len(units) - 1)
    size = round(num_bytes / 1024 ** i, 2)
    return f"{size:g} {units[i]}"


def format_value(value: Any) -> str:
    """Generic rendering for table cells."""
    if value is None:
        return MISSING
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return f"{value:.2f}" if math.isfinite(value) else MISSING
    if isinstance(value, datetime):
        return format_date(value)
    return str(value)


def format_key(key: str) -> str:
    """Field name → label: ``avg_heart_rate`` / ``avgHeartRate`` → ``Avg Heart Rate``."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", key).replace("_", " ")
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())
