"""Activity summary extraction.

Flattens normalized message groups into a single :class:`ActivitySummary`.
Each metric family prefers the first session message's aggregate and falls
back to a value recomputed from the per-second ``record`` messages.  Every
field is optional: ``None`` means the file does not let us compute it.
"""

from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Callable, Sequence

import numpy as np

from fitscope.analytics.hrv import HRVMetrics, compute_hrv
from fitscope.messages import MessageGroups


# Per-record respiration field names, in preference order.  Devices disagree
# on which one they fill.
RESPIRATION_ALIASES = (
    "respiration_rate",
    "enhanced_respiration_rate",
    "respiratory_rate",
    "breaths_per_minute",
)


@dataclass(frozen=True)
class ActivitySummary:
    """Flattened activity metrics."""

    # File info
    file_type: Any = None
    manufacturer: Any = None
    product: Any = None
    serial_number: Any = None
    time_created: Any = None

    # Basic metrics
    sport: Any = None
    sub_sport: Any = None
    start_time: datetime | Any = None
    total_elapsed_time: float | None = None  # s
    total_timer_time: float | None = None  # s, moving time
    total_distance: float | None = None  # m
    total_calories: float | None = None

    # Heart rate (bpm)
    avg_heart_rate: float | None = None
    max_heart_rate: float | None = None
    min_heart_rate: float | None = None

    # Speed (m/s) and pace (min/km)
    avg_speed: float | None = None
    max_speed: float | None = None
    avg_pace: float | None = None

    # Cadence
    avg_cadence: float | None = None
    max_cadence: float | None = None

    # Power (W)
    avg_power: float | None = None
    max_power: float | None = None
    normalized_power: float | None = None
    training_stress_score: float | None = None
    intensity_factor: float | None = None
    threshold_power: float | None = None

    # Altitude (m)
    total_ascent: float | None = None
    total_descent: float | None = None
    avg_altitude: float | None = None
    max_altitude: float | None = None
    min_altitude: float | None = None

    # Respiration (breaths/min)
    avg_respiration_rate: float | None = None
    max_respiration_rate: float | None = None
    min_respiration_rate: float | None = None
    respiration_record_count: int | None = None

    # Temperature (C)
    avg_temperature: float | None = None
    max_temperature: float | None = None
    min_temperature: float | None = None

    # Training effect
    training_effect: float | None = None
    anaerobic_training_effect: float | None = None

    # Swimming
    total_strokes: float | None = None
    avg_stroke_distance: float | None = None
    swim_stroke: Any = None
    pool_length: float | None = None

    # GPS (semicircles, as decoded)
    start_position_lat: float | None = None
    start_position_long: float | None = None

    # Counts
    total_records: int | None = None
    total_laps: int | None = None
    total_events: int | None = None
    total_sessions: int | None = None
    hrv_record_count: int | None = None

    hrv_analysis: HRVMetrics | None = None

    def to_dict(self, drop_absent: bool = False) -> dict[str, Any]:
        """Convert to a plain dict.

        Args:
            drop_absent: Leave out fields that are None.
        """
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and drop_absent:
                continue
            if isinstance(value, HRVMetrics):
                value = value.to_dict()
            data[f.name] = value
        return data

    def to_json(self, indent: int = 2, drop_absent: bool = True) -> str:
        """Serialize to JSON; datetimes and enum-like values become strings."""
        return json.dumps(self.to_dict(drop_absent=drop_absent), indent=indent, default=str)

    def __repr__(self) -> str:
        populated = sum(1 for f in fields(self) if getattr(self, f.name) is not None)
        return f"ActivitySummary(sport={self.sport!r}, fields={populated})"


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _number(value: Any) -> float | int | None:
    """Return *value* if it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    if not math.isfinite(value):
        return None
    return value


def _field(msg: Any, *names: str) -> Any:
    """First non-None value among *names* in a message dict."""
    if not isinstance(msg, Mapping):
        return None
    for name in names:
        value = msg.get(name)
        if value is not None:
            return value
    return None


def _number_field(msg: Any, *names: str) -> float | int | None:
    """Like :func:`_field`, but only numeric values count."""
    if not isinstance(msg, Mapping):
        return None
    for name in names:
        value = _number(msg.get(name))
        if value is not None:
            return value
    return None


def _record_values(records: Sequence[Any], *names: str) -> list[float]:
    values = []
    for rec in records:
        value = _number_field(rec, *names)
        if value is not None:
            values.append(value)
    return values


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def _max(values: Sequence[float]) -> float:
    return max(values)


def _min(values: Sequence[float]) -> float:
    return min(values)


def _min_positive(values: Sequence[float]) -> float | None:
    """Minimum over strictly positive values; a 0 reading is a dropout."""
    positive = [v for v in values if v > 0]
    return min(positive) if positive else None


def _session_or_computed(
    session_value: float | None,
    values: Sequence[float],
    reduce: Callable[[Sequence[float]], float | None],
) -> float | None:
    """Session aggregate if present, else *reduce* over record values."""
    if session_value is not None:
        return session_value
    if values:
        return reduce(values)
    return None


# ---------------------------------------------------------------------------
# Metric families
# ---------------------------------------------------------------------------


def _stat_family(
    session: Any,
    values: Sequence[float],
    avg: tuple[str, ...],
    max_: tuple[str, ...],
    min_: tuple[str, ...] | None = None,
    min_reduce: Callable[[Sequence[float]], float | None] = _min,
) -> dict[str, float | None]:
    result = {
        "avg": _session_or_computed(_number_field(session, *avg), values, _mean),
        "max": _session_or_computed(_number_field(session, *max_), values, _max),
    }
    if min_ is not None:
        result["min"] = _session_or_computed(
            _number_field(session, *min_), values, min_reduce
        )
    return result


def _heart_rate(session: Any, records: Sequence[Any]) -> dict[str, float | None]:
    return _stat_family(
        session,
        _record_values(records, "heart_rate"),
        avg=("avg_heart_rate",),
        max_=("max_heart_rate",),
        min_=("min_heart_rate",),
        min_reduce=_min_positive,
    )


def _cadence(session: Any, records: Sequence[Any]) -> dict[str, float | None]:
    return _stat_family(
        session,
        _record_values(records, "cadence"),
        avg=("avg_cadence", "avg_running_cadence"),
        max_=("max_cadence", "max_running_cadence"),
    )


def _power(session: Any, records: Sequence[Any]) -> dict[str, float | None]:
    return _stat_family(
        session,
        _record_values(records, "power"),
        avg=("avg_power",),
        max_=("max_power",),
    )


def _speed(session: Any, records: Sequence[Any]) -> dict[str, float | None]:
    return _stat_family(
        session,
        _record_values(records, "speed", "enhanced_speed"),
        avg=("avg_speed", "enhanced_avg_speed"),
        max_=("max_speed", "enhanced_max_speed"),
    )


def _altitude(session: Any, records: Sequence[Any]) -> dict[str, float | None]:
    return _stat_family(
        session,
        _record_values(records, "altitude", "enhanced_altitude"),
        avg=("avg_altitude", "enhanced_avg_altitude"),
        max_=("max_altitude", "enhanced_max_altitude"),
        min_=("min_altitude", "enhanced_min_altitude"),
    )


def _temperature(session: Any, records: Sequence[Any]) -> dict[str, float | None]:
    return _stat_family(
        session,
        _record_values(records, "temperature"),
        avg=("avg_temperature",),
        max_=("max_temperature",),
        min_=("min_temperature",),
        min_reduce=_min_positive,
    )


def respiration_values(
    records: Sequence[Any],
    respiration_messages: Sequence[Any],
) -> list[float]:
    """Pool respiration samples from records and respiration messages.

    Each record contributes its first populated alias from
    :data:`RESPIRATION_ALIASES`; every respiration message contributes its
    ``respiration_rate``.  Record samples come first.  Nothing is
    de-duplicated.
    """
    pool = _record_values(records, *RESPIRATION_ALIASES)
    pool.extend(_record_values(respiration_messages, "respiration_rate"))
    return pool


def _respiration(
    session: Any,
    pool: Sequence[float],
) -> dict[str, float | None]:
    return _stat_family(
        session,
        pool,
        avg=("avg_respiration_rate", "enhanced_avg_respiration_rate"),
        max_=("max_respiration_rate", "enhanced_max_respiration_rate"),
        min_=("min_respiration_rate", "enhanced_min_respiration_rate"),
        min_reduce=_min_positive,
    )


def pace_from_speed(speed_ms: float | None) -> float | None:
    """Pace in min/km for a speed in m/s; None unless speed > 0."""
    speed = _number(speed_ms)
    if speed is None or speed <= 0:
        return None
    return 1000.0 / (speed * 60.0)


def _count(group: Sequence[Any]) -> int | None:
    return len(group) or None


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def extract_summary(groups: MessageGroups) -> ActivitySummary:
    """Build an :class:`ActivitySummary` from normalized message groups.

    Args:
        groups: Output of :func:`fitscope.messages.normalize_messages`.

    Returns:
        A populated ActivitySummary.  An empty bundle gives a summary with
        every field None.
    """
    session = groups.session[0] if groups.session else None
    file_id = groups.file_id[0] if groups.file_id else None
    records = groups.record

    hr = _heart_rate(session, records)
    cadence = _cadence(session, records)
    power = _power(session, records)
    speed = _speed(session, records)
    altitude = _altitude(session, records)
    temperature = _temperature(session, records)
    resp_pool = respiration_values(records, groups.respiration_rate)
    respiration = _respiration(session, resp_pool)

    return ActivitySummary(
        file_type=_field(file_id, "type"),
        manufacturer=_field(file_id, "manufacturer"),
        product=_field(file_id, "product", "garmin_product"),
        serial_number=_field(file_id, "serial_number"),
        time_created=_field(file_id, "time_created"),
        sport=_field(session, "sport"),
        sub_sport=_field(session, "sub_sport"),
        start_time=_field(session, "start_time", "timestamp"),
        total_elapsed_time=_number_field(session, "total_elapsed_time"),
        total_timer_time=_number_field(session, "total_timer_time"),
        total_distance=_number_field(session, "total_distance"),
        total_calories=_number_field(session, "total_calories"),
        avg_heart_rate=hr["avg"],
        max_heart_rate=hr["max"],
        min_heart_rate=hr["min"],
        avg_speed=speed["avg"],
        max_speed=speed["max"],
        avg_pace=pace_from_speed(speed["avg"]),
        avg_cadence=cadence["avg"],
        max_cadence=cadence["max"],
        avg_power=power["avg"],
        max_power=power["max"],
        normalized_power=_number_field(session, "normalized_power"),
        training_stress_score=_number_field(session, "training_stress_score"),
        intensity_factor=_number_field(session, "intensity_factor"),
        threshold_power=_number_field(session, "threshold_power"),
        total_ascent=_number_field(session, "total_ascent"),
        total_descent=_number_field(session, "total_descent"),
        avg_altitude=altitude["avg"],
        max_altitude=altitude["max"],
        min_altitude=altitude["min"],
        avg_respiration_rate=respiration["avg"],
        max_respiration_rate=respiration["max"],
        min_respiration_rate=respiration["min"],
        respiration_record_count=_count(resp_pool),
        avg_temperature=temperature["avg"],
        max_temperature=temperature["max"],
        min_temperature=temperature["min"],
        training_effect=_number_field(session, "total_training_effect"),
        anaerobic_training_effect=_number_field(session, "total_anaerobic_training_effect"),
        total_strokes=_number_field(session, "total_strokes"),
        avg_stroke_distance=_number_field(session, "avg_stroke_distance"),
        swim_stroke=_field(session, "swim_stroke"),
        pool_length=_number_field(session, "pool_length"),
        start_position_lat=_number_field(session, "start_position_lat"),
        start_position_long=_number_field(session, "start_position_long"),
        total_records=_count(records),
        total_laps=_count(groups.lap),
        total_events=_count(groups.event),
        total_sessions=_count(groups.session),
        hrv_record_count=_count(groups.hrv + groups.hrv_value),
        hrv_analysis=compute_hrv(groups.hrv),
    )
