"""Shared fixtures and helpers for the fitscope test suite."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Message-building helpers
# ---------------------------------------------------------------------------


def make_records(**series: list) -> list[dict]:
    """Build record messages from parallel field series.

    ``make_records(heart_rate=[100, 110])`` gives two records.  ``None``
    entries leave the field out of that record.
    """
    length = max((len(v) for v in series.values()), default=0)
    records = []
    for i in range(length):
        rec = {"timestamp": 1_000_000 + i}
        for name, values in series.items():
            if i < len(values) and values[i] is not None:
                rec[name] = values[i]
        records.append(rec)
    return records


def make_hrv_messages(*chunks: list[float]) -> list[dict]:
    """One ``hrv`` message per chunk of RR intervals (seconds)."""
    return [{"time": list(chunk)} for chunk in chunks]


def make_session(**fields) -> dict:
    session = {
        "sport": "running",
        "sub_sport": "generic",
        "start_time": datetime(2026, 3, 1, 7, 30, tzinfo=timezone.utc),
    }
    session.update(fields)
    return session


def write_bundle(path: Path, bundle: dict) -> Path:
    """Write a message bundle as a JSON dump."""
    with open(path, "w") as f:
        json.dump(bundle, f, default=str)
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def run_bundle() -> dict:
    """A small running activity as returned by the Python FIT SDK."""
    return {
        "file_id_mesgs": [
            {"type": "activity", "manufacturer": "garmin", "product": 3990,
             "serial_number": 123456789},
        ],
        "session_mesgs": [
            make_session(
                total_elapsed_time=1830.5,
                total_timer_time=1800.0,
                total_distance=5000.0,
                total_calories=412,
                avg_heart_rate=150,
                max_heart_rate=172,
                enhanced_avg_speed=2.778,
                enhanced_max_speed=3.9,
                avg_running_cadence=84,
                max_running_cadence=92,
                total_ascent=42,
                total_descent=40,
                total_training_effect=3.1,
                total_anaerobic_training_effect=1.2,
            ),
        ],
        "lap_mesgs": [{"total_distance": 1000.0}] * 5,
        "record_mesgs": make_records(
            heart_rate=[138, 140, 142],
            power=[250, 260, 270],
            enhanced_altitude=[101.0, 103.0, 105.0],
            temperature=[0, 21, 23],
            respiration_rate=[30.0, 32.0, 34.0],
        ),
        "event_mesgs": [{"event": "timer", "event_type": "start"}],
        "hrv_mesgs": make_hrv_messages([0.80, 0.85, 0.82], [0.90, 0.78]),
        "device_info_mesgs": [{"device_index": "creator"}],
    }
