"""Time-domain HRV metrics from FIT ``hrv`` messages.

FIT ``hrv`` messages carry a ``time`` array of beat-to-beat (RR) intervals
in seconds.  The decoder fills unused slots with the 0xFFFF sentinel, which
decodes to 65.535 s, so anything at or above that bound is noise rather than
a heartbeat.

Metrics (all in ms except pNN50, a percentage):
  - mean NN, min NN, max NN
  - SDNN  -- population standard deviation of the intervals
  - RMSSD -- root mean square of successive differences
  - pNN50 -- share of successive differences greater than 50 ms
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field, asdict
from typing import Any, Iterable, Sequence

import numpy as np


# Upper bound (exclusive) for a valid RR interval, in seconds
RR_MAX_SECONDS = 65.535

# Successive-difference threshold for pNN50 (ms)
PNN50_THRESHOLD_MS = 50.0


@dataclass(frozen=True)
class HRVMetrics:
    """HRV statistics for one activity."""

    rmssd: float
    sdnn: float
    pnn50: float  # percent, one decimal
    mean_nn: float
    min_nn: float
    max_nn: float
    total_intervals: int
    rr_intervals: tuple[float, ...] = field(default=(), repr=False)

    def to_dict(self, include_intervals: bool = False) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly)."""
        data = asdict(self)
        if include_intervals:
            data["rr_intervals"] = list(self.rr_intervals)
        else:
            del data["rr_intervals"]
        return data

    def __repr__(self) -> str:
        return (
            f"HRVMetrics(rmssd={self.rmssd:.1f}ms, sdnn={self.sdnn:.1f}ms, "
            f"pnn50={self.pnn50:.1f}%, n={self.total_intervals})"
        )


def _is_valid_rr(value: Any, max_seconds: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    if not math.isfinite(value):
        return False
    return 0 < value < max_seconds


def extract_rr_intervals(
    hrv_messages: Iterable[Any],
    max_seconds: float = RR_MAX_SECONDS,
) -> list[float]:
    """Collect RR intervals (ms) from ``hrv`` messages, in beat order.

    Messages are read in order, then each message's ``time`` array in
    order; a scalar ``time`` counts as a one-element array.  Values that
    are not finite numbers in ``(0, max_seconds)`` are dropped.
    """
    rr_ms: list[float] = []
    for msg in hrv_messages:
        if not hasattr(msg, "get"):
            continue
        times = msg.get("time")
        # the decoder collapses a one-element array to a scalar
        if isinstance(times, numbers.Real):
            times = [times]
        elif not isinstance(times, (list, tuple, np.ndarray)):
            continue
        for value in times:
            if _is_valid_rr(value, max_seconds):
                # decoded values are whole ms / 1000
                rr_ms.append(round(float(value) * 1000.0, 6))
    return rr_ms


def analyze_hrv(
    rr_intervals_ms: Sequence[float],
    threshold_ms: float = PNN50_THRESHOLD_MS,
) -> HRVMetrics | None:
    """Compute time-domain HRV metrics.

    Returns None with fewer than 2 intervals: there is no successive
    difference to work with, which is not the same as zero variability.
    """
    if len(rr_intervals_ms) < 2:
        return None

    arr = np.asarray(rr_intervals_ms, dtype=np.float64)
    diffs = np.abs(np.diff(arr))

    mean_nn = float(np.mean(arr))
    # ddof=0: descriptive statistic over the whole recording
    sdnn_val = float(np.std(arr, ddof=0))
    rmssd = float(np.sqrt(np.mean(diffs ** 2)))
    pnn50 = round(float(np.sum(diffs > threshold_ms)) / len(diffs) * 100.0, 1)

    return HRVMetrics(
        rmssd=rmssd,
        sdnn=sdnn_val,
        pnn50=pnn50,
        mean_nn=mean_nn,
        min_nn=float(np.min(arr)),
        max_nn=float(np.max(arr)),
        total_intervals=len(arr),
        rr_intervals=tuple(float(v) for v in arr),
    )


def compute_hrv(hrv_messages: Iterable[Any]) -> HRVMetrics | None:
    """Extract RR intervals from ``hrv`` messages and analyze them."""
    return analyze_hrv(extract_rr_intervals(hrv_messages))
