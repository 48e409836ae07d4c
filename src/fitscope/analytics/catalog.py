"""Catalog of populated message groups.

One :class:`DataTypeDescriptor` per non-empty group, ordered activity-first
(sessions, laps, records) with device and auxiliary types after.  Front ends
build one tab or table per descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from fitscope.messages import MessageGroups


# (group key, display label), in display priority order
DATA_TYPE_LABELS: tuple[tuple[str, str], ...] = (
    ("session", "Sessions"),
    ("lap", "Laps"),
    ("record", "Records"),
    ("event", "Events"),
    ("hrv", "HRV Data"),
    ("hrv_value", "HRV Values"),
    ("hrv_status_summary", "HRV Status"),
    ("respiration_rate", "Respiration Rate"),
    ("stress_level", "Stress Level"),
    ("device_info", "Device Info"),
    ("file_id", "File Info"),
    ("sport", "Sport"),
    ("user_profile", "User Profile"),
    ("zones_target", "Training Zones"),
    ("workout", "Workout"),
    ("workout_step", "Workout Steps"),
    ("length", "Lengths"),
    ("split", "Splits"),
    ("split_summary", "Split Summary"),
    ("monitoring", "Monitoring"),
    ("gps_metadata", "GPS Metadata"),
    ("climb_pro", "ClimbPro"),
    ("set", "Sets"),
    ("jump", "Jumps"),
)


@dataclass(frozen=True)
class DataTypeDescriptor:
    """A populated message group, labelled for display."""

    key: str
    label: str
    count: int
    data: tuple

    def __repr__(self) -> str:
        return f"DataTypeDescriptor({self.key!r}, {self.label!r}, count={self.count})"


def list_data_types(
    groups: MessageGroups,
    labels: Sequence[tuple[str, str]] = DATA_TYPE_LABELS,
) -> list[DataTypeDescriptor]:
    """Describe every non-empty group, in *labels* order.

    Keys missing from *labels* are not listed.
    """
    descriptors: list[DataTypeDescriptor] = []
    for key, label in labels:
        data: Any = groups.get(key)
        if len(data) > 0:
            descriptors.append(
                DataTypeDescriptor(key=key, label=label, count=len(data), data=data)
            )
    return descriptors
