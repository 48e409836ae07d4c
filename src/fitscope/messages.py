"""Normalize a decoder message bundle into fixed, named message groups.

The Garmin FIT decoders return a plain dict keyed by message type with a
``_mesgs`` suffix (``session_mesgs``, ``hrv_mesgs``, ...) in the Python SDK,
or ``Mesgs`` in camelCase (``sessionMesgs``) in JavaScript-style dumps.  Any
type the file does not contain is simply missing.  :func:`normalize_messages`
maps either spelling onto :class:`MessageGroups`, which always carries every
known type as a (possibly empty) tuple.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class MessageGroups:
    """Decoded messages grouped by type, one tuple per known message type."""

    # Activity data
    file_id: tuple = ()
    activity: tuple = ()
    session: tuple = ()
    lap: tuple = ()
    record: tuple = ()
    event: tuple = ()

    # Health metrics
    hrv: tuple = ()
    hrv_status_summary: tuple = ()
    hrv_value: tuple = ()
    respiration_rate: tuple = ()
    stress_level: tuple = ()

    # Device info
    device_info: tuple = ()
    device_settings: tuple = ()
    user_profile: tuple = ()

    # Sport / workout
    sport: tuple = ()
    workout: tuple = ()
    workout_step: tuple = ()

    # Training
    training_file: tuple = ()
    zones_target: tuple = ()

    # GPS / courses
    gps_metadata: tuple = ()
    course: tuple = ()
    course_point: tuple = ()

    # Monitoring
    monitoring: tuple = ()
    monitoring_info: tuple = ()

    # Other
    length: tuple = ()
    split: tuple = ()
    split_summary: tuple = ()
    set: tuple = ()
    jump: tuple = ()
    climb_pro: tuple = ()

    # Developer fields
    field_description: tuple = ()
    developer_data_id: tuple = ()

    def get(self, key: str) -> tuple:
        """Return the group for *key*, or an empty tuple for unknown keys."""
        if key not in MESSAGE_TYPES:
            return ()
        return getattr(self, key)

    def to_dict(self) -> dict[str, list]:
        """Plain ``{type: [messages]}`` dict with every known type present."""
        return {key: list(getattr(self, key)) for key in MESSAGE_TYPES}

    def __repr__(self) -> str:
        populated = ", ".join(
            f"{key}={len(getattr(self, key))}"
            for key in MESSAGE_TYPES
            if getattr(self, key)
        )
        return f"MessageGroups({populated})"


MESSAGE_TYPES: tuple[str, ...] = tuple(f.name for f in fields(MessageGroups))


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def decoder_keys(message_type: str) -> tuple[str, str, str]:
    """Bundle keys probed for *message_type*, in lookup order.

    >>> decoder_keys("hrv_status_summary")
    ('hrv_status_summary', 'hrv_status_summary_mesgs', 'hrvStatusSummaryMesgs')
    """
    return (
        message_type,
        f"{message_type}_mesgs",
        f"{_camel(message_type)}Mesgs",
    )


def _lookup(bundle: Mapping, message_type: str) -> tuple:
    for key in decoder_keys(message_type):
        value = bundle.get(key)
        if isinstance(value, (list, tuple)):
            return tuple(value)
    return ()


def normalize_messages(bundle: Mapping[str, Any] | MessageGroups | None) -> MessageGroups:
    """Map a decoder bundle onto :class:`MessageGroups`.

    Missing types, and entries that are not lists, become empty tuples.
    Message contents are not inspected.  Normalizing an already-normalized
    bundle (or its :meth:`MessageGroups.to_dict`) gives an equal result.
    """
    if isinstance(bundle, MessageGroups):
        return bundle
    if not isinstance(bundle, Mapping):
        return MessageGroups()
    return MessageGroups(**{key: _lookup(bundle, key) for key in MESSAGE_TYPES})
