"""Analytics pipeline: wire a decoded message bundle into the engine.

This module consumes the message dict produced by the FIT decoder (see
:func:`fitscope.reader.decode_fit_file`) and produces a :class:`FitReport`
holding the activity summary, the data catalog and the normalized groups.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from fitscope.analytics.catalog import DataTypeDescriptor, list_data_types
from fitscope.analytics.summary import ActivitySummary, extract_summary
from fitscope.messages import MessageGroups, normalize_messages


@dataclass(frozen=True)
class FitReport:
    """Everything derived from one decoded file."""

    summary: ActivitySummary
    data_types: list[DataTypeDescriptor]
    groups: MessageGroups
    errors: list[Any] = field(default_factory=list)
    integrity_ok: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Summary plus catalog counts; message bodies are left out."""
        return {
            "summary": self.summary.to_dict(drop_absent=True),
            "data_types": [
                {"key": d.key, "label": d.label, "count": d.count}
                for d in self.data_types
            ],
            "errors": [str(e) for e in self.errors],
            "integrity_ok": self.integrity_ok,
        }


def process_messages(
    bundle: Mapping[str, Any] | MessageGroups | None,
    errors: list[Any] | None = None,
    integrity_ok: bool = True,
) -> FitReport:
    """Run normalization, summary extraction and cataloguing.

    Args:
        bundle: Decoder output (``{"session_mesgs": [...], ...}``).
        errors: Decoder errors to carry along, if any.
        integrity_ok: Result of the decoder's integrity check.

    Returns:
        A FitReport.
    """
    groups = normalize_messages(bundle)
    return FitReport(
        summary=extract_summary(groups),
        data_types=list_data_types(groups),
        groups=groups,
        errors=list(errors or []),
        integrity_ok=integrity_ok,
    )
