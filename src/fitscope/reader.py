"""Load decoded FIT messages from disk.

Binary ``.fit`` files are handed to the official Garmin decoder
(``garmin-fit-sdk``); ``.json`` files are taken to be a dump of an
already-decoded message bundle.  Either way the result goes through
:func:`fitscope.analytics.pipeline.process_messages`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from garmin_fit_sdk import Decoder, Stream

from fitscope.analytics.pipeline import FitReport, process_messages

logger = logging.getLogger(__name__)


class FitFileError(ValueError):
    """The input cannot be read as a FIT file or message bundle."""


@dataclass
class DecodeResult:
    """Raw decoder output for one file."""

    messages: dict[str, Any]
    errors: list[Any] = field(default_factory=list)
    integrity_ok: bool = True


def decode_fit_file(path: str | Path) -> DecodeResult:
    """Decode a binary FIT file with the Garmin SDK.

    A failed integrity check is only a warning: whatever the decoder
    recovers is still returned.

    Raises:
        FitFileError: If the file is missing or is not a FIT file.
    """
    path = Path(path)
    if not path.exists():
        raise FitFileError(f"File not found: {path}")

    logger.debug("Decoding FIT file %s", path)
    stream = Stream.from_file(str(path))
    decoder = Decoder(stream)

    if not decoder.is_fit():
        raise FitFileError(f"Not a valid FIT file: {path.name}")

    integrity_ok = bool(decoder.check_integrity())
    if not integrity_ok:
        logger.warning("FIT integrity check failed for %s, parsing anyway", path.name)

    messages, errors = decoder.read()
    if errors:
        logger.warning("FIT decoder reported %d error(s) for %s: %s",
                       len(errors), path.name, errors)

    return DecodeResult(messages=messages, errors=list(errors), integrity_ok=integrity_ok)


def load_bundle_json(path: str | Path) -> dict[str, Any]:
    """Load a JSON dump of a decoded message bundle.

    Raises:
        FitFileError: If the file is missing, not JSON, or not an object.
    """
    path = Path(path)
    if not path.exists():
        raise FitFileError(f"File not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            bundle = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FitFileError(f"Invalid JSON in {path.name}: {e}") from e

    if not isinstance(bundle, dict):
        raise FitFileError(f"Expected a JSON object of message groups in {path.name}")
    return bundle


def load_bundle(path: str | Path) -> DecodeResult:
    """Load messages from a ``.json`` dump or decode a FIT file."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return DecodeResult(messages=load_bundle_json(path))
    return decode_fit_file(path)


def read_fit_file(path: str | Path) -> FitReport:
    """Load *path* and run the analytics pipeline on it."""
    result = load_bundle(path)
    report = process_messages(
        result.messages,
        errors=result.errors,
        integrity_ok=result.integrity_ok,
    )
    logger.debug("Read %s: %d populated message group(s)", path, len(report.data_types))
    return report
