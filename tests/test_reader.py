"""Tests for fitscope.reader -- FIT decoding and JSON bundle loading.

The Garmin SDK is replaced with a fake decoder so no binary fixtures are
needed.
"""

from __future__ import annotations

import logging

import pytest

import fitscope.reader as reader
from fitscope.reader import (
    DecodeResult,
    FitFileError,
    decode_fit_file,
    load_bundle,
    load_bundle_json,
    read_fit_file,
)

from tests.conftest import make_hrv_messages, write_bundle


class FakeStream:
    opened: list[str] = []

    @classmethod
    def from_file(cls, path):
        cls.opened.append(path)
        return cls()


def make_fake_decoder(messages=None, errors=None, is_fit=True, integrity=True):
    class FakeDecoder:
        def __init__(self, stream):
            self.stream = stream

        def is_fit(self):
            return is_fit

        def check_integrity(self):
            return integrity

        def read(self):
            return dict(messages or {}), list(errors or [])

    return FakeDecoder


@pytest.fixture
def fit_path(tmp_path):
    path = tmp_path / "activity.fit"
    path.write_bytes(b"\x0e\x10\x00\x00")
    return path


@pytest.fixture
def fake_sdk(monkeypatch):
    def install(**kwargs):
        monkeypatch.setattr(reader, "Stream", FakeStream)
        monkeypatch.setattr(reader, "Decoder", make_fake_decoder(**kwargs))

    return install


class TestDecodeFitFile:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FitFileError, match="not found"):
            decode_fit_file(tmp_path / "nope.fit")

    def test_not_a_fit_file(self, fit_path, fake_sdk):
        fake_sdk(is_fit=False)
        with pytest.raises(FitFileError, match="Not a valid FIT file"):
            decode_fit_file(fit_path)

    def test_fit_file_error_is_value_error(self):
        assert issubclass(FitFileError, ValueError)

    def test_returns_messages(self, fit_path, fake_sdk):
        fake_sdk(messages={"session_mesgs": [{"sport": "running"}]})
        result = decode_fit_file(fit_path)
        assert result.messages == {"session_mesgs": [{"sport": "running"}]}
        assert result.errors == []
        assert result.integrity_ok is True
        assert FakeStream.opened[-1] == str(fit_path)

    def test_integrity_failure_is_warning(self, fit_path, fake_sdk, caplog):
        fake_sdk(messages={"record_mesgs": [{}]}, integrity=False)
        with caplog.at_level(logging.WARNING, logger="fitscope.reader"):
            result = decode_fit_file(fit_path)
        assert result.integrity_ok is False
        assert result.messages["record_mesgs"] == [{}]
        assert "integrity check failed" in caplog.text

    def test_decoder_errors_logged(self, fit_path, fake_sdk, caplog):
        fake_sdk(errors=["unexpected end of file"])
        with caplog.at_level(logging.WARNING, logger="fitscope.reader"):
            result = decode_fit_file(fit_path)
        assert result.errors == ["unexpected end of file"]
        assert "unexpected end of file" in caplog.text


class TestLoadBundleJson:
    def test_loads(self, tmp_path):
        path = write_bundle(tmp_path / "dump.json", {"lap_mesgs": [{"total_distance": 1000}]})
        assert load_bundle_json(path) == {"lap_mesgs": [{"total_distance": 1000}]}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(FitFileError, match="Invalid JSON"):
            load_bundle_json(path)

    def test_not_an_object(self, tmp_path):
        path = write_bundle(tmp_path / "list.json", [1, 2])
        with pytest.raises(FitFileError):
            load_bundle_json(path)

    def test_missing(self, tmp_path):
        with pytest.raises(FitFileError):
            load_bundle_json(tmp_path / "missing.json")

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff\xfe\x00{")
        with pytest.raises(FitFileError, match="Invalid JSON"):
            load_bundle_json(path)


class TestLoadBundle:
    def test_json_by_suffix(self, tmp_path):
        path = write_bundle(tmp_path / "dump.JSON", {"event_mesgs": []})
        result = load_bundle(path)
        assert isinstance(result, DecodeResult)
        assert result.messages == {"event_mesgs": []}
        assert result.integrity_ok is True

    def test_fit_by_suffix(self, fit_path, fake_sdk):
        fake_sdk(messages={"event_mesgs": [{}]})
        assert load_bundle(fit_path).messages == {"event_mesgs": [{}]}


class TestReadFitFile:
    def test_from_json(self, tmp_path, run_bundle):
        path = write_bundle(tmp_path / "run.json", run_bundle)
        report = read_fit_file(path)
        assert report.summary.avg_heart_rate == 150
        assert report.summary.hrv_analysis.total_intervals == 5
        assert [d.key for d in report.data_types][:3] == ["session", "lap", "record"]

    def test_from_fit(self, fit_path, fake_sdk):
        fake_sdk(
            messages={"hrv_mesgs": make_hrv_messages([0.8, 0.9])},
            errors=["crc"],
            integrity=False,
        )
        report = read_fit_file(fit_path)
        assert report.integrity_ok is False
        assert report.errors == ["crc"]
        assert report.summary.hrv_analysis.rmssd == pytest.approx(100.0)
