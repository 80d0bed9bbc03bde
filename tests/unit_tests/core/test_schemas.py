from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from docbench.errors import UnsupportedFormat
from docbench.schemas import (
    DEFAULT_TIMEOUT_SECONDS,
    BackendSelectionConfig,
    BackendSettings,
    parse_output_format,
)
from docbench.types import ARTIFACT_EXTENSIONS, OUTPUT_FORMATS


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("markdown", "markdown"),
        ("md", "markdown"),
        ("MD", "markdown"),
        (" HTML ", "html"),
        ("json", "json"),
        ("text", "text"),
        ("DocTags", "doctags"),
    ],
)
def test_parse_output_format_accepts_known_names(raw: str, expected: str) -> None:
    assert parse_output_format(raw) == expected


@pytest.mark.parametrize("raw", ["pdf", "", "txt", "markdown2"])
def test_parse_output_format_rejects_unknown_names(raw: str) -> None:
    with pytest.raises(UnsupportedFormat, match="unsupported output format"):
        parse_output_format(raw)


def test_every_format_has_an_artifact_extension() -> None:
    assert set(ARTIFACT_EXTENSIONS) == set(OUTPUT_FORMATS)
    assert ARTIFACT_EXTENSIONS["markdown"] == "md"


def test_backend_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DOCBENCH_PYTHON", raising=False)
    monkeypatch.delenv("DOCBENCH_TIMEOUT", raising=False)
    settings = BackendSettings()
    assert settings.python_executable == Path(sys.executable)
    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_backend_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCBENCH_PYTHON", "/opt/venv/bin/python")
    monkeypatch.setenv("DOCBENCH_TIMEOUT", "12.5")
    settings = BackendSettings()
    assert settings.python_executable == Path("/opt/venv/bin/python")
    assert settings.timeout_seconds == 12.5


def test_backend_settings_reject_non_positive_timeout() -> None:
    with pytest.raises(ValidationError):
        BackendSettings(timeout_seconds=0)


def test_backend_settings_forbid_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        BackendSettings(retries=3)


def test_backend_selection_strips_and_dedupes() -> None:
    config = BackendSelectionConfig(names=[" docling", "pypdf", "docling "])
    assert config.names == ["docling", "pypdf"]


def test_backend_selection_rejects_blank_names() -> None:
    with pytest.raises(ValidationError):
        BackendSelectionConfig(names=["docling", "  "])


@pytest.mark.parametrize("raw", ["-5", "0", "abc"])
def test_backend_settings_validate_timeout_from_environment(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    """Environment defaults are held to the same rules as explicit values."""
    monkeypatch.setenv("DOCBENCH_TIMEOUT", raw)
    with pytest.raises(ValidationError, match="timeout_seconds"):
        BackendSettings()


def test_explicit_timeout_overrides_invalid_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DOCBENCH_TIMEOUT", "abc")
    assert BackendSettings(timeout_seconds=3).timeout_seconds == 3.0
