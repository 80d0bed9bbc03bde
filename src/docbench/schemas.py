"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from docbench.errors import UnsupportedFormat
from docbench.types import FORMAT_ALIASES, OUTPUT_FORMATS, OutputFormat

DEFAULT_TIMEOUT_SECONDS = 600.0


class OutputFormatConfig(BaseModel):
    """Validated output format, with aliases resolved."""

    model_config = ConfigDict(extra="forbid")

    output_format: str

    @field_validator("output_format", mode="before")
    @classmethod
    def _normalize_format(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("output format must be a string.")
        normalized = value.strip().lower()
        normalized = FORMAT_ALIASES.get(normalized, normalized)
        if normalized not in OUTPUT_FORMATS:
            raise ValueError(
                f"unsupported output format '{value}'. "
                f"Expected one of: {', '.join(OUTPUT_FORMATS)} (or 'md')."
            )
        return normalized


def parse_output_format(value: str) -> OutputFormat:
    """Resolve a user-supplied format name into an ``OutputFormat``.

    Parameters
    ----------
    value : str
        Format name, case-insensitive. ``md`` is accepted for ``markdown``.

    Returns
    -------
    OutputFormat
        Canonical format name.

    Raises
    ------
    UnsupportedFormat
        If the name is not part of the enumerated format set.
    """
    try:
        config = OutputFormatConfig(output_format=value)
    except ValidationError as exc:
        messages = "; ".join(str(error["msg"]) for error in exc.errors())
        raise UnsupportedFormat(messages) from exc
    return cast(OutputFormat, config.output_format)


def _default_python() -> str:
    return os.getenv("DOCBENCH_PYTHON") or sys.executable


def _default_timeout() -> str | float:
    return os.getenv("DOCBENCH_TIMEOUT") or DEFAULT_TIMEOUT_SECONDS


class BackendSettings(BaseModel):
    """Settings shared by subprocess-driven backends.

    Environment defaults are raw strings and go through the same validation
    as explicit values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    python_executable: Path = Field(
        default_factory=_default_python, validate_default=True
    )
    timeout_seconds: float = Field(
        default_factory=_default_timeout, gt=0.0, validate_default=True
    )


class BackendSelectionConfig(BaseModel):
    """Validated list of backend names requested by a caller."""

    model_config = ConfigDict(extra="forbid")

    names: list[str] = Field(default_factory=list)

    @field_validator("names")
    @classmethod
    def _validate_names(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value]
        if any(not item for item in cleaned):
            raise ValueError("backend names cannot contain empty entries.")
        seen: set[str] = set()
        unique: list[str] = []
        for item in cleaned:
            if item not in seen:
                seen.add(item)
                unique.append(item)
        return unique
