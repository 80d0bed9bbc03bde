"""Shared type aliases for conversion formats."""

from __future__ import annotations

from typing import Literal, get_args

type OutputFormat = Literal["markdown", "html", "json", "text", "doctags"]

OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat.__value__)

FORMAT_ALIASES: dict[str, str] = {"md": "markdown"}

ARTIFACT_EXTENSIONS: dict[str, str] = {
    "markdown": "md",
    "html": "html",
    "json": "json",
    "text": "txt",
    "doctags": "doctags",
}
