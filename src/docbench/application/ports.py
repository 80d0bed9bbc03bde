"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from docbench.application.options import NormalizeOptions
from docbench.application.results import ArtifactRecord
from docbench.types import OutputFormat


class OutputPostProcessor(Protocol):
    """Turn raw backend output into normalized, comparable content."""

    def run(
        self,
        content: str,
        output_format: OutputFormat,
        options: NormalizeOptions,
    ) -> str:
        """Return normalized content."""


class ArtifactWriter(Protocol):
    """Persist normalized content for one backend."""

    def write(
        self,
        backend_name: str,
        content: str,
        output_format: OutputFormat,
        output_dir: Path,
        preview_chars: int,
    ) -> ArtifactRecord:
        """Write the artifact and return its record."""


class StatusSink(Protocol):
    """Receive user-facing status lines."""

    def __call__(self, message: str) -> None:
        """Emit one status message."""
