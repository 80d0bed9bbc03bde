"""Artifact persistence and console previews."""

from __future__ import annotations

import logging
from pathlib import Path

from docbench.application.results import ArtifactRecord
from docbench.types import ARTIFACT_EXTENSIONS, OutputFormat

logger = logging.getLogger(__name__)


def artifact_path(output_dir: Path, backend_name: str, output_format: OutputFormat) -> Path:
    """Return ``<output_dir>/output_<backend>.<ext>`` for a backend result."""
    return output_dir / f"output_{backend_name}.{ARTIFACT_EXTENSIONS[output_format]}"


def render_preview(content: str, limit: int) -> str:
    """Render the first ``limit`` characters as an indented block.

    Embedded newlines continue the two-space indentation; ``...`` marks a
    truncated preview.
    """
    head = content[:limit].replace("\n", "\n  ")
    suffix = "..." if len(content) > limit else ""
    return f"  {head}{suffix}"


class FileArtifactWriter:
    """Write normalized content as UTF-8 text files."""

    def write(
        self,
        backend_name: str,
        content: str,
        output_format: OutputFormat,
        output_dir: Path,
        preview_chars: int,
    ) -> ArtifactRecord:
        """Write ``content`` for ``backend_name`` and return the record."""
        path = artifact_path(output_dir, backend_name, output_format)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info("wrote %d characters to %s", len(content), path)
        return ArtifactRecord(
            backend_name=backend_name,
            path=path,
            preview=render_preview(content, preview_chars),
        )
