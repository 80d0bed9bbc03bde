"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from docbench.types import OutputFormat

DEFAULT_PREVIEW_CHARS = 300


@dataclass(frozen=True)
class NormalizeOptions:
    """Output normalization configuration."""

    filter_noise: bool = True
    linkify: bool = True


@dataclass(frozen=True)
class HarnessOptions:
    """Options for one comparison run."""

    output_format: OutputFormat = "markdown"
    output_dir: Path = field(default_factory=Path.cwd)
    preview_chars: int = DEFAULT_PREVIEW_CHARS
    normalize: NormalizeOptions = NormalizeOptions()
