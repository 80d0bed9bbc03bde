"""Application-layer result objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from docbench.types import OutputFormat


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one backend run.

    Exactly one of ``content`` and ``error`` is meaningful. Both may be empty
    when a backend produced no output without failing.
    """

    backend_name: str
    output_format: OutputFormat
    content: str = ""
    error: str | None = None
    duration_seconds: float | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ArtifactRecord:
    """Normalized output persisted for one backend."""

    backend_name: str
    path: Path
    preview: str


@dataclass(frozen=True)
class ComparisonReport:
    """All results of one comparison run, keyed by backend name."""

    input_path: Path
    output_format: OutputFormat
    results: Mapping[str, ConversionResult]
    artifacts: Mapping[str, ArtifactRecord] = field(default_factory=dict)

    def succeeded(self) -> list[str]:
        """Names of backends that produced a result without error."""
        return [name for name, result in self.results.items() if result.succeeded]

    def failed(self) -> list[str]:
        """Names of backends that recorded an error."""
        return [name for name, result in self.results.items() if not result.succeeded]
