"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from docbench.application.options import HarnessOptions, NormalizeOptions
from docbench.application.ports import ArtifactWriter, OutputPostProcessor, StatusSink
from docbench.application.results import (
    ArtifactRecord,
    ComparisonReport,
    ConversionResult,
)
from docbench.backends.base import ConversionBackend


def run_comparison(
    input_path: Path,
    backends: Sequence[ConversionBackend],
    options: HarnessOptions | None = None,
    status: StatusSink | None = None,
) -> ComparisonReport:
    """Compare backends on one input via lazy use-case import."""
    from docbench.application.use_cases import run_comparison as _impl

    return _impl(input_path, backends, options=options, status=status)


def convert_document(
    input_path: Path,
    output_format: str,
    backend: ConversionBackend,
    normalize: NormalizeOptions | None = None,
) -> ConversionResult:
    """Convert one document with one backend via lazy use-case import."""
    from docbench.application.use_cases import convert_document as _impl

    return _impl(input_path, output_format, backend, normalize=normalize)


__all__ = [
    "ArtifactRecord",
    "ArtifactWriter",
    "ComparisonReport",
    "ConversionResult",
    "HarnessOptions",
    "NormalizeOptions",
    "OutputPostProcessor",
    "StatusSink",
    "convert_document",
    "run_comparison",
]
