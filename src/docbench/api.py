"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from docbench.application.options import HarnessOptions, NormalizeOptions
from docbench.application.ports import StatusSink
from docbench.application.results import ComparisonReport
from docbench.application.use_cases import convert_document, run_comparison
from docbench.backends.registry import create_default_registry
from docbench.schemas import BackendSettings, parse_output_format


def convert_file(
    input_path: Path,
    output_format: str = "markdown",
    backend_name: str = "docling",
    backend_modules: Iterable[str] | None = None,
    settings: BackendSettings | None = None,
    linkify: bool = True,
) -> str:
    """Convert a document with one registered backend and return normalized output."""
    registry = create_default_registry(extra_modules=backend_modules, settings=settings)
    backend = registry.get(backend_name)
    result = convert_document(
        input_path,
        output_format,
        backend,
        normalize=NormalizeOptions(linkify=linkify),
    )
    return result.content


def compare_file(
    input_path: Path,
    output_format: str = "markdown",
    output_dir: Path | None = None,
    backend_names: Iterable[str] | None = None,
    backend_modules: Iterable[str] | None = None,
    settings: BackendSettings | None = None,
    preview_chars: int = 300,
    status: StatusSink | None = None,
) -> ComparisonReport:
    """Run the comparison harness over registered backends."""
    registry = create_default_registry(extra_modules=backend_modules, settings=settings)
    backends = registry.select(backend_names)
    options = HarnessOptions(
        output_format=parse_output_format(output_format),
        output_dir=output_dir or Path.cwd(),
        preview_chars=preview_chars,
    )
    return run_comparison(input_path, backends, options=options, status=status)
