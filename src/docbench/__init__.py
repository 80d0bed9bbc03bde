"""Benchmark document conversion backends and normalize their output."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from docbench.application.results import ComparisonReport
from docbench.linkify import linkify_html, segment_html
from docbench.postprocess import filter_noise_lines, normalize_whitespace

__version__ = "0.1.0"


def convert_file(
    input_path: Path,
    output_format: str = "markdown",
    backend_name: str = "docling",
    backend_modules: Iterable[str] | None = None,
) -> str:
    """Convert a document with a single backend.

    Parameters
    ----------
    input_path : Path
        Source document.
    output_format : str, default="markdown"
        One of ``markdown`` (alias ``md``), ``html``, ``json``, ``text``,
        ``doctags``.
    backend_name : str, default="docling"
        Registered backend to use.
    backend_modules : Iterable[str] | None, optional
        Plugin modules providing extra backends.

    Returns
    -------
    str
        Normalized converted content.
    """
    from .api import convert_file as _impl

    return _impl(
        input_path=input_path,
        output_format=output_format,
        backend_name=backend_name,
        backend_modules=backend_modules,
    )


def compare_file(
    input_path: Path,
    output_format: str = "markdown",
    output_dir: Path | None = None,
    backend_names: Iterable[str] | None = None,
    backend_modules: Iterable[str] | None = None,
) -> ComparisonReport:
    """Convert a document with every backend and write one artifact each.

    Parameters
    ----------
    input_path : Path
        Source document.
    output_format : str, default="markdown"
        Output format requested from every backend.
    output_dir : Path | None, default=None
        Artifact directory. Defaults to the current working directory.
    backend_names : Iterable[str] | None, optional
        Subset of backends to run; all registered backends by default.
    backend_modules : Iterable[str] | None, optional
        Plugin modules providing extra backends.

    Returns
    -------
    ComparisonReport
        Per-backend results and written artifacts.
    """
    from .api import compare_file as _impl

    return _impl(
        input_path=input_path,
        output_format=output_format,
        output_dir=output_dir,
        backend_names=backend_names,
        backend_modules=backend_modules,
    )


__all__ = [
    "compare_file",
    "convert_file",
    "filter_noise_lines",
    "linkify_html",
    "normalize_whitespace",
    "segment_html",
]
