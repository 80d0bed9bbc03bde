"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import asyncio
import logging
import time
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
from docbench.errors import BackendUnavailable, DocbenchError, InputNotFound
from docbench.infrastructure.artifacts import FileArtifactWriter
from docbench.infrastructure.postprocessing import OutputPostProcessorImpl
from docbench.schemas import parse_output_format
from docbench.types import OutputFormat

logger = logging.getLogger(__name__)


def ensure_input_exists(input_path: Path) -> Path:
    """Return ``input_path`` if it is an existing file.

    Raises
    ------
    InputNotFound
        If the path does not exist or is not a regular file.
    """
    if not input_path.is_file():
        raise InputNotFound(f"Input file not found: {input_path}")
    return input_path


async def _run_backend(
    backend: ConversionBackend,
    input_path: Path,
    output_format: OutputFormat,
) -> ConversionResult:
    """Run one backend, downgrading every failure to a recorded error."""
    started = time.perf_counter()
    try:
        if not await asyncio.to_thread(backend.probe):
            raise BackendUnavailable(f"{backend.name} is not installed.")
        content = await backend.convert(input_path, output_format)
    except DocbenchError as exc:
        logger.warning("%s failed: %s", backend.name, exc)
        error = f"{type(exc).__name__}: {exc}"
        return ConversionResult(
            backend_name=backend.name,
            output_format=output_format,
            error=error,
            duration_seconds=time.perf_counter() - started,
        )
    except Exception as exc:
        logger.exception("unexpected error in backend %s", backend.name)
        return ConversionResult(
            backend_name=backend.name,
            output_format=output_format,
            error=f"{type(exc).__name__}: {exc}",
            duration_seconds=time.perf_counter() - started,
        )

    duration = time.perf_counter() - started
    logger.info(
        "%s completed in %.0fms (%d characters)",
        backend.name,
        duration * 1000,
        len(content),
    )
    return ConversionResult(
        backend_name=backend.name,
        output_format=output_format,
        content=content,
        duration_seconds=duration,
    )


async def compare_backends(
    input_path: Path,
    backends: Sequence[ConversionBackend],
    options: HarnessOptions | None = None,
    status: StatusSink | None = None,
    postprocessor: OutputPostProcessor | None = None,
    writer: ArtifactWriter | None = None,
) -> ComparisonReport:
    """Use-case: run every backend on one input and persist normalized output.

    Backends run concurrently and independently; a failing backend only
    records an error in its own result. Artifacts and status lines are
    produced in backend order once every backend has settled.

    Parameters
    ----------
    input_path : Path
        Source document.
    backends : Sequence[ConversionBackend]
        Backends to compare. Names must be unique.
    options : HarnessOptions | None, optional
        Output format, directory and preview configuration.
    status : StatusSink | None, optional
        Receiver of user-facing status lines. Defaults to ``print``.
    postprocessor : OutputPostProcessor | None, optional
        Normalization pipeline.
    writer : ArtifactWriter | None, optional
        Artifact persistence.

    Returns
    -------
    ComparisonReport
        Results keyed by backend name, plus the written artifacts.

    Raises
    ------
    InputNotFound
        If ``input_path`` does not exist. No backend is attempted.
    UnsupportedFormat
        If the requested format is not part of the enumerated set.
    """
    options = options or HarnessOptions()
    status = status or print
    postprocessor = postprocessor or OutputPostProcessorImpl()
    writer = writer or FileArtifactWriter()

    output_format = parse_output_format(options.output_format)
    ensure_input_exists(input_path)

    names = [backend.name for backend in backends]
    if len(set(names)) != len(names):
        raise DocbenchError(f"Backend names must be unique: {', '.join(names)}")

    settled = await asyncio.gather(
        *(_run_backend(backend, input_path, output_format) for backend in backends)
    )
    results = {result.backend_name: result for result in settled}

    artifacts: dict[str, ArtifactRecord] = {}
    for name, result in results.items():
        if result.error is not None:
            status(f"✗ {name} failed: {result.error}")
            continue
        normalized = postprocessor.run(result.content, output_format, options.normalize)
        if not normalized:
            logger.info("%s produced no content; nothing written", name)
            continue
        record = writer.write(
            name,
            normalized,
            output_format,
            options.output_dir,
            options.preview_chars,
        )
        artifacts[name] = record
        status(f"✓ Saved {name} output to: {record.path}")
        status(f"\n{name} preview:")
        status(f"{record.preview}\n")

    return ComparisonReport(
        input_path=input_path,
        output_format=output_format,
        results=results,
        artifacts=artifacts,
    )


def run_comparison(
    input_path: Path,
    backends: Sequence[ConversionBackend],
    options: HarnessOptions | None = None,
    status: StatusSink | None = None,
) -> ComparisonReport:
    """Synchronous entry point for :func:`compare_backends`."""
    return asyncio.run(
        compare_backends(input_path, backends, options=options, status=status)
    )


def convert_document(
    input_path: Path,
    output_format: str,
    backend: ConversionBackend,
    normalize: NormalizeOptions | None = None,
    postprocessor: OutputPostProcessor | None = None,
) -> ConversionResult:
    """Use-case: convert one document with one backend.

    Unlike the comparison harness, failures propagate to the caller.

    Raises
    ------
    InputNotFound
        If ``input_path`` does not exist.
    UnsupportedFormat
        If the format is unknown or the backend cannot produce it.
    BackendUnavailable
        If the backend engine is missing.
    ConversionFailed
        If the engine reports an error.
    """
    resolved_format = parse_output_format(output_format)
    ensure_input_exists(input_path)
    normalize = normalize or NormalizeOptions()
    postprocessor = postprocessor or OutputPostProcessorImpl()

    if not backend.probe():
        raise BackendUnavailable(f"{backend.name} is not installed.")

    started = time.perf_counter()
    raw = asyncio.run(backend.convert(input_path, resolved_format))
    duration = time.perf_counter() - started
    logger.info("%s completed in %.0fms", backend.name, duration * 1000)
    return ConversionResult(
        backend_name=backend.name,
        output_format=resolved_format,
        content=postprocessor.run(raw, resolved_format, normalize),
        duration_seconds=duration,
    )
