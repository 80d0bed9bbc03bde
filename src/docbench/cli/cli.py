#!/usr/bin/env python3
"""
docbench.cli.cli

Typer-based CLI for converting documents and comparing conversion backends.

Engines are optional: install only the extras for the backends you want to
benchmark. Backends whose engine is missing are reported and skipped.

Examples
--------
Install core + CLI + the in-process PDF backend:

    uv pip install -e ".[cli,pdf]"

Install every built-in engine:

    uv pip install -e ".[cli,pdf,docling,markitdown]"

Compare all backends on one file:

    docbench compare sample.pdf --format html
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer
from pydantic import ValidationError

from docbench.errors import DocbenchError, InputNotFound
from docbench.schemas import BackendSettings

app = typer.Typer(
    name="docbench",
    help="Convert documents and compare conversion backends side by side.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

FORMAT_HELP = "Output format: markdown (md), html, json, text, doctags."
BACKEND_MODULE_HELP = "Backend plugin module import path or file path (repeatable)."
PYTHON_HELP = "Python interpreter used by subprocess backends."
TIMEOUT_HELP = "Per-backend timeout in seconds."
ENGINE_DISTRIBUTIONS = ["pypdf", "docling", "markitdown", "markdown"]


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error on stderr and return the exit code."""
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _build_settings(python: Path | None, timeout: float | None) -> BackendSettings:
    """Build backend settings from CLI overrides."""
    overrides: dict[str, object] = {}
    if python is not None:
        overrides["python_executable"] = python
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    try:
        return BackendSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid backend settings: {exc}") from exc


def _require_input(input_path: Path) -> None:
    if not input_path.is_file():
        raise InputNotFound(f"Input file not found at {input_path}")


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="DOCBENCH_LOG_LEVEL",
        help="Logging level for diagnostics written to stderr.",
    ),
) -> None:
    """Initialize shared CLI state and logging."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level '{log_level}'.")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Document to convert."),
    output_format: str = typer.Option("markdown", "--format", "-f", help=FORMAT_HELP),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress progress messages."
    ),
    backend: str = typer.Option("docling", "--backend", "-b", help="Backend to use."),
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
    python: Path | None = typer.Option(
        None, "--python", envvar="DOCBENCH_PYTHON", help=PYTHON_HELP
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", envvar="DOCBENCH_TIMEOUT", help=TIMEOUT_HELP
    ),
) -> None:
    """Convert one document and print the normalized result to stdout."""
    debug: bool = bool(ctx.obj.get("debug", False))
    settings = _build_settings(python, timeout)

    try:
        from docbench.application.use_cases import convert_document
        from docbench.backends.registry import create_default_registry
        from docbench.schemas import parse_output_format

        resolved_format = parse_output_format(output_format)
        _require_input(input_path)
        registry = create_default_registry(
            extra_modules=backend_module, settings=settings
        )
        selected = registry.get(backend)
        if not quiet:
            typer.echo(
                f"Converting {input_path.name} with {selected.name} ({resolved_format})...",
                err=True,
            )
        result = convert_document(input_path, resolved_format, selected)
    except DocbenchError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    if not quiet and result.duration_seconds is not None:
        typer.echo(f"✓ Completed in {result.duration_seconds * 1000:.0f}ms", err=True)
    typer.echo(result.content)


@app.command("compare")
def compare_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Document to convert."),
    output_format: str = typer.Option("markdown", "--format", "-f", help=FORMAT_HELP),
    output_dir: Path = typer.Option(
        Path("."), "--output-dir", "-o", help="Directory for output_<backend>.<ext> files."
    ),
    backends: list[str] | None = typer.Option(
        None, "--backend", "-b", help="Backend to run (repeatable). Default: all."
    ),
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
    python: Path | None = typer.Option(
        None, "--python", envvar="DOCBENCH_PYTHON", help=PYTHON_HELP
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", envvar="DOCBENCH_TIMEOUT", help=TIMEOUT_HELP
    ),
    preview_chars: int = typer.Option(
        300, "--preview-chars", min=0, help="Characters shown per preview."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress progress messages and previews."
    ),
) -> None:
    """Run every backend on one document and save normalized outputs."""
    debug: bool = bool(ctx.obj.get("debug", False))
    settings = _build_settings(python, timeout)
    status = (lambda _message: None) if quiet else typer.echo

    try:
        from docbench.application.options import HarnessOptions
        from docbench.application.use_cases import run_comparison
        from docbench.backends.registry import create_default_registry
        from docbench.schemas import parse_output_format

        resolved_format = parse_output_format(output_format)
        _require_input(input_path)
        registry = create_default_registry(
            extra_modules=backend_module, settings=settings
        )
        selected = registry.select(backends)
        status("=" * 60)
        status(f"Testing {input_path.name} ({resolved_format})")
        status("=" * 60)
        report = run_comparison(
            input_path,
            selected,
            options=HarnessOptions(
                output_format=resolved_format,
                output_dir=output_dir,
                preview_chars=preview_chars,
            ),
            status=status,
        )
    except DocbenchError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    typer.echo(
        f"Completed: {len(report.artifacts)} saved, {len(report.failed())} failed."
    )


@app.command("doctor")
def doctor_cmd(
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
    python: Path | None = typer.Option(
        None, "--python", envvar="DOCBENCH_PYTHON", help=PYTHON_HELP
    ),
) -> None:
    """Print engine versions and backend availability."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for distribution in ENGINE_DISTRIBUTIONS:
        try:
            version = metadata.version(distribution)
            typer.echo(f"{distribution}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{distribution}: <not installed>")

    settings = _build_settings(python, None)
    try:
        from docbench.backends.registry import create_default_registry

        registry = create_default_registry(
            extra_modules=backend_module, settings=settings
        )
    except DocbenchError as exc:
        typer.echo(f"backends: <unavailable: {exc}>")
        return

    for name in registry.names():
        available = registry.get(name).probe()
        typer.echo(f"backend {name}: {'available' if available else 'missing'}")


if __name__ == "__main__":
    app()
