"""Backend protocol for document conversion engines."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, cast, runtime_checkable

from docbench.errors import UnsupportedFormat
from docbench.types import OutputFormat


@runtime_checkable
class ConversionBackend(Protocol):
    """Protocol implemented by conversion backends."""

    name: str
    supported_formats: frozenset[str]

    def probe(self) -> bool:
        """Check whether the underlying engine is available.

        Returns
        -------
        bool
            ``True`` if the engine can be invoked. Implementations must not
            raise.
        """

    async def convert(self, input_path: Path, output_format: OutputFormat) -> str:
        """Convert a document and return the raw engine output.

        Parameters
        ----------
        input_path : Path
            Source document.
        output_format : OutputFormat
            Requested output format.

        Returns
        -------
        str
            Unnormalized output produced by the engine.

        Raises
        ------
        BackendUnavailable
            If the engine is not installed.
        ConversionFailed
            If the engine ran but reported an error.
        UnsupportedFormat
            If the backend cannot produce the requested format.
        """


def resolve_backend_format(
    backend_name: str,
    output_format: OutputFormat,
    supported_formats: frozenset[str],
    format_aliases: Mapping[str, str] | None = None,
) -> OutputFormat:
    """Map a requested format onto one the backend produces natively.

    Parameters
    ----------
    backend_name : str
        Backend name used in error messages.
    output_format : OutputFormat
        Requested format.
    supported_formats : frozenset[str]
        Formats the backend produces.
    format_aliases : Mapping[str, str] | None, optional
        Nearest-native substitutions, e.g. ``{"text": "markdown"}``.

    Returns
    -------
    OutputFormat
        Format the backend should produce.

    Raises
    ------
    UnsupportedFormat
        If neither the format nor its substitute is supported.
    """
    resolved = (format_aliases or {}).get(output_format, output_format)
    if resolved not in supported_formats:
        raise UnsupportedFormat(
            f"Backend '{backend_name}' cannot produce '{output_format}'. "
            f"Supported formats: {', '.join(sorted(supported_formats))}"
        )
    return cast(OutputFormat, resolved)
