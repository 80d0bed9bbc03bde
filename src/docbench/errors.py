"""Error taxonomy shared by backends, the harness and the CLI."""

from __future__ import annotations


class DocbenchError(Exception):
    """Base error for document conversion and comparison failures."""

    exit_code = 1


class InputNotFound(DocbenchError):
    """Raised when the input document does not exist."""


class UnsupportedFormat(DocbenchError):
    """Raised when an output format is unknown or not supported by a backend."""


class BackendUnavailable(DocbenchError):
    """Raised when the engine behind a backend is not installed."""


class ConversionFailed(DocbenchError):
    """Raised when an engine ran but reported a failure."""


class PluginError(DocbenchError):
    """Raised for invalid backend registration or plugin loading."""
