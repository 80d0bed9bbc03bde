"""Example backend plugin returning text documents unchanged.

Useful as a baseline next to real engines when the input is already
Markdown, HTML or plain text:

    docbench compare notes.md --backend-module examples/passthrough_backend.py
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from docbench.backends.base import resolve_backend_format
from docbench.errors import ConversionFailed


class PassthroughBackend:
    """Read the input file as UTF-8 text."""

    name = "passthrough"
    supported_formats = frozenset({"markdown", "html", "text"})

    def probe(self) -> bool:
        return True

    async def convert(self, input_path: Path, output_format: str) -> str:
        resolve_backend_format(self.name, output_format, self.supported_formats)
        try:
            return await asyncio.to_thread(input_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConversionFailed(f"cannot read {input_path} as text: {exc}") from exc


BACKEND = PassthroughBackend()
