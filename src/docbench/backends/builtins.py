"""Built-in conversion backends."""

from __future__ import annotations

import asyncio
import logging
import re
import sys
from collections.abc import Mapping
from pathlib import Path

from docbench.backends.base import ConversionBackend, resolve_backend_format
from docbench.backends.scripts import module_available, run_python_script
from docbench.errors import BackendUnavailable, ConversionFailed
from docbench.schemas import BackendSettings
from docbench.types import OutputFormat

logger = logging.getLogger(__name__)

SENTENCE_BREAK_RE = re.compile(r"([.!?])\s+")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

DOCLING_SCRIPT = """\
import json
import sys

try:
    from docling.document_converter import DocumentConverter
except ImportError as exc:
    print(f"docling import failed: {exc}", file=sys.stderr)
    sys.exit(3)

source, output_format = sys.argv[1], sys.argv[2]
document = DocumentConverter().convert(source).document

if output_format == "markdown":
    output = document.export_to_markdown()
elif output_format == "html":
    output = document.export_to_html()
elif output_format == "json":
    output = json.dumps(document.export_to_dict(), ensure_ascii=False)
elif output_format == "text":
    output = document.export_to_text()
elif hasattr(document, "export_to_doctags"):
    output = document.export_to_doctags()
else:
    output = document.export_to_document_tokens()

sys.stdout.write(output)
"""

MARKITDOWN_SCRIPT = """\
import sys

try:
    from markitdown import MarkItDown
except ImportError as exc:
    print(f"markitdown import failed: {exc}", file=sys.stderr)
    sys.exit(3)

source, output_format = sys.argv[1], sys.argv[2]
result = MarkItDown().convert(source)

if output_format == "html":
    try:
        import markdown
    except ImportError as exc:
        print(f"markdown is required for HTML output: {exc}", file=sys.stderr)
        sys.exit(3)
    output = markdown.markdown(
        result.text_content, extensions=["extra", "fenced_code"]
    )
else:
    output = result.text_content

sys.stdout.write(output)
"""


def text_to_markdown(text: str) -> str:
    """Turn extracted plain text into loosely paragraphed Markdown.

    Every sentence terminator followed by whitespace starts a new paragraph.
    """
    markdown = EXCESS_NEWLINES_RE.sub("\n\n", text)
    markdown = SENTENCE_BREAK_RE.sub(r"\1\n\n", markdown)
    return markdown.strip()


class PypdfBackend:
    """Extract PDF text in-process with ``pypdf``.

    Notes
    -----
    Only ``text`` and ``markdown`` are produced. Markdown is the extracted
    text with paragraph breaks after sentences; no structure is recovered.
    """

    name = "pypdf"
    supported_formats = frozenset({"text", "markdown"})

    def probe(self) -> bool:
        """Check whether ``pypdf`` is importable."""
        return module_available("pypdf", Path(sys.executable))

    async def convert(self, input_path: Path, output_format: OutputFormat) -> str:
        """Extract text from ``input_path`` in a worker thread."""
        resolved = resolve_backend_format(
            self.name, output_format, self.supported_formats
        )
        try:
            from pypdf import PdfReader
        except Exception as exc:
            raise BackendUnavailable(
                "pypdf is required for this backend. Install extra: .[pdf]"
            ) from exc

        def _extract() -> str:
            try:
                reader = PdfReader(str(input_path))
                pages = [page.extract_text() or "" for page in reader.pages]
            except Exception as exc:
                raise ConversionFailed(
                    f"pypdf could not read {input_path}: {exc}"
                ) from exc
            logger.info("pypdf extracted %d page(s) from %s", len(pages), input_path)
            return "\n\n".join(pages)

        text = await asyncio.to_thread(_extract)
        if resolved == "markdown":
            return text_to_markdown(text)
        return text


class ScriptBackend:
    """Drive a Python conversion engine through a temporary script.

    Parameters
    ----------
    name : str
        Backend name, also used for artifact naming.
    module : str
        Import name probed to decide availability.
    script : str
        Engine script source; receives ``<input> <format>`` as arguments and
        writes the converted document to stdout.
    supported_formats : frozenset[str]
        Formats the script produces.
    format_aliases : Mapping[str, str] | None, optional
        Nearest-native substitutions for unsupported formats.
    settings : BackendSettings | None, optional
        Interpreter and timeout settings.
    """

    def __init__(
        self,
        name: str,
        module: str,
        script: str,
        supported_formats: frozenset[str],
        format_aliases: Mapping[str, str] | None = None,
        settings: BackendSettings | None = None,
    ) -> None:
        self.name = name
        self.module = module
        self.script = script
        self.supported_formats = supported_formats
        self.format_aliases = dict(format_aliases or {})
        self.settings = settings or BackendSettings()

    def probe(self) -> bool:
        """Check whether the engine module is importable by the interpreter."""
        return module_available(self.module, self.settings.python_executable)

    async def convert(self, input_path: Path, output_format: OutputFormat) -> str:
        """Run the engine script and return its raw stdout."""
        resolved = resolve_backend_format(
            self.name, output_format, self.supported_formats, self.format_aliases
        )
        if resolved != output_format:
            logger.info(
                "%s: producing '%s' in place of '%s'", self.name, resolved, output_format
            )
        return await run_python_script(
            self.script,
            [str(input_path), resolved],
            python_executable=self.settings.python_executable,
            timeout_seconds=self.settings.timeout_seconds,
            engine=self.name,
        )


def docling_backend(settings: BackendSettings | None = None) -> ScriptBackend:
    """Create the Docling backend."""
    return ScriptBackend(
        name="docling",
        module="docling",
        script=DOCLING_SCRIPT,
        supported_formats=frozenset({"markdown", "html", "json", "text", "doctags"}),
        settings=settings,
    )


def markitdown_backend(settings: BackendSettings | None = None) -> ScriptBackend:
    """Create the MarkItDown backend.

    MarkItDown only emits Markdown; ``text`` requests receive Markdown and
    HTML is rendered from it with the ``markdown`` package.
    """
    return ScriptBackend(
        name="markitdown",
        module="markitdown",
        script=MARKITDOWN_SCRIPT,
        supported_formats=frozenset({"markdown", "html"}),
        format_aliases={"text": "markdown"},
        settings=settings,
    )


def builtin_backends(settings: BackendSettings | None = None) -> list[ConversionBackend]:
    """Return the built-in backends in their default run order."""
    return [PypdfBackend(), docling_backend(settings), markitdown_backend(settings)]
