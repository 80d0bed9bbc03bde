from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

import docbench.backends.builtins as builtins_module
from docbench.backends.base import ConversionBackend, resolve_backend_format
from docbench.backends.builtins import (
    DOCLING_SCRIPT,
    MARKITDOWN_SCRIPT,
    PypdfBackend,
    builtin_backends,
    docling_backend,
    markitdown_backend,
    text_to_markdown,
)
from docbench.errors import UnsupportedFormat
from docbench.schemas import BackendSettings


def test_builtins_satisfy_backend_protocol() -> None:
    for backend in builtin_backends():
        assert isinstance(backend, ConversionBackend)


def test_text_to_markdown_breaks_after_sentences() -> None:
    text = "First sentence. Second one!\n\n\n\nThird?  Done"
    assert text_to_markdown(text) == "First sentence.\n\nSecond one!\n\nThird?\n\nDone"


def test_text_to_markdown_keeps_dash_text() -> None:
    text = "Intro\n\n-- 1 of 2 --"
    assert text_to_markdown(text) == "Intro\n\n-- 1 of 2 --"


def test_docling_json_is_emitted_on_one_line() -> None:
    """Indented JSON would put bare integers on their own lines."""
    assert "json.dumps(document.export_to_dict(), ensure_ascii=False)" in DOCLING_SCRIPT
    assert "indent=" not in DOCLING_SCRIPT


def test_resolve_backend_format_uses_aliases() -> None:
    resolved = resolve_backend_format(
        "engine", "text", frozenset({"markdown"}), {"text": "markdown"}
    )
    assert resolved == "markdown"


def test_resolve_backend_format_rejects_unsupported() -> None:
    with pytest.raises(UnsupportedFormat, match="Supported formats: markdown, text"):
        resolve_backend_format("pypdf", "html", frozenset({"text", "markdown"}))


def test_pypdf_rejects_html_before_reading(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormat):
        asyncio.run(PypdfBackend().convert(tmp_path / "missing.pdf", "html"))


def test_docling_supports_every_format() -> None:
    assert docling_backend().supported_formats == frozenset(
        {"markdown", "html", "json", "text", "doctags"}
    )


def test_scripts_signal_missing_engine_with_exit_code_three() -> None:
    assert "sys.exit(3)" in DOCLING_SCRIPT
    assert "sys.exit(3)" in MARKITDOWN_SCRIPT


def test_script_backend_probe_uses_configured_interpreter(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    seen: list[tuple[str, Path]] = []

    def _fake_available(module: str, python_executable: Path) -> bool:
        seen.append((module, python_executable))
        return False

    monkeypatch.setattr(builtins_module, "module_available", _fake_available)
    settings = BackendSettings(python_executable=tmp_path / "python")
    assert markitdown_backend(settings).probe() is False
    assert seen == [("markitdown", tmp_path / "python")]


def test_script_backend_passes_input_and_resolved_format(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    calls: list[dict[str, object]] = []

    async def _fake_run(source: str, args: list[str], **kwargs: object) -> str:
        calls.append({"source": source, "args": args, **kwargs})
        return "# converted"

    monkeypatch.setattr(builtins_module, "run_python_script", _fake_run)
    settings = BackendSettings(python_executable=tmp_path / "python", timeout_seconds=7)
    backend = markitdown_backend(settings)
    document = tmp_path / "in.pdf"

    output = asyncio.run(backend.convert(document, "text"))

    assert output == "# converted"
    assert calls == [
        {
            "source": MARKITDOWN_SCRIPT,
            "args": [str(document), "markdown"],
            "python_executable": tmp_path / "python",
            "timeout_seconds": 7.0,
            "engine": "markitdown",
        }
    ]


def test_markitdown_rejects_json(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormat, match="markitdown"):
        asyncio.run(markitdown_backend().convert(tmp_path / "in.pdf", "json"))
