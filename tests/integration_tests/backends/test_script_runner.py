"""Integration tests running engine scripts in a real subprocess."""

from __future__ import annotations

import asyncio
import sys
import tempfile
from pathlib import Path

import pytest

from docbench.backends.builtins import PypdfBackend
from docbench.backends.scripts import module_available, run_python_script
from docbench.errors import BackendUnavailable, ConversionFailed

PYTHON = Path(sys.executable)


def _run(source: str, args: list[str] | None = None, timeout: float = 30.0) -> str:
    return asyncio.run(
        run_python_script(
            source,
            args or [],
            python_executable=PYTHON,
            timeout_seconds=timeout,
            engine="probe",
        )
    )


def _leftover_scripts() -> set[Path]:
    return set(Path(tempfile.gettempdir()).glob("docbench_probe_*.py"))


def test_stdout_is_returned_as_utf8() -> None:
    source = "import sys\nsys.stdout.write('héllo ' + ' '.join(sys.argv[1:]))\n"
    assert _run(source, ["a", "b"]) == "héllo a b"


def test_exit_code_three_means_engine_missing() -> None:
    source = "import sys\nprint('no engine', file=sys.stderr)\nsys.exit(3)\n"
    with pytest.raises(BackendUnavailable, match="no engine"):
        _run(source)


def test_other_failures_carry_stderr_tail() -> None:
    source = "raise ValueError('bad document')\n"
    with pytest.raises(ConversionFailed, match="bad document"):
        _run(source)


def test_timeout_kills_the_script_and_removes_it() -> None:
    before = _leftover_scripts()
    source = "import time\ntime.sleep(30)\n"
    with pytest.raises(ConversionFailed, match="did not finish"):
        _run(source, timeout=0.5)
    assert _leftover_scripts() == before


def test_script_file_is_removed_on_success_and_failure() -> None:
    before = _leftover_scripts()
    _run("print('ok')\n")
    with pytest.raises(ConversionFailed):
        _run("raise SystemExit(1)\n")
    assert _leftover_scripts() == before


def test_missing_interpreter_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(BackendUnavailable, match="Cannot start"):
        asyncio.run(
            run_python_script(
                "print('x')\n",
                [],
                python_executable=tmp_path / "no-python",
                timeout_seconds=5,
                engine="probe",
            )
        )


def test_module_available_in_current_interpreter() -> None:
    assert module_available("json", PYTHON)
    assert not module_available("docbench_definitely_missing_module", PYTHON)


def test_module_available_never_raises_for_bad_interpreter(tmp_path: Path) -> None:
    assert not module_available("json", tmp_path / "no-python")


def test_pypdf_extracts_blank_page(tmp_path: Path) -> None:
    pypdf = pytest.importorskip("pypdf")
    writer = pypdf.PdfWriter()
    writer.add_blank_page(width=200, height=200)
    document = tmp_path / "blank.pdf"
    with document.open("wb") as handle:
        writer.write(handle)

    backend = PypdfBackend()
    assert backend.probe()
    assert asyncio.run(backend.convert(document, "text")).strip() == ""


def test_pypdf_rejects_non_pdf(tmp_path: Path) -> None:
    pytest.importorskip("pypdf")
    document = tmp_path / "notes.pdf"
    document.write_text("not a pdf", encoding="utf-8")
    with pytest.raises(ConversionFailed, match="pypdf could not read"):
        asyncio.run(PypdfBackend().convert(document, "markdown"))
