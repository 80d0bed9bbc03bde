#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/docbench"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    engines = [
        "import pypdf",
        "from pypdf",
        "import docling",
        "from docling",
        "import markitdown",
        "from markitdown",
    ]
    # Engines are only imported lazily inside backends or inside engine scripts.
    for path in PACKAGE.rglob("*.py"):
        if path.parent.name == "backends":
            continue
        _assert_no_imports(path, engines)

    for layer in ("application", "infrastructure", "backends"):
        for path in (PACKAGE / layer).glob("*.py"):
            _assert_no_imports(path, ["import typer", "from typer"])

    for path in [PACKAGE / "linkify.py", PACKAGE / "postprocess.py"]:
        _assert_no_imports(path, ["from docbench.application", "from docbench.backends"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
