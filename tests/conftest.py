"""Shared pytest configuration, marker assignment and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def input_document(tmp_path: Path) -> Path:
    """Create a small stand-in input document."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(b"%PDF-1.4\n% docbench test fixture\n")
    return path
