"""Compare all installed backends on a document from Python.

Usage:
    python examples/compare_sample.py sample.pdf [html]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from docbench import compare_file


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    input_path = Path(sys.argv[1] if len(sys.argv) > 1 else "sample.pdf")
    output_format = sys.argv[2] if len(sys.argv) > 2 else "markdown"

    report = compare_file(input_path, output_format=output_format)
    for name, result in report.results.items():
        took = f"{result.duration_seconds:.2f}s" if result.duration_seconds else "-"
        state = "ok" if result.succeeded else result.error
        print(f"{name:<12} {took:>8}  {state}")


if __name__ == "__main__":
    main()
