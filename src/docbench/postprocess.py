"""Line-level cleanup helpers for raw backend output."""

from __future__ import annotations

import re
from collections.abc import Iterable

# Diagnostic lines some engines print on stdout alongside the document,
# e.g. "len(pages)=1, 0-0" followed by "0-0" or "1, 2-3".
LENGTH_REPORT_RE = re.compile(r"^len\([^)]+\)=.*")
NUMERIC_RANGE_RE = re.compile(r"^\d+(-\d+)?(,\s*\d+(-\d+)?)*\s*$")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def is_noise_line(line: str) -> bool:
    """Return ``True`` when a line looks like engine diagnostic output.

    The patterns are heuristic. A genuine content line that consists only of
    numeric ranges (or starts with ``len(...)=``) is indistinguishable from
    noise and is treated as noise.
    """
    stripped = line.strip()
    return bool(
        LENGTH_REPORT_RE.match(stripped) or NUMERIC_RANGE_RE.match(stripped)
    )


def filter_noise_lines(text: str) -> str:
    """Drop diagnostic lines, keeping every other line verbatim and in order.

    Parameters
    ----------
    text : str
        Raw multi-line backend output.

    Returns
    -------
    str
        Text without noise lines. A trailing newline in the input is kept.
    """
    if not text:
        return text
    lines = text.split("\n")
    trailing_newline = lines[-1] == ""
    if trailing_newline:
        lines.pop()
    kept = [line for line in lines if not is_noise_line(line)]
    if not kept:
        return ""
    return "\n".join(kept) + ("\n" if trailing_newline else "")


def drop_leading_blank_lines(lines: Iterable[str]) -> list[str]:
    """Remove blank lines that precede the first line with content."""
    result: list[str] = []
    for line in lines:
        if not result and not line.strip():
            continue
        result.append(line)
    return result


def normalize_whitespace(text: str) -> str:
    """Collapse runs of three or more newlines to one blank line and trim.

    Idempotent: ``normalize_whitespace(normalize_whitespace(x))`` equals
    ``normalize_whitespace(x)``.
    """
    return EXCESS_NEWLINES_RE.sub("\n\n", text).strip()
