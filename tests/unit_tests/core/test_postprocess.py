"""Unit tests for the noise filter and whitespace normalizer."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from docbench.postprocess import (
    drop_leading_blank_lines,
    filter_noise_lines,
    is_noise_line,
    normalize_whitespace,
)

_LINE = st.text(alphabet=st.characters(exclude_characters="\n"), max_size=30)


@pytest.mark.parametrize(
    "line",
    [
        "len(pages)=1, 0-0",
        "len(valid_pages)=1",
        "   len(x)=",
        "0-0",
        "1, 2-3",
        "12",
        "  4-5,6  ",
    ],
)
def test_noise_lines_are_detected(line: str) -> None:
    """Length reports and bare numeric ranges count as noise."""
    assert is_noise_line(line)


@pytest.mark.parametrize(
    "line",
    [
        "Real content",
        "len() = 3",
        "length(pages)=1",
        "1.5",
        "1-2-3",
        "Page 1, 2-3",
        "",
        "   ",
    ],
)
def test_content_lines_are_kept(line: str) -> None:
    """Lines outside the two noise shapes are not noise."""
    assert not is_noise_line(line)


def test_filter_removes_debug_lines_around_content() -> None:
    """Drop both noise shapes and keep the content line with its newline."""
    raw = "len(pages)=1, 0-0\nReal content\n1, 2-3\n"
    assert filter_noise_lines(raw) == "Real content\n"


def test_filter_keeps_original_whitespace_of_kept_lines() -> None:
    """Lines are tested trimmed but emitted verbatim."""
    raw = "  indented  \n0-0\n\tTabbed"
    assert filter_noise_lines(raw) == "  indented  \n\tTabbed"


def test_filter_drops_legitimate_numeric_line() -> None:
    """Best-effort heuristic: a content line shaped like a range is dropped."""
    assert filter_noise_lines("Chapter\n2024\nText") == "Chapter\nText"


def test_filter_all_noise_returns_empty() -> None:
    assert filter_noise_lines("0-0\nlen(a)=1\n") == ""


@given(st.lists(_LINE, max_size=12), st.booleans())
def test_filter_is_identity_without_noise(lines: list[str], trailing: bool) -> None:
    """Text without noise lines passes through unchanged."""
    clean = [line for line in lines if not is_noise_line(line)]
    text = "\n".join(clean) + ("\n" if trailing and clean else "")
    assert filter_noise_lines(text) == text


def test_normalize_collapses_blank_line_runs() -> None:
    assert normalize_whitespace("a\n\n\n\n\nb") == "a\n\nb"


def test_normalize_trims_document() -> None:
    assert normalize_whitespace("\n\n  title\n\n\nbody \n\n") == "title\n\nbody"


def test_normalize_keeps_single_blank_line() -> None:
    assert normalize_whitespace("a\n\nb\nc") == "a\n\nb\nc"


@given(st.text(alphabet=st.sampled_from(["a", " ", "\n", "\t", "\r", "0"])))
def test_normalize_is_idempotent(text: str) -> None:
    """Applying the normalizer twice equals applying it once."""
    once = normalize_whitespace(text)
    assert normalize_whitespace(once) == once


@given(st.text())
def test_normalize_never_leaves_three_newlines(text: str) -> None:
    assert "\n\n\n" not in normalize_whitespace(text)


def test_drop_leading_blank_lines() -> None:
    assert drop_leading_blank_lines(["", "  ", "x", "", "y"]) == ["x", "", "y"]
