"""Markup-aware URL linkification for HTML conversion output.

HTML is split into tag and text segments with a generic ``<...>`` scan. Tags
are emitted verbatim; bare URLs inside text segments are rewritten into
anchor elements. This is a lexer, not an HTML parser: comments, CDATA and
malformed markup get no special treatment, and ``<script>``/``<style>``
bodies are text segments like any other.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass

TAG_RE = re.compile(r"<[^>]+>")
_URL_CHARS = r"[^\s<>\"{}|\\^`\[\](){}]+"
URL_RE = re.compile(rf"(https?://{_URL_CHARS}|www\.{_URL_CHARS})", re.IGNORECASE)

ANCHOR_TEMPLATE = '<a href="{href}" target="_blank" rel="noopener noreferrer">{label}</a>'


class SegmentKind(enum.Enum):
    """Classification of an HTML span."""

    TAG = "tag"
    TEXT = "text"


@dataclass(frozen=True)
class Segment:
    """Contiguous span of an HTML string."""

    kind: SegmentKind
    content: str

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()


def iter_segments(html: str) -> Iterator[Segment]:
    """Yield tag and text segments of ``html`` in order.

    Joining the yielded contents reproduces ``html`` exactly. Whitespace-only
    gaps between tags are yielded as text segments too.
    """
    position = 0
    for match in TAG_RE.finditer(html):
        if match.start() > position:
            yield Segment(SegmentKind.TEXT, html[position : match.start()])
        yield Segment(SegmentKind.TAG, match.group(0))
        position = match.end()
    if position < len(html):
        yield Segment(SegmentKind.TEXT, html[position:])


def segment_html(html: str) -> list[Segment]:
    """Return the ordered segment partition of ``html``."""
    return list(iter_segments(html))


def _escape(value: str, *, quote: bool) -> str:
    escaped = value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        escaped = escaped.replace('"', "&quot;")
    return escaped


def build_anchor(url: str) -> str:
    """Render the anchor element that replaces a bare ``url``.

    The ``www.`` prefix test ignores case, matching ``URL_RE``, so
    ``WWW.example.com`` also gets an ``http://`` href.
    """
    href = f"http://{url}" if url.lower().startswith("www.") else url
    return ANCHOR_TEMPLATE.format(
        href=_escape(href, quote=True),
        label=_escape(url, quote=False),
    )


def linkify_text(text: str) -> str:
    """Replace every bare URL in a text fragment with an anchor element."""
    return URL_RE.sub(lambda match: build_anchor(match.group(0)), text)


def linkify_html(html: str) -> str:
    """Linkify bare URLs in HTML text content without touching any tag.

    Parameters
    ----------
    html : str
        HTML document or fragment.

    Returns
    -------
    str
        HTML where URLs in text segments are wrapped in ``<a>`` elements.
        Tags and attribute values are returned unchanged.
    """
    parts: list[str] = []
    for segment in iter_segments(html):
        if segment.kind is SegmentKind.TAG or segment.is_blank:
            parts.append(segment.content)
        else:
            parts.append(linkify_text(segment.content))
    return "".join(parts)
