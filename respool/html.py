"""Render a string's style spans as inline HTML-like tags.

Spans come from the pool as ``(tag, start, end)`` with inclusive character
positions and may overlap arbitrarily.  Rendering is greedy: open the span
with the earliest start, but first close every span ending before that
start.  Ties go to the span listed first.  For spans ``[(b, 0, 4), (i, 2, 6)]``
over ``"abcdefg"`` this yields::

    <b>ab<i>cde</b>fg</i>

which is what the platform tools emit, crossed tags included.

A tag index that does not resolve to a string renders with an empty name
(``<>`` / ``</>``), where the platform tools print ``null``.
"""

from __future__ import annotations

import logging
from typing import Callable

from .pool import StyleSpan

log = logging.getLogger(__name__)

# Marks a span's start as opened, or its end as closed
DONE = -1


def render_html(
    raw: str,
    spans: list[StyleSpan],
    tag_name: Callable[[int], str | None],
) -> str:
    """Merge *raw* text with *spans* into a tag-annotated string.

    *spans* is consumed: start and end fields are overwritten with DONE as
    tags are emitted, so pass a private copy.  *tag_name* resolves a tag
    string index to its name.
    """
    out: list[str] = []
    offset = 0

    def name(tag: int) -> str:
        resolved = tag_name(tag)
        if resolved is None:
            log.debug("Style tag %d has no name, rendering empty", tag)
            return ""
        return resolved

    while True:
        nxt: StyleSpan | None = None
        for span in spans:
            if span.start == DONE:
                continue
            if nxt is None or nxt.start > span.start:
                nxt = span

        boundary = nxt.start if nxt is not None else len(raw)

        for span in spans:
            end = span.end
            if end == DONE or end >= boundary:
                continue
            if offset <= end:
                out.append(raw[offset : end + 1])
                offset = end + 1
            span.end = DONE
            out.append(f"</{name(span.tag)}>")

        if offset < boundary:
            out.append(raw[offset:boundary])
            offset = boundary

        if nxt is None:
            break

        out.append(f"<{name(nxt.tag)}>")
        nxt.start = DONE

    return "".join(out)
