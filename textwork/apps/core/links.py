"""Bare-URL link rendering for HTML content."""

from __future__ import annotations

import re

from django.utils.html import escape
from linkify_it import LinkifyIt

# Linkifier instance for URL detection (handles URLs, emails, www links)
_linkify = LinkifyIt()

# Existing anchors and tag attributes are never linkified again
_ANCHOR_RE = re.compile(r"<a\b[^>]*>.*?</a>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")


def _protected_spans(html: str) -> list[tuple[int, int]]:
    spans = [m.span() for m in _ANCHOR_RE.finditer(html)]
    spans.extend(m.span() for m in _TAG_RE.finditer(html))
    return spans


def render_links(html: str) -> str:
    """Convert bare URLs in ``html`` to anchors opening in a new tab.

    URLs that are already inside an anchor, or inside a tag's attributes,
    are left untouched.
    """
    if not html:
        return html or ""
    matches = _linkify.match(html)
    if not matches:
        return html

    protected = _protected_spans(html)
    result = html
    # Process matches in reverse order to preserve string indices
    for match in reversed(matches):
        start, end = match.index, match.last_index
        if any(s < end and start < e for s, e in protected):
            continue
        anchor = (
            f'<a href="{escape(match.url)}" target="_blank" rel="noopener noreferrer">'
            f"{match.text}</a>"
        )
        result = result[:start] + anchor + result[end:]
    return result
