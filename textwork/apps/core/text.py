"""Rich-text helpers: HTML sanitization and plain-text conversion."""

from __future__ import annotations

import re

import nh3
from django.utils.html import strip_tags

# Allowed HTML tags in rendered paragraph bodies
ALLOWED_TAGS = {
    "p",
    "br",
    "strong",
    "em",
    "u",
    "s",
    "ul",
    "ol",
    "li",
    "code",
    "pre",
    "blockquote",
    "a",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
}

# Allowed attributes per tag
ALLOWED_ATTRIBUTES = {
    "a": {"href", "title", "class", "target"},
    "code": {"class"},
    "pre": {"class"},
    "th": {"align"},
    "td": {"align"},
}

# A list item whose line closes the list, without an intervening list of the other kind
_UNORDERED_ITEM_RE = re.compile(r"(?=.*</ul>)(?!.*?<li>.*?</ol>.*?</ul>)<li>")
_ORDERED_ITEM_RE = re.compile(r"(?=.*</ol>)(?!.*?<li>.*?</ul>.*?</ol>)<li>")


def clean_html(html: str) -> str:
    """Sanitize ``html`` with nh3, keeping rich-text formatting and links."""
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        link_rel="noopener noreferrer",
    )


def _mark_unordered_items(text: str) -> str:
    return _UNORDERED_ITEM_RE.sub(lambda m: f"{m.group(0)}• ", text)


def _number_ordered_items(text: str) -> str:
    counter = 0

    def _replace(match: re.Match) -> str:
        nonlocal counter
        counter += 1
        return f"{match.group(0)}{counter}. "

    return _ORDERED_ITEM_RE.sub(_replace, text)


def _add_line_feeds(text: str) -> str:
    """Add a line feed after each list item and a blank line after each paragraph."""
    text = text.replace("</li>", "</li>\n")
    return text.replace("</p>", "</p>\n\n")


def sanitize_text(text: str) -> str:
    """Keep paragraph and list separations visible once tags are stripped.

    Unordered list items get a bullet, ordered list items their number, and
    closing ``</li>``/``</p>`` tags are followed by line feeds.
    """
    return _add_line_feeds(_number_ordered_items(_mark_unordered_items(text)))


def to_plain_text(html: str) -> str:
    """Convert rich-text HTML into plain text preserving its visual structure."""
    if not html:
        return ""
    return strip_tags(sanitize_text(html))
