"""Import a markdown document as the paragraphs of a participatory text.

Top-level headings become ``section`` paragraphs, deeper headings
``subsection`` paragraphs, and every other top-level block (paragraph,
list, quote, table, code) becomes an ``article``. Articles are titled with
their sequential number, which is why participatory texts can hide numeric
titles when displayed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import transaction
from markdown_it import MarkdownIt
from markdown_it.token import Token

from textwork.apps.core.hashtags import convert_authoring_to_storage
from textwork.apps.core.text import clean_html
from textwork.apps.paragraphs.models import Paragraph, ParticipatoryText

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

# CommonMark parser with tables and strikethrough; no raw HTML passthrough
_md = MarkdownIt("commonmark", {"html": False, "breaks": False}).enable(["table", "strikethrough"])

# Standalone blocks that are not worth an article of their own
_SKIPPED_BLOCKS = {"hr"}


def _top_level_blocks(tokens: list[Token]) -> list[list[Token]]:
    """Group a flat token stream into its top-level blocks."""
    blocks: list[list[Token]] = []
    current: list[Token] = []
    depth = 0
    for token in tokens:
        current.append(token)
        depth += token.nesting
        if depth == 0:
            blocks.append(current)
            current = []
    return blocks


def _build_paragraphs(component: ParticipatoryText, markdown_text: str, locale: str):
    article_number = 0
    position = 0
    extras = component.automatic_hashtag_names

    for block in _top_level_blocks(_md.parse(markdown_text)):
        first = block[0]
        if first.type in _SKIPPED_BLOCKS:
            continue

        if first.type == "heading_open":
            text = "".join(t.content for t in block if t.type == "inline").strip()
            level = Paragraph.Level.SECTION if first.tag == "h1" else Paragraph.Level.SUBSECTION
            title, body = text, text
        else:
            article_number += 1
            level = Paragraph.Level.ARTICLE
            title = str(article_number)
            body = clean_html(_md.renderer.render(block, _md.options, {})).strip()

        yield Paragraph(
            component=component,
            title={locale: convert_authoring_to_storage(title)},
            body={locale: convert_authoring_to_storage(body, extras=extras)},
            position=position,
            participatory_text_level=level,
        )
        position += 1


def import_markdown(
    component: ParticipatoryText,
    markdown_text: str,
    *,
    locale: str = "en",
    user: User | None = None,
) -> list[Paragraph]:
    """Replace the paragraphs of ``component`` with the blocks of ``markdown_text``.

    Returns the created paragraphs in document order.
    """
    with transaction.atomic():
        removed, _ = component.paragraphs.all().delete()
        created = []
        for paragraph in _build_paragraphs(component, markdown_text or "", locale):
            paragraph._history_user = user
            paragraph.save()
            created.append(paragraph)

    logger.info(
        "Participatory text imported",
        extra={
            "component": component.slug,
            "paragraphs_created": len(created),
            "objects_removed": removed,
        },
    )
    return created
