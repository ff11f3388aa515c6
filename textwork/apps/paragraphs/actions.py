"""Paragraph write operations.

Every save goes through django-simple-history, so each action below adds
one version to the paragraph's history, attributed to ``user``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.utils import timezone

from textwork.apps.core.hashtags import convert_authoring_to_storage
from textwork.apps.paragraphs.models import Paragraph

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)


def _save(paragraph: Paragraph, user: User | None, update_fields: list[str]) -> None:
    paragraph._history_user = user
    paragraph.save(update_fields=[*update_fields, "updated_at"])


def update_paragraph_text(
    paragraph: Paragraph,
    *,
    locale: str,
    title: str | None = None,
    body: str | None = None,
    user: User | None = None,
) -> Paragraph:
    """Set the ``locale`` translation of the title and/or body.

    Hashtags written as ``#Name`` are stored as references; the body also
    gets the participatory text's automatic hashtags appended.
    """
    update_fields = []
    if title is not None:
        paragraph.title = {**(paragraph.title or {}), locale: convert_authoring_to_storage(title)}
        update_fields.append("title")
    if body is not None:
        stored = convert_authoring_to_storage(
            body, extras=paragraph.component.automatic_hashtag_names
        )
        paragraph.body = {**(paragraph.body or {}), locale: stored}
        update_fields.append("body")
    if not update_fields:
        return paragraph

    _save(paragraph, user, update_fields)
    logger.info(
        "Paragraph text updated",
        extra={"paragraph_id": paragraph.pk, "locale": locale, "fields": update_fields},
    )
    return paragraph


def answer_paragraph(
    paragraph: Paragraph,
    state: str,
    *,
    user: User | None = None,
    publish: bool = False,
) -> Paragraph:
    """Give the paragraph a moderation answer.

    Unless ``publish`` is set the answer stays private: its publication date
    is cleared until :func:`publish_answer` is called.

    Raises:
        ValueError: If ``state`` is not a known moderation state.
    """
    if state not in Paragraph.State.values:
        raise ValueError(f"Unknown paragraph state {state!r}")

    paragraph.state = state
    paragraph.state_published_at = timezone.now() if publish else None
    _save(paragraph, user, ["state", "state_published_at"])
    logger.info(
        "Paragraph answered",
        extra={"paragraph_id": paragraph.pk, "state": state, "published": publish},
    )
    return paragraph


def publish_answer(paragraph: Paragraph, *, user: User | None = None) -> Paragraph:
    """Make the paragraph's current moderation answer visible to participants."""
    paragraph.state_published_at = timezone.now()
    _save(paragraph, user, ["state_published_at"])
    logger.info(
        "Paragraph answer published",
        extra={"paragraph_id": paragraph.pk, "state": paragraph.state},
    )
    return paragraph
