"""Hashtag parsing and rendering for translated content.

Link formats:
- Authoring: ``#Name`` as typed by participants
- Storage: ``[[hashtag:N]]``, or ``[[hashtag:N:extra]]`` for hashtags that
  were appended automatically from the participatory text's configuration

Public API:
- convert_authoring_to_storage(): on save
- render_hashtags(): in presenters, before display
- hashtag_search_url(): link target for a hashtag
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from urllib.parse import quote

from django.conf import settings
from django.utils.html import format_html

from textwork.apps.core.models import Hashtag

logger = logging.getLogger(__name__)

# A hashtag starts with a letter or digit; underscores are allowed after that.
# It must not be glued to a preceding word ("foo#bar") or be an HTML entity.
_AUTHORING_RE = re.compile(r"(?<![\w&#/])#([^\W_]\w*)")
_STORAGE_RE = re.compile(r"\[\[hashtag:(\d+)(:extra)?\]\]")
# Tags and their attributes (href="#intro") never hold hashtags
_TAG_RE = re.compile(r"<[^>]+>")


def hashtag_search_url(name: str) -> str:
    """Return the search URL listing content tagged with ``name``."""
    return f"{settings.HASHTAG_SEARCH_URL}?term={quote('#' + name)}"


def _authoring_matches(text: str) -> list[re.Match]:
    """Return the ``#Name`` matches that sit in text, outside any HTML tag."""
    tags = [m.span() for m in _TAG_RE.finditer(text)]
    return [
        m for m in _AUTHORING_RE.finditer(text) if not any(s <= m.start() < e for s, e in tags)
    ]


def _get_or_create(names: Iterable[str]) -> dict[str, Hashtag]:
    """Resolve hashtag names case-insensitively, creating missing ones."""
    by_key: dict[str, Hashtag] = {}
    for name in names:
        key = name.lower()
        if key in by_key:
            continue
        hashtag = Hashtag.objects.filter(name__iexact=name).first()
        if hashtag is None:
            hashtag = Hashtag.objects.create(name=name)
        by_key[key] = hashtag
    return by_key


def convert_authoring_to_storage(text: str, extras: Iterable[str] = ()) -> str:
    """Replace ``#Name`` with ``[[hashtag:N]]`` and append extra hashtags.

    ``extras`` are hashtag names (with or without the leading ``#``) that
    are appended at the end of the text in ``[[hashtag:N:extra]]`` form,
    unless the text already references them.
    """
    text = text or ""
    extra_names = [name.lstrip("#") for name in extras if name.lstrip("#")]
    matches = _authoring_matches(text)
    names = [m.group(1) for m in matches]
    if not names and not extra_names:
        return text

    by_key = _get_or_create([*names, *extra_names])
    result = text
    for match in reversed(matches):
        hashtag = by_key[match.group(1).lower()]
        result = f"{result[: match.start()]}[[hashtag:{hashtag.pk}]]{result[match.end() :]}"

    referenced = {int(pk) for pk, _ in _STORAGE_RE.findall(result)}
    appended = []
    for name in extra_names:
        hashtag = by_key[name.lower()]
        if hashtag.pk not in referenced:
            referenced.add(hashtag.pk)
            appended.append(f"[[hashtag:{hashtag.pk}:extra]]")
    if appended:
        result = f"{result} {' '.join(appended)}" if result else " ".join(appended)
    return result


def render_hashtags(text: str, *, links: bool = True, extras: bool = True) -> str:
    """Render ``[[hashtag:N]]`` references in ``text``.

    Args:
        text: Content in storage format.
        links: Render each hashtag as a link to the hashtag search.
        extras: Keep automatically appended hashtags; when False they are
            removed from the output.

    Unknown hashtag ids render as an empty string. The returned string is
    not marked safe; callers decide how it is escaped or sanitized.
    """
    if not text:
        return text or ""
    matches = list(_STORAGE_RE.finditer(text))
    if not matches:
        return text

    ids = {int(m.group(1)) for m in matches}
    by_id = {h.pk: h for h in Hashtag.objects.filter(pk__in=ids)}
    missing = ids - by_id.keys()
    if missing:
        logger.warning(
            "Unknown hashtags referenced in content",
            extra={"hashtag_ids": sorted(missing)},
        )

    result = text
    dropped_extra = False
    for match in reversed(matches):
        hashtag = by_id.get(int(match.group(1)))
        is_extra = bool(match.group(2))
        if hashtag is None or (is_extra and not extras):
            dropped_extra = dropped_extra or is_extra
            replacement = ""
        elif links:
            replacement = format_html(
                '<a class="hashtag-mention" href="{}">#{}</a>',
                hashtag_search_url(hashtag.name),
                hashtag.name,
            )
        else:
            replacement = f"#{hashtag.name}"
        result = result[: match.start()] + replacement + result[match.end() :]
    return result.rstrip() if dropped_extra else result
