"""Display decorator for paragraphs.

``ParagraphPresenter`` wraps a :class:`~textwork.apps.paragraphs.models.Paragraph`
and adds rendering helpers for templates. Attributes it does not define are
read from the wrapped paragraph, so a presenter can stand in for the model.

Usage::

    presenter = ParagraphPresenter(paragraph)
    presenter.title(links=True)       # hashtags rendered as links
    presenter.body(strip_tags=True)   # plain text, bullets and numbering kept
    presenter.versions()              # history without unpublished answers
"""

from __future__ import annotations

import re
from functools import cached_property
from typing import Any

from django.urls import reverse
from django.utils.html import escape, format_html
from django.utils.safestring import mark_safe

from textwork.apps.accounts.presenters import UserGroupPresenter, UserPresenter
from textwork.apps.core.hashtags import render_hashtags
from textwork.apps.core.links import render_links
from textwork.apps.core.text import clean_html, to_plain_text
from textwork.apps.core.translations import handle_locales, translated_attribute
from textwork.apps.paragraphs.models import Paragraph
from textwork.apps.paragraphs.versions import VersionEntry, version_entries
from textwork.apps.paragraphs.visibility import VersionVisibilityFilter

_NON_DIGIT_RE = re.compile(r"\D")


class OfficialAuthorPresenter:
    """Author shown for paragraphs written by the organization."""

    official = True
    name = "Official paragraph"
    nickname = ""

    def __str__(self) -> str:
        return self.name


class ParagraphPresenter:
    """Decorates a paragraph for display."""

    def __init__(
        self,
        paragraph: Paragraph | None,
        *,
        version_filter: VersionVisibilityFilter | None = None,
    ):
        self._paragraph = paragraph
        self.version_filter = version_filter or VersionVisibilityFilter()
        self._versions: list[VersionEntry] | None = None

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes the presenter itself does not define
        paragraph = self.__dict__.get("_paragraph")
        if paragraph is None:
            raise AttributeError(name)
        return getattr(paragraph, name)

    @property
    def paragraph(self) -> Paragraph | None:
        return self._paragraph

    @cached_property
    def author(self):
        """Official marker, or the first coauthor (their group when they posted as one)."""
        if self.paragraph.official:
            return OfficialAuthorPresenter()
        coauthorship = self.paragraph.coauthorships.select_related("author", "user_group").first()
        if coauthorship is None:
            return None
        if coauthorship.user_group is not None:
            return UserGroupPresenter(coauthorship.user_group)
        return UserPresenter(coauthorship.author)

    @property
    def paragraph_path(self) -> str:
        return reverse(
            "paragraph-detail",
            kwargs={"component_slug": self.paragraph.component.slug, "pk": self.paragraph.pk},
        )

    @property
    def display_mention(self) -> str:
        return format_html('<a href="{}">{}</a>', self.paragraph_path, self.title(html_escape=True))

    def title(
        self,
        links: bool = False,
        extras: bool = True,
        html_escape: bool = False,
        all_locales: bool = False,
    ):
        """Render the paragraph title.

        Args:
            links: Render hashtags as links.
            extras: Include automatically appended hashtags.
            html_escape: Escape the title before rendering hashtags.
            all_locales: Return a dict with every translation.

        Returns a SafeString when ``html_escape`` or ``links`` is set (the title
        is escaped first), otherwise a plain string left to autoescaping.
        Per locale when ``all_locales``; None without a paragraph.
        """
        if not self.paragraph:
            return None

        def _render(content: str):
            if not (html_escape or links):
                return render_hashtags(content, links=False, extras=extras)
            content = escape(content)
            rendered = render_hashtags(content, links=links, extras=extras)
            return mark_safe(rendered)  # noqa: S308 - title escaped, hashtags built by format_html

        return handle_locales(self.paragraph.title, all_locales, _render)

    def title_if_enabled(self) -> str | None:
        """Return the title, or "" when numeric titles are hidden for this text."""
        if not self.paragraph:
            return None
        title = translated_attribute(self.paragraph.title)
        hide_titles = self.paragraph.component.hide_participatory_text_titles_enabled
        if hide_titles and not _NON_DIGIT_RE.search(title):
            return ""
        return title

    def id_and_title(
        self, links: bool = False, extras: bool = True, html_escape: bool = False
    ) -> str:
        title = self.title(links=links, extras=extras, html_escape=html_escape)
        return format_html("#{} - {}", self.paragraph.pk, title)

    def body(
        self,
        links: bool = False,
        extras: bool = True,
        strip_tags: bool = False,
        all_locales: bool = False,
    ):
        """Render the paragraph body.

        Args:
            links: Render hashtags and bare URLs as links.
            extras: Include automatically appended hashtags.
            strip_tags: Convert to plain text, keeping list markers and line breaks.
            all_locales: Return a dict with every translation.
        """
        if not self.paragraph:
            return None

        def _render(content: str):
            if strip_tags:
                content = to_plain_text(content)
            content = render_hashtags(content, links=links, extras=extras)
            if links:
                content = render_links(content)
            return mark_safe(clean_html(content))  # noqa: S308 - sanitized by nh3

        return handle_locales(self.paragraph.body, all_locales, _render)

    def versions(self) -> list[VersionEntry]:
        """Return the paragraph versions, hiding answers that are not published."""
        if self._versions is None:
            self._versions = self.version_filter(version_entries(self.paragraph))
        return self._versions

    @property
    def versions_count(self) -> int:
        return len(self.versions())
