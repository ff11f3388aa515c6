"""Participatory text domain models."""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.urls import reverse
from simple_history.models import HistoricalRecords

from textwork.apps.accounts.models import UserGroup
from textwork.apps.core.models import TimeStampedMixin
from textwork.apps.core.translations import translated_attribute


class ParticipatoryText(TimeStampedMixin):
    """A document split into paragraphs that participants comment and amend."""

    title = models.JSONField(default=dict, blank=True)
    slug = models.SlugField(max_length=200, unique=True)
    hide_participatory_text_titles_enabled = models.BooleanField(
        default=False,
        help_text="Hide paragraph titles that are only a number (imported articles)",
    )
    automatic_hashtags = models.CharField(
        max_length=500,
        blank=True,
        help_text='Hashtags appended to every paragraph body, e.g. "#budget #2024"',
    )

    history = HistoricalRecords()

    class Meta:
        ordering = ["slug"]

    def __str__(self) -> str:
        return translated_attribute(self.title) or self.slug

    @property
    def automatic_hashtag_names(self) -> list[str]:
        return [tag.lstrip("#") for tag in self.automatic_hashtags.split() if tag.lstrip("#")]


class Paragraph(TimeStampedMixin):
    """One section, subsection or article of a participatory text."""

    class State(models.TextChoices):
        """Moderation answer given to the paragraph."""

        NOT_ANSWERED = "", "Not answered"
        EVALUATING = "evaluating", "Evaluating"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"
        WITHDRAWN = "withdrawn", "Withdrawn"

    class Level(models.TextChoices):
        """Structural level inside the participatory text."""

        SECTION = "section", "Section"
        SUBSECTION = "subsection", "Subsection"
        ARTICLE = "article", "Article"

    component = models.ForeignKey(
        ParticipatoryText,
        on_delete=models.CASCADE,
        related_name="paragraphs",
    )
    title = models.JSONField(default=dict, blank=True)
    body = models.JSONField(default=dict, blank=True)
    position = models.PositiveIntegerField(default=0)
    participatory_text_level = models.CharField(
        max_length=20,
        choices=Level.choices,
        default=Level.ARTICLE,
    )
    state = models.CharField(
        max_length=20,
        choices=State.choices,
        default=State.NOT_ANSWERED,
        blank=True,
        db_index=True,
    )
    state_published_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the moderation answer became visible to participants",
    )
    official = models.BooleanField(
        default=False,
        help_text="Authored by the organization rather than participants",
    )

    history = HistoricalRecords()

    class Meta:
        ordering = ["position", "pk"]

    def __str__(self) -> str:
        return translated_attribute(self.title) or f"Paragraph {self.pk}"

    def get_absolute_url(self) -> str:
        return reverse(
            "paragraph-detail",
            kwargs={"component_slug": self.component.slug, "pk": self.pk},
        )

    @property
    def published_state(self) -> bool:
        return self.state_published_at is not None


class Coauthorship(models.Model):
    """Attributes a paragraph to a participant, optionally on behalf of a group."""

    paragraph = models.ForeignKey(
        Paragraph,
        on_delete=models.CASCADE,
        related_name="coauthorships",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="paragraph_coauthorships",
    )
    user_group = models.ForeignKey(
        UserGroup,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="paragraph_coauthorships",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["paragraph", "author"], name="unique_paragraph_coauthor"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.author} on {self.paragraph}"
