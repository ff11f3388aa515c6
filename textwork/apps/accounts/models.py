from __future__ import annotations

from django.db import models

from textwork.apps.core.models import TimeStampedMixin


class UserGroup(TimeStampedMixin):
    """A group of participants that can author paragraphs together."""

    name = models.CharField(max_length=200)
    nickname = models.SlugField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
