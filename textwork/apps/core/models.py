from __future__ import annotations

from django.db import models


class TimeStampedMixin(models.Model):
    """Mixin providing created_at and updated_at timestamp fields."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Hashtag(TimeStampedMixin):
    """A hashtag referenced from translated content as ``[[hashtag:N]]``.

    ``name`` keeps the casing of the first time the hashtag was written;
    lookups are case-insensitive.
    """

    name = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return f"#{self.name}"
