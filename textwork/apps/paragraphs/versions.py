"""Version entries built from django-simple-history records.

A :class:`VersionEntry` is a read-only snapshot of one save of a record:
how it happened (create/update/destroy) and which fields changed, as
``field -> (old, new)`` pairs. Entries are listed oldest first.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from django.contrib.auth.models import User
    from django.db import models

Change = tuple[Any, Any]

STATE_FIELD = "state"
STATE_PUBLISHED_AT_FIELD = "state_published_at"

# Never shown as part of a changeset
BOOKKEEPING_FIELDS = frozenset({"id", "created_at", "updated_at"})


class VersionEvent(enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"

    @classmethod
    def from_history_type(cls, history_type: str) -> VersionEvent:
        return _HISTORY_TYPES[history_type]


_HISTORY_TYPES = {
    "+": VersionEvent.CREATE,
    "~": VersionEvent.UPDATE,
    "-": VersionEvent.DESTROY,
}


def _as_change(value: Any) -> Change | None:
    """Return ``value`` as an (old, new) pair, or None if it is not one."""
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return value[0], value[1]
    return None


@dataclass(frozen=True)
class VersionEntry:
    """One historical save of a record."""

    event: VersionEvent
    changeset: Mapping[str, Change] = field(default_factory=dict)
    number: int = 0
    created_at: datetime | None = None
    user: User | None = None

    @property
    def state_change(self) -> Change | None:
        return _as_change(self.changeset.get(STATE_FIELD))

    @property
    def state_published_at_change(self) -> Change | None:
        return _as_change(self.changeset.get(STATE_PUBLISHED_AT_FIELD))

    def with_change(self, name: str, change: Change) -> VersionEntry:
        """Return a copy whose changeset has ``name`` set to ``change``."""
        return replace(self, changeset={**self.changeset, name: change})

    def without_change(self, name: str) -> VersionEntry:
        """Return a copy whose changeset no longer mentions ``name``."""
        return replace(self, changeset={k: v for k, v in self.changeset.items() if k != name})


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (dict, list)) and not value)


def _snapshot(record: models.Model, fields: list[models.Field]) -> dict[str, Any]:
    values = {}
    for model_field in fields:
        value = getattr(record, model_field.attname)
        if not _is_empty(value):
            values[model_field.name] = value
    return values


def _tracked_fields(instance: models.Model) -> list[models.Field]:
    return [f for f in instance._meta.concrete_fields if f.name not in BOOKKEEPING_FIELDS]


def version_entries(instance: models.Model) -> list[VersionEntry]:
    """Return the history of ``instance`` as version entries, oldest first.

    ``instance`` must have a ``history = HistoricalRecords()`` manager.
    Creations list every non-empty field as ``(None, value)``, deletions as
    ``(value, None)``; updates carry the fields that differ from the
    previous record.
    """
    records = list(
        instance.history.select_related("history_user").order_by("history_date", "history_id")
    )
    fields = _tracked_fields(instance)

    entries: list[VersionEntry] = []
    previous = None
    for number, record in enumerate(records, start=1):
        event = VersionEvent.from_history_type(record.history_type)
        if event is VersionEvent.CREATE or previous is None:
            changeset = {name: (None, value) for name, value in _snapshot(record, fields).items()}
        elif event is VersionEvent.DESTROY:
            changeset = {name: (value, None) for name, value in _snapshot(record, fields).items()}
        else:
            delta = record.diff_against(previous)
            changeset = {
                change.field: (change.old, change.new)
                for change in delta.changes
                if change.field not in BOOKKEEPING_FIELDS
            }
        entries.append(
            VersionEntry(
                event=event,
                changeset=changeset,
                number=number,
                created_at=record.history_date,
                user=record.history_user,
            )
        )
        previous = record
    return entries
