"""Hide unpublished moderation answers from a paragraph's version history.

A moderation answer (``state``) can be given long before it is published
(``state_published_at``). Until then participants must not learn about it
from the history, so the ``state`` change is held back and shown on the
version where the answer became public instead::

    1. create     title: None -> "X"
    2. update     state: "" -> "rejected"          <- held back
    3. update     state_published_at: None -> now  <- state: "" -> "rejected" shown here

The traversal is a fold over the entries with a small immutable
accumulator, so the filter itself holds no state between calls.

Filtering an already filtered history is not always a no-op. An update that
only sets ``state_published_at`` has an empty diff and is dropped, yet it
made later answers visible; a second pass no longer sees the publication
and holds those answers back. Filter raw history only, and only once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from textwork.apps.paragraphs.diff import diff_is_empty as default_diff_is_empty
from textwork.apps.paragraphs.versions import STATE_FIELD, Change, VersionEntry, VersionEvent

logger = logging.getLogger(__name__)


def _is_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (dict, list, tuple, set)):
        return bool(value)
    return value is not None and value is not False


@dataclass(frozen=True)
class Visibility:
    """Traversal state: is the moderation answer public, and what is held back."""

    visible: bool = False
    pending_state: Change | None = None


def step(acc: Visibility, entry: VersionEntry) -> tuple[Visibility, VersionEntry]:
    """Advance the traversal by one entry, returning the reshaped entry."""
    visible = acc.visible
    published = entry.state_published_at_change
    if published is not None:
        visible = _is_present(published[1])

    if visible:
        if acc.pending_state is not None:
            entry = entry.with_change(STATE_FIELD, acc.pending_state)
        return Visibility(visible=True), entry

    state = entry.state_change
    if state is not None:
        return Visibility(visible=False, pending_state=state), entry.without_change(STATE_FIELD)
    return Visibility(visible=False, pending_state=acc.pending_state), entry


class VersionVisibilityFilter:
    """Select and reshape the version entries a participant may see.

    Args:
        diff_is_empty: Tells whether an entry changed anything visible.
            Updates with an empty diff are dropped; creations and deletions
            are always kept.
    """

    def __init__(self, diff_is_empty: Callable[[VersionEntry], bool] | None = None):
        self.diff_is_empty = diff_is_empty or default_diff_is_empty

    def fold(self, entries: Iterable[VersionEntry]) -> tuple[list[VersionEntry], Visibility]:
        """Run the traversal, returning the kept entries and the final state."""
        acc = Visibility()
        kept: list[VersionEntry] = []
        for entry in entries:
            acc, entry = step(acc, entry)
            if entry.event is VersionEvent.UPDATE and self.diff_is_empty(entry):
                continue
            kept.append(entry)
        return kept, acc

    def filter(self, entries: Iterable[VersionEntry]) -> list[VersionEntry]:
        entries = list(entries)
        kept, final = self.fold(entries)
        if final.pending_state is not None:
            logger.debug(
                "Moderation answer withheld from version history",
                extra={"pending_state": final.pending_state[1]},
            )
        logger.debug(
            "Filtered version history",
            extra={"versions_total": len(entries), "versions_visible": len(kept)},
        )
        return kept

    __call__ = filter
