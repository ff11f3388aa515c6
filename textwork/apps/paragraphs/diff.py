"""User-visible differences between paragraph versions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from django.conf import settings

from textwork.apps.core.translations import MACHINE_TRANSLATIONS_KEY
from textwork.apps.paragraphs.models import Paragraph
from textwork.apps.paragraphs.versions import VersionEntry

# Fields participants can see change, and how their values are displayed
ATTRIBUTE_TYPES = {
    "title": "i18n",
    "body": "i18n",
    "state": "string",
}


def _field_label(name: str) -> str:
    return str(Paragraph._meta.get_field(name).verbose_name).capitalize()


def _locale_label(locale: str) -> str:
    return dict(settings.LANGUAGES).get(locale, locale)


def _as_translations(value: Any) -> Mapping[str, Any]:
    if value is None or value == "":
        return {}
    if isinstance(value, Mapping):
        return value
    return {settings.LANGUAGE_CODE: value}


def _state_label(value: Any) -> str:
    if value is None:
        return ""
    try:
        return str(Paragraph.State(value).label)
    except ValueError:
        return str(value)


class DiffRenderer:
    """Compute the displayable changes of one version entry.

    ``diff()`` returns a dict keyed by attribute (``title_en``, ``body_ca``,
    ``state``) whose values describe the change::

        {"type": "i18n", "label": "Title (English)", "old_value": "A", "new_value": "B"}

    Fields outside :data:`ATTRIBUTE_TYPES` never appear, so a version that
    only touched bookkeeping or publication fields has an empty diff.
    """

    def __init__(self, entry: VersionEntry):
        self.entry = entry

    def diff(self) -> dict[str, dict[str, Any]]:
        result: dict[str, dict[str, Any]] = {}
        for name, attribute_type in ATTRIBUTE_TYPES.items():
            change = self.entry.changeset.get(name)
            if not isinstance(change, (list, tuple)) or len(change) != 2:
                continue
            old, new = change
            if attribute_type == "i18n":
                result.update(self._i18n_changes(name, old, new))
            elif old != new:
                result[name] = {
                    "type": attribute_type,
                    "label": _field_label(name),
                    "old_value": _state_label(old) if name == "state" else old,
                    "new_value": _state_label(new) if name == "state" else new,
                }
        return result

    def _i18n_changes(self, name: str, old: Any, new: Any) -> dict[str, dict[str, Any]]:
        old_values = _as_translations(old)
        new_values = _as_translations(new)
        locales = [*old_values, *(k for k in new_values if k not in old_values)]

        changes = {}
        for locale in locales:
            if locale == MACHINE_TRANSLATIONS_KEY:
                continue
            old_value = old_values.get(locale) or ""
            new_value = new_values.get(locale) or ""
            if old_value == new_value:
                continue
            changes[f"{name}_{locale}"] = {
                "type": "i18n",
                "label": f"{_field_label(name)} ({_locale_label(locale)})",
                "old_value": old_value,
                "new_value": new_value,
            }
        return changes


def diff_is_empty(entry: VersionEntry) -> bool:
    """Return True when ``entry`` changed nothing participants can see."""
    return not DiffRenderer(entry).diff()
