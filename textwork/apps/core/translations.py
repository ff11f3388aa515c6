"""Helpers for translated attributes.

Translated content is stored as a JSON object keyed by locale, with
automatic translations nested under ``machine_translations``::

    {"en": "Hello", "ca": "Hola", "machine_translations": {"es": "Hola"}}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from django.conf import settings
from django.utils import translation

MACHINE_TRANSLATIONS_KEY = "machine_translations"


def translated_attribute(value: Any, locale: str | None = None) -> str:
    """Return the best translation of ``value`` for ``locale``.

    Falls back from the requested (or active) locale to the default
    language, then to machine translations, then to the first non-empty
    value. Plain strings are returned as-is; ``None`` becomes ``""``.
    """
    if value is None:
        return ""
    if not isinstance(value, Mapping):
        return str(value)

    locale = locale or translation.get_language() or settings.LANGUAGE_CODE
    machine = value.get(MACHINE_TRANSLATIONS_KEY) or {}

    for candidate in (value.get(locale), value.get(settings.LANGUAGE_CODE), machine.get(locale)):
        if candidate:
            return candidate

    for key, candidate in value.items():
        if key != MACHINE_TRANSLATIONS_KEY and candidate:
            return candidate
    return ""


def handle_locales(content: Any, all_locales: bool, fn: Callable[[str], Any]):
    """Apply ``fn`` to the current translation, or to every locale.

    With ``all_locales`` the result is a dict mirroring ``content``
    (machine translations included) with ``fn`` applied to each value.
    """
    if not all_locales:
        return fn(translated_attribute(content))

    if not isinstance(content, Mapping):
        return {settings.LANGUAGE_CODE: fn(translated_attribute(content))}

    parsed: dict[str, Any] = {}
    for key, value in content.items():
        if key == MACHINE_TRANSLATIONS_KEY:
            parsed[key] = handle_locales(value or {}, all_locales, fn)
        else:
            parsed[key] = fn(value or "")
    return parsed
