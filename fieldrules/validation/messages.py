"""Message Sources

A message source renders a rule's static message key into display text at
failure time. Validators without a source report the key verbatim.

Usage:
    source = DictMessageSource({
        "de": {"must not be null": "darf nicht leer sein"},
    })
    builder.rule_for("name", lambda u: u.name).with_message_source(source, locale="de").not_null()
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class MessageSource(Protocol):
    def render(self, key: str, args: Sequence[Any], locale: str) -> str: ...


class StaticMessageSource:
    """Identity source: the key is the message."""

    def render(self, key: str, args: Sequence[Any], locale: str) -> str:
        return key


class DictMessageSource:
    """Catalog-backed source keyed by locale, then message key.

    Lookup falls back to ``fallback_locale`` and finally to the key itself.
    Templates are formatted positionally with the rule's arguments, so a
    catalog entry for ``greater_than`` can read ``"muss größer als {0} sein"``.
    A template that cannot be formatted is returned as written.
    """

    __slots__ = ("_catalogs", "fallback_locale")

    def __init__(self, catalogs: Mapping[str, Mapping[str, str]], fallback_locale: str = "en"):
        self._catalogs = {locale: dict(entries) for locale, entries in catalogs.items()}
        self.fallback_locale = fallback_locale

    def render(self, key: str, args: Sequence[Any], locale: str) -> str:
        template = self._lookup(key, locale)
        if template is None:
            return key
        if not args:
            return template
        try:
            return template.format(*args)
        except (IndexError, KeyError, ValueError):
            # literal braces, e.g. a repeated regex quantifier
            return template

    def _lookup(self, key: str, locale: str) -> str | None:
        for candidate in (locale, locale.split("_")[0].split("-")[0], self.fallback_locale):
            entries = self._catalogs.get(candidate)
            if entries and key in entries:
                return entries[key]
        return None
