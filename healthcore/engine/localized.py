"""Localized display text.

Catalog records (exercise names, achievement titles) arrive either as a plain
string or as a ``{locale: text}`` mapping. Both shapes are normalised into a
small tagged union so callers never branch on the raw type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

FALLBACK_LOCALE = "en"


@dataclass(frozen=True, slots=True)
class PlainText:
    value: str


@dataclass(frozen=True, slots=True)
class LocalizedMap:
    translations: Mapping[str, str] = field(default_factory=dict)


LocalizedText = Union[PlainText, LocalizedMap]


def parse_text(raw: Any) -> LocalizedText:
    """Build a LocalizedText from a string, a locale mapping, or anything else."""
    if isinstance(raw, (PlainText, LocalizedMap)):
        return raw
    if isinstance(raw, Mapping):
        return LocalizedMap({str(k): str(v) for k, v in raw.items() if v is not None})
    if raw is None:
        return PlainText("")
    return PlainText(str(raw))


def resolve_text(text: LocalizedText, locale: str = FALLBACK_LOCALE) -> str:
    """Pick the display string for `locale`.

    Lookup order: exact locale, its language part ("pt" for "pt-BR"),
    English, then the first available translation. Never raises.
    """
    if isinstance(text, PlainText):
        return text.value
    translations = text.translations
    if not translations:
        return ""
    language = locale.split("-")[0].split("_")[0]
    for key in (locale, language, FALLBACK_LOCALE):
        if key in translations:
            return translations[key]
    return next(iter(translations.values()))
