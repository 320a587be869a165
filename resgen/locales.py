"""Locale identifiers of the form ``language[_COUNTRY[_VARIANT]]``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional

from .errors import ResgenError


class LocaleError(ResgenError, ValueError):
    """Raised when a locale identifier does not have a valid shape."""


@dataclass(frozen=True)
class Locale:
    """A parsed locale. Serialises back to its identifier via ``str()``."""

    language: str
    country: str = ""
    variant: str = ""

    def __post_init__(self) -> None:
        if not self.language:
            raise LocaleError("Locale must have a language")
        if self.country and len(self.country) != 2:
            raise LocaleError(f"Invalid country '{self.country}': expected 2 characters")
        if self.variant and not self.country:
            raise LocaleError("Locale variant requires a country")

    def __str__(self) -> str:
        return format_locale(self)


def parse_locale(identifier: str) -> Locale:
    """Parse ``identifier`` into a :class:`Locale`.

    Without an underscore the whole string is the language and its length
    is not checked. Otherwise language and country must both be exactly two
    characters and everything after the second underscore is the variant.
    """
    first = identifier.find("_")
    if first < 0:
        if not identifier:
            raise LocaleError("Empty locale identifier")
        return Locale(identifier)

    language = identifier[:first]
    if len(language) != 2:
        raise LocaleError(f"Invalid locale '{identifier}': language must have 2 characters")
    second = identifier.find("_", first + 1)
    if second < 0:
        country = identifier[first + 1 :]
        variant = ""
    else:
        country = identifier[first + 1 : second]
        variant = identifier[second + 1 :]
    if len(country) != 2:
        raise LocaleError(f"Invalid locale '{identifier}': country must have 2 characters")
    return Locale(language, country, variant)


def try_parse_locale(identifier: str) -> Optional[Locale]:
    """Like :func:`parse_locale` but returns ``None`` instead of raising."""
    try:
        return parse_locale(identifier)
    except LocaleError:
        return None


def format_locale(locale: Locale) -> str:
    text = locale.language
    if locale.country or locale.variant:
        text += "_" + locale.country
    if locale.variant:
        text += "_" + locale.variant
    return text


def parse_locale_list(identifiers: str) -> List[str]:
    """Split a comma-separated locale list into its (unparsed) identifiers."""
    return [token.strip() for token in identifiers.split(",") if token.strip()]


def _remove_suffix(path: str, suffix: str) -> str:
    if suffix and path.endswith(suffix):
        return path[: -len(suffix)]
    return path


def _name_start(path: str) -> int:
    return max(path.rfind("/"), path.rfind("\\")) + 1


def derive_from_filename(path: str | PurePath, suffix: str) -> Optional[Locale]:
    """Return the locale encoded in a file name such as ``Birthday_en_US.xml``.

    Everything after the first underscore of the file name (directories
    excluded) is the locale identifier. Returns ``None`` when there is no
    underscore or the remainder does not parse.
    """
    stem = _remove_suffix(str(path), suffix)
    name = stem[_name_start(stem) :]
    score = name.find("_")
    if score <= 0:
        return None
    return try_parse_locale(name[score + 1 :])


def strip_locale_suffix(path: str | PurePath, suffix: str) -> str:
    """Return ``path`` without its suffix and trailing locale.

    Underscores in the file name are tried left to right; the first one
    whose remainder parses as a locale is the locale boundary. Underscores
    that are part of the name itself are skipped.
    """
    stem = _remove_suffix(str(path), suffix)
    position = _name_start(stem)
    while position < len(stem):
        score = stem.find("_", position)
        if score < 0:
            break
        if try_parse_locale(stem[score + 1 :]) is not None:
            return stem[:score]
        position = score + 1
    return stem


__all__ = [
    "Locale",
    "LocaleError",
    "derive_from_filename",
    "format_locale",
    "parse_locale",
    "parse_locale_list",
    "strip_locale_suffix",
    "try_parse_locale",
]
