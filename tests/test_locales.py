"""Tests for resgen.locales."""

from __future__ import annotations

import pytest

from resgen.locales import (
    Locale,
    LocaleError,
    derive_from_filename,
    format_locale,
    parse_locale,
    parse_locale_list,
    strip_locale_suffix,
    try_parse_locale,
)


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("en", Locale("en")),
        ("en_US", Locale("en", "US")),
        ("en_US_POSIX", Locale("en", "US", "POSIX")),
        ("de_DE_EURO_x", Locale("de", "DE", "EURO_x")),
        ("english", Locale("english")),
    ],
)
def test_parse_locale_accepts_valid_shapes(identifier: str, expected: Locale) -> None:
    assert parse_locale(identifier) == expected


@pytest.mark.parametrize("identifier", ["", "eng_US", "en_USA", "en_", "_US", "e_US"])
def test_parse_locale_rejects_invalid_shapes(identifier: str) -> None:
    with pytest.raises(LocaleError):
        parse_locale(identifier)


def test_locale_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_locale("en_USA")


def test_format_omits_empty_trailing_components() -> None:
    assert format_locale(Locale("fr")) == "fr"
    assert format_locale(Locale("fr", "FR")) == "fr_FR"
    assert str(Locale("fr", "FR", "EURO")) == "fr_FR_EURO"


def test_parse_then_format_round_trips() -> None:
    for locale in (Locale("en"), Locale("en", "GB"), Locale("no", "NO", "NY"), Locale("ja", "JP", "a_b")):
        text = format_locale(locale)
        assert format_locale(parse_locale(text)) == text


def test_locale_rejects_variant_without_country() -> None:
    with pytest.raises(LocaleError):
        Locale("en", "", "POSIX")


def test_try_parse_returns_none_on_failure() -> None:
    assert try_parse_locale("en_USA") is None
    assert try_parse_locale("en_US") == Locale("en", "US")


def test_parse_locale_list_strips_and_drops_empty_tokens() -> None:
    assert parse_locale_list(" en_US, fr_FR,,de ") == ["en_US", "fr_FR", "de"]


def test_derive_from_filename_uses_first_underscore_of_file_name() -> None:
    assert derive_from_filename("happy/Birthday_en_US.xml", ".xml") == Locale("en", "US")
    assert derive_from_filename("my_pkg/Birthday_fr.properties", ".properties") == Locale("fr")
    assert derive_from_filename("happy/Birthday.xml", ".xml") is None


def test_derive_from_filename_returns_none_for_unparseable_suffix() -> None:
    assert derive_from_filename("happy/Birthday_Resource_en_US.xml", ".xml") is None


def test_strip_locale_suffix_skips_underscores_that_are_not_locale_boundaries() -> None:
    assert strip_locale_suffix("happy/Birthday_Resource_en_US.xml", ".xml") == "happy/Birthday_Resource"
    assert strip_locale_suffix("happy/Birthday_en_US.properties", ".properties") == "happy/Birthday"
    assert strip_locale_suffix("happy/Birthday.xml", ".xml") == "happy/Birthday"
    assert strip_locale_suffix("my_pkg/Birthday.xml", ".xml") == "my_pkg/Birthday"
