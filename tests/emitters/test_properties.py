"""Tests for resgen.emitters.properties."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from resgen.context import RunContext
from resgen.emitters.base import HeaderInfo
from resgen.emitters.properties import PropertiesRenderer, properties_file_name
from resgen.errors import GenerationError
from resgen.loader import load
from resgen.locales import Locale
from resgen.logging import WarningCollector
from tests._fixtures.bundle_builder import BIRTHDAY_XML

HEADER = HeaderInfo(source=Path("/work/src/happy/Birthday.xml"), scm_safe=True)


def _bundle(text: str = BIRTHDAY_XML):
    return load(io.BytesIO(text.encode("utf-8")), source="test.xml")


def test_base_properties_lists_every_resource(run_context: RunContext) -> None:
    text = PropertiesRenderer(run_context).render_base(_bundle(), class_name="happy.Birthday", header=HEADER)

    assert text == (
        "# This file contains the resources for\n"
        "# class 'happy.Birthday'; the base locale is 'en_US'.\n"
        "# It was generated by resgen\n"
        "# from .../Birthday.xml\n"
        "\n"
        "HappyBirthday=Happy Birthday, {0}! You don't look {1,number}.\n"
        "TooYoung={0} has not been born yet.\n"
        "# End happy.Birthday.properties\n"
    )


def test_odd_single_quotes_warn(run_context: RunContext, collected_warnings: WarningCollector) -> None:
    PropertiesRenderer(run_context).render_base(_bundle(), class_name="happy.Birthday", header=HEADER)

    assert len(collected_warnings.messages) == 1
    assert "'HappyBirthday' has an odd number of single-quotes" in collected_warnings.messages[0]


def test_values_are_escaped(run_context: RunContext, collected_warnings: WarningCollector) -> None:
    bundle = _bundle(
        '<resourceBundle locale="en"><message name="multi"><text>line one\nC:\\temp</text></message></resourceBundle>'
    )

    text = PropertiesRenderer(run_context).render_base(bundle, class_name="Multi", header=HEADER)

    assert "multi=line one\\nC:\\\\temp\n" in text
    assert collected_warnings.messages == []


def test_missing_text_is_fatal(run_context: RunContext) -> None:
    bundle = _bundle('<resourceBundle locale="en"><message name="empty"/></resourceBundle>')

    with pytest.raises(GenerationError):
        PropertiesRenderer(run_context).render_base(bundle, class_name="Empty", header=HEADER)


def test_locale_stub_points_at_base_file(run_context: RunContext) -> None:
    header = HeaderInfo(source=Path("/work/src/happy/Birthday.xml"), timestamp="2024-01-02T03:04:05+00:00")

    text = PropertiesRenderer(run_context).render_locale_stub(
        class_name="happy.Birthday", locale=Locale("fr", "FR"), header=header
    )

    assert text == (
        "# This file contains the resources for\n"
        "# class 'happy.Birthday_fr_FR' and locale 'fr_FR'.\n"
        "# It was generated by resgen\n"
        "# from /work/src/happy/Birthday.xml\n"
        "# on 2024-01-02T03:04:05+00:00.\n"
        "\n"
        "# This file is intentionally blank. Add property values\n"
        "# to this file to override the translations in the base\n"
        "# properties file, Birthday.properties\n"
        "\n"
        "# End happy.Birthday_fr_FR.properties\n"
    )


def test_properties_file_name() -> None:
    assert properties_file_name("happy.Birthday") == "Birthday.properties"
    assert properties_file_name("happy.Birthday", Locale("de")) == "Birthday_de.properties"
