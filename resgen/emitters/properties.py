"""Properties-file renderer for the base bundle and blank locale stubs."""

from __future__ import annotations

from typing import List

from jinja2 import Environment

from ..context import RunContext
from ..locales import Locale
from ..models import Property, ResourceBundle
from ..paths import class_name_sans_package, qualified_class_name
from .base import HeaderInfo, create_environment, require_text

PROPERTIES_SUFFIX = ".properties"


def properties_file_name(class_name: str, locale: Locale | None = None) -> str:
    """``happy.Birthday`` and ``fr_FR`` -> ``Birthday_fr_FR.properties``."""
    return class_name_sans_package(class_name, locale) + PROPERTIES_SUFFIX


class PropertiesRenderer:
    def __init__(self, context: RunContext, *, environment: Environment | None = None) -> None:
        self.context = context
        self.environment = environment or create_environment()

    def render_base(self, bundle: ResourceBundle, *, class_name: str, header: HeaderInfo) -> str:
        """One ``name=value`` line per resource, in declaration order."""
        entries: List[Property] = []
        for resource in bundle.resources:
            text = require_text(resource, header.source)
            if text.count("'") % 2:
                self.context.warn(
                    f"The message for resource '{resource.name}' has an odd number of "
                    "single-quotes. These should probably be doubled (to include a "
                    "single-quote in a message) or closed (to include a literal string "
                    "in a message)."
                )
            entries.append(Property(resource.name, text))
        template = self.environment.get_template("properties/base.j2")
        return template.render(
            header=header,
            class_name=class_name,
            locale=str(bundle.locale) if bundle.locale else "",
            entries=entries,
        )

    def render_locale_stub(self, *, class_name: str, locale: Locale, header: HeaderInfo) -> str:
        """Header-only file that the translator fills in to override the base texts."""
        template = self.environment.get_template("properties/locale.j2")
        return template.render(
            header=header,
            class_name=qualified_class_name(class_name, locale),
            locale=str(locale),
            base_file_name=properties_file_name(class_name),
        )


__all__ = ["PROPERTIES_SUFFIX", "PropertiesRenderer", "properties_file_name"]
