"""Derives class names, packages and output directories from source file names."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .locales import Locale, strip_locale_suffix


def class_name_for(file_name: str, suffix: str) -> str:
    """``happy/BirthdayResource_en_US.xml`` -> ``happy.BirthdayResource``."""
    stem = strip_locale_suffix(file_name, suffix)
    return stem.replace("\\", ".").replace("/", ".")


def cpp_class_name_for(file_name: str, suffix: str) -> str:
    """``happy/BirthdayResource_en_US.xml`` -> ``BirthdayResource``."""
    return remove_package(class_name_for(file_name, suffix))


def remove_package(class_name: str) -> str:
    return class_name.rsplit(".", 1)[-1]


def package_name(class_name: str) -> Optional[str]:
    if "." not in class_name:
        return None
    return class_name.rsplit(".", 1)[0]


def class_name_sans_package(class_name: str, locale: Locale | None = None) -> str:
    """Simple class name, with a locale extension when ``locale`` is given."""
    name = remove_package(class_name)
    if locale is not None:
        name += f"_{locale}"
    return name


def qualified_class_name(class_name: str, locale: Locale | None = None) -> str:
    if locale is None:
        return class_name
    return f"{class_name}_{locale}"


def package_directory(root: Path, class_name: str) -> Path:
    package = package_name(class_name)
    if package is None:
        return root
    return root.joinpath(*package.split("."))


__all__ = [
    "class_name_for",
    "class_name_sans_package",
    "cpp_class_name_for",
    "package_directory",
    "package_name",
    "qualified_class_name",
    "remove_package",
]
