"""Loads resource bundle documents into :class:`~resgen.models.ResourceBundle`."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Set
import xml.etree.ElementTree as ET

from .errors import ResgenError
from .locales import LocaleError, parse_locale
from .models import (
    BundleMetadata,
    ExceptionDetails,
    FactoryHint,
    Property,
    Resource,
    ResourceBundle,
    ResourceKind,
)

ROOT_TAG = "resourceBundle"

_RESOURCE_TAGS: Dict[str, ResourceKind] = {
    "message": ResourceKind.MESSAGE,
    "exception": ResourceKind.EXCEPTION,
}


class BundleLoadError(ResgenError):
    """Raised when a bundle document cannot be read or has an invalid shape."""


def load(stream: BinaryIO, *, source: str = "<stream>") -> ResourceBundle:
    """Parse a bundle document from ``stream``."""
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        root = ET.parse(stream, parser=parser).getroot()
    except ET.ParseError as exc:
        raise BundleLoadError(f"Malformed resource bundle {source}: {exc}") from exc
    if root.tag != ROOT_TAG:
        raise BundleLoadError(
            f"Resource bundle {source} must have root element <{ROOT_TAG}>, found <{root.tag}>"
        )
    return _build_bundle(root, source)


def load_path(path: Path) -> ResourceBundle:
    try:
        with path.open("rb") as handle:
            return load(handle, source=str(path))
    except OSError as exc:
        raise BundleLoadError(f"Cannot read resource bundle {path}: {exc}") from exc


def _build_bundle(root: ET.Element, source: str) -> ResourceBundle:
    locale = None
    locale_name = root.get("locale")
    if locale_name:
        try:
            locale = parse_locale(locale_name)
        except LocaleError as exc:
            raise BundleLoadError(f"Resource bundle {source} has invalid locale: {exc}") from exc

    code: Optional[str] = None
    factories: List[FactoryHint] = []
    resources: List[Resource] = []
    seen: Set[str] = set()
    for child in root:
        if not isinstance(child.tag, str):
            continue
        if child.tag == "code":
            code = "".join(child.itertext())
        elif child.tag == "factory":
            factories.append(_build_factory(child, source))
        elif child.tag in _RESOURCE_TAGS:
            resource = _build_resource(child, source)
            if resource.name in seen:
                raise BundleLoadError(f"Duplicate resource '{resource.name}' in {source}")
            seen.add(resource.name)
            resources.append(resource)
        else:
            raise BundleLoadError(f"Unexpected element <{child.tag}> in {source}")

    metadata = BundleMetadata(
        exception_class_name=root.get("exceptionClassName"),
        cpp_namespace=root.get("cppNamespace"),
        cpp_common_include=root.get("cppCommonInclude"),
        cpp_exception_class_name=root.get("cppExceptionClassName"),
        cpp_exception_class_location=root.get("cppExceptionClassLocation"),
        code=code,
        factories=tuple(factories),
    )
    return ResourceBundle(locale=locale, resources=tuple(resources), metadata=metadata)


def _build_factory(element: ET.Element, source: str) -> FactoryHint:
    class_name = element.get("className")
    signature = element.get("signature")
    if not class_name or not signature:
        raise BundleLoadError(f"<factory> requires 'className' and 'signature' in {source}")
    return FactoryHint(class_name=class_name, signature=signature)


def _build_resource(element: ET.Element, source: str) -> Resource:
    name = element.get("name")
    if not name:
        raise BundleLoadError(f"<{element.tag}> without a name in {source}")

    text: Optional[str] = None
    comment: Optional[str] = None
    properties: List[Property] = []
    for child in element:
        if child.tag is ET.Comment:
            if comment is None:
                comment = (child.text or "").strip()
        elif child.tag == "text":
            text = "".join(child.itertext())
        elif child.tag == "property":
            prop_name = child.get("name")
            if not prop_name:
                raise BundleLoadError(f"<property> without a name on '{name}' in {source}")
            properties.append(Property(prop_name, "".join(child.itertext())))

    kind = _RESOURCE_TAGS[element.tag]
    exception = None
    if kind is ResourceKind.EXCEPTION:
        exception = ExceptionDetails(
            class_name=element.get("className"),
            cpp_class_name=element.get("cppClassName"),
            cpp_class_location=element.get("cppClassLocation"),
            chain_exceptions=_as_flag(
                element.get("cppChainExceptions", element.get("chainExceptions"))
            ),
        )
    return Resource(
        name=name,
        kind=kind,
        text=text,
        properties=tuple(properties),
        comment=comment,
        exception=exception,
    )


def _as_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.strip().lower() == "true"


__all__ = ["BundleLoadError", "ROOT_TAG", "load", "load_path"]
