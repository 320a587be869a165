"""Core data models shared across resgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .locales import Locale


class ResourceKind(str, Enum):
    """Variant tag of a resource definition."""

    MESSAGE = "message"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class Property:
    """Name/value pair attached to a resource."""

    name: str
    value: str


@dataclass(frozen=True)
class ExceptionDetails:
    """Payload carried only by exception resources."""

    class_name: Optional[str] = None
    cpp_class_name: Optional[str] = None
    cpp_class_location: Optional[str] = None
    # None means the source did not say.
    chain_exceptions: Optional[bool] = None


@dataclass(frozen=True)
class Resource:
    """One localizable message or exception definition."""

    name: str
    kind: ResourceKind
    text: Optional[str]
    properties: Tuple[Property, ...] = ()
    comment: Optional[str] = None
    exception: Optional[ExceptionDetails] = None

    @property
    def is_exception(self) -> bool:
        return self.kind is ResourceKind.EXCEPTION

    @property
    def initcap(self) -> str:
        """Accessor stem, e.g. ``HappyBirthday``; all-caps names get a ``_`` prefix."""
        if self.name == self.name.upper():
            return "_" + self.name
        return self.name[:1].upper() + self.name[1:]


@dataclass(frozen=True)
class FactoryHint:
    """Manually declared exception constructor signature."""

    class_name: str
    signature: str


@dataclass(frozen=True)
class BundleMetadata:
    """Backend-specific options declared on the bundle."""

    exception_class_name: Optional[str] = None
    cpp_namespace: Optional[str] = None
    cpp_common_include: Optional[str] = None
    cpp_exception_class_name: Optional[str] = None
    cpp_exception_class_location: Optional[str] = None
    code: Optional[str] = None
    factories: Tuple[FactoryHint, ...] = ()


@dataclass(frozen=True)
class ResourceBundle:
    """A loaded bundle: its base locale, resources in declaration order and metadata."""

    locale: Optional[Locale]
    resources: Tuple[Resource, ...]
    metadata: BundleMetadata = field(default_factory=BundleMetadata)

    def factory_hints(self, class_name: str) -> List[str]:
        return [hint.signature for hint in self.metadata.factories if hint.class_name == class_name]


__all__ = [
    "BundleMetadata",
    "ExceptionDetails",
    "FactoryHint",
    "Property",
    "Resource",
    "ResourceBundle",
    "ResourceKind",
]
