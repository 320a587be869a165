"""Native (C++) renderer: one header and one implementation file per bundle."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from jinja2 import Environment

from ..errors import GenerationError
from ..inference import TypeTable
from ..logging import get_logger
from ..models import Resource, ResourceBundle
from ..paths import remove_package
from .base import HeaderInfo, add_lists, create_environment, describe_resource, require_text

CPP_TYPES = TypeTable(
    string="const std::string &",
    number="int",
    date="time_t",
    time="time_t",
)

DEFAULT_BASE_CLASS = "ResourceBundle"
HEADER_SUFFIX = ".h"
IMPL_SUFFIX = ".cpp"


def validate_bundle(bundle: ResourceBundle, source: Path) -> None:
    """Reject bundles whose exceptions cannot be mapped to native classes.

    Runs before anything is written so a bad bundle leaves no partial output.
    """
    default_class = bundle.metadata.cpp_exception_class_name
    default_location = bundle.metadata.cpp_exception_class_location
    if default_class and not default_location:
        raise GenerationError(
            "C++ exception class is defined without a header file location", path=source
        )
    for resource in bundle.resources:
        require_text(resource, source)
        if not resource.is_exception:
            continue
        details = resource.exception
        cpp_class = details.cpp_class_name if details else None
        cpp_location = details.cpp_class_location if details else None
        if cpp_class and not cpp_location and not default_location:
            raise GenerationError(
                "C++ exception class specified without a header location",
                path=source,
                resource=resource.name,
            )
        if not default_class and not cpp_class:
            raise GenerationError("No exception class specified", path=source, resource=resource.name)


def exception_class_for(resource: Resource, bundle: ResourceBundle) -> Optional[str]:
    if not resource.is_exception:
        return None
    if resource.exception and resource.exception.cpp_class_name:
        return resource.exception.cpp_class_name
    return bundle.metadata.cpp_exception_class_name


def exception_includes(bundle: ResourceBundle) -> List[str]:
    """Headers declaring the bundle's exception classes, first mention wins."""
    locations = [bundle.metadata.cpp_exception_class_location]
    locations.extend(
        resource.exception.cpp_class_location
        for resource in bundle.resources
        if resource.is_exception and resource.exception
    )
    return list(dict.fromkeys(location for location in locations if location))


def header_guard(file_name: str, namespace: str | None = None) -> str:
    """``BirthdayResource.h`` in namespace ``happy`` -> ``Happy_BirthdayResource_Included``."""
    guard = f"{Path(file_name).stem}_Included"
    if namespace:
        guard = f"{namespace[:1].upper()}{namespace[1:]}_{guard}"
    return guard


def cpp_file_names(cpp_class_name: str) -> Tuple[str, str]:
    return cpp_class_name + HEADER_SUFFIX, cpp_class_name + IMPL_SUFFIX


class CppRenderer:
    """Renders the header and implementation of a native resource class."""

    def __init__(self, *, environment: Environment | None = None) -> None:
        self.environment = environment or create_environment()
        self.logger = get_logger("emitters.cpp")

    def render_header(
        self,
        bundle: ResourceBundle,
        *,
        class_name: str,
        header: HeaderInfo,
        base_class_name: str = DEFAULT_BASE_CLASS,
    ) -> str:
        header_file, _ = cpp_file_names(class_name)
        namespace = bundle.metadata.cpp_namespace
        template = self.environment.get_template("cpp/header.j2")
        return template.render(
            **self._common(bundle, class_name, header, base_class_name),
            guard=header_guard(header_file, namespace),
            exception_includes=exception_includes(bundle),
        )

    def render_impl(
        self,
        bundle: ResourceBundle,
        *,
        class_name: str,
        header: HeaderInfo,
        base_class_name: str = DEFAULT_BASE_CLASS,
    ) -> str:
        header_file, _ = cpp_file_names(class_name)
        template = self.environment.get_template("cpp/impl.j2")
        return template.render(
            **self._common(bundle, class_name, header, base_class_name),
            header_file=header_file,
            common_include=bundle.metadata.cpp_common_include,
        )

    def _common(
        self, bundle: ResourceBundle, class_name: str, header: HeaderInfo, base_class_name: str
    ) -> Dict[str, object]:
        if "." in class_name:
            raise GenerationError(
                f"C++ class name must not contain '.': {class_name}", path=header.source
            )
        validate_bundle(bundle, header.source)
        self.logger.debug("Rendering native class %s", class_name)
        return {
            "header": header,
            "class_name": class_name,
            "cache_class": f"{class_name}BundleCache",
            "base_class": remove_package(base_class_name),
            "namespace": bundle.metadata.cpp_namespace,
            "members": [self._member(resource, bundle, header) for resource in bundle.resources],
        }

    @staticmethod
    def _member(resource: Resource, bundle: ResourceBundle, header: HeaderInfo) -> Dict[str, object]:
        described = describe_resource(resource, header.source, CPP_TYPES)
        exception_class = exception_class_for(resource, bundle)
        chain = bool(exception_class and resource.exception and resource.exception.chain_exceptions)
        return {
            "name": resource.name,
            "initcap": resource.initcap,
            "comment": described.comment,
            "parameters": described.parameters,
            "arguments": described.arguments,
            "exception_class": exception_class,
            "chain": chain,
            "chained_parameters": add_lists(
                described.parameters, f"const {exception_class} * const prev"
            ),
        }


__all__ = [
    "CPP_TYPES",
    "CppRenderer",
    "DEFAULT_BASE_CLASS",
    "cpp_file_names",
    "exception_class_for",
    "exception_includes",
    "header_guard",
    "validate_bundle",
]
