"""Managed-runtime (Java) renderer: accessor classes in direct or functor style."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from jinja2 import Environment

from ..context import RunContext
from ..inference import TypeTable
from ..locales import Locale
from ..logging import get_logger
from ..models import Resource, ResourceBundle
from ..paths import class_name_sans_package, package_name, remove_package
from .base import (
    FactoryPlan,
    HeaderInfo,
    ResourceSignature,
    add_lists,
    argument_array,
    create_environment,
    describe_resource,
    plan_factories,
)
from .text import quote_for_java

JAVA_TYPES = TypeTable(
    string="String",
    number="Number",
    date="java.util.Date",
    time="java.util.Date",
)

STYLE_DIRECT = "direct"
STYLE_FUNCTOR = "functor"
STYLES = (STYLE_DIRECT, STYLE_FUNCTOR)

RUNTIME_PACKAGE = "org.eigenbase.resgen"
DEFINITION_CLASS = f"{RUNTIME_PACKAGE}.ResourceDefinition"
DEFAULT_BASE_CLASS = f"{RUNTIME_PACKAGE}.ShadowResourceBundle"
DEFAULT_EXCEPTION_CLASS = "java.lang.RuntimeException"
SOURCE_SUFFIX = ".java"


def error_class_for(resource: Resource, bundle: ResourceBundle) -> Optional[str]:
    """Exception class thrown by ``resource``; None for plain messages."""
    if not resource.is_exception:
        return None
    if resource.exception and resource.exception.class_name:
        return resource.exception.class_name
    if bundle.metadata.exception_class_name:
        return bundle.metadata.exception_class_name
    return DEFAULT_EXCEPTION_CLASS


def allows_cause(resource: Resource) -> bool:
    """Whether a cause-accepting factory may be emitted for ``resource``."""
    return resource.exception is None or resource.exception.chain_exceptions is not False


def property_list(resource: Resource) -> str:
    if not resource.properties:
        return "null"
    values = []
    for prop in resource.properties:
        values.append(quote_for_java(prop.name))
        values.append(quote_for_java(prop.value))
    return "new String[] {" + ", ".join(values) + "}"


@dataclass
class _Definition:
    name: str
    error_class: Optional[str]
    parameters: str
    instantiate_args: str
    factories: List[Dict[str, str]] = field(default_factory=list)

    @property
    def error_link(self) -> str:
        return "{@link " + (self.error_class or "") + "}"


class JavaRenderer:
    """Renders the base accessor class and the per-locale subclasses."""

    def __init__(
        self,
        context: RunContext,
        *,
        style: str = STYLE_DIRECT,
        environment: Environment | None = None,
    ) -> None:
        if style not in STYLES:
            raise ValueError(f"Unknown code generation style '{style}'")
        self.context = context
        self.style = style
        self.environment = environment or create_environment()
        self.logger = get_logger("emitters.java")

    def render_base(
        self,
        bundle: ResourceBundle,
        *,
        class_name: str,
        header: HeaderInfo,
        base_class_name: str | None = DEFAULT_BASE_CLASS,
    ) -> str:
        simple_name = remove_package(class_name)
        self.logger.debug("Rendering %s in %s style", class_name, self.style)
        functor = self.style == STYLE_FUNCTOR
        definitions: Dict[Tuple[str, Optional[str], bool], _Definition] = {}
        members = []
        for resource in bundle.resources:
            described = describe_resource(resource, header.source, JAVA_TYPES)
            error_class = error_class_for(resource, bundle)
            if functor:
                definition = self._definition_for(
                    described, error_class, bundle, simple_name, definitions
                )
                members.append(self._functor_member(described, definition))
            else:
                members.append(self._direct_member(described, error_class, bundle))

        code = bundle.metadata.code
        template = self.environment.get_template("java/base.j2")
        return template.render(
            header=header,
            package=package_name(class_name),
            runtime_package=RUNTIME_PACKAGE,
            simple_name=simple_name,
            class_name=class_name,
            class_link="{@link " + simple_name + "}",
            base_class=base_class_name,
            code=code.rstrip("\n") if code else None,
            functor=functor,
            definition_class=DEFINITION_CLASS,
            members=members,
            definitions=list(definitions.values()),
        )

    def render_locale(self, *, class_name: str, locale: Locale, header: HeaderInfo) -> str:
        """Trivial subclass of the base class that selects ``locale``'s bundle."""
        template = self.environment.get_template("java/locale.j2")
        return template.render(
            header=header,
            package=package_name(class_name),
            runtime_package=RUNTIME_PACKAGE,
            simple_name=class_name_sans_package(class_name, locale),
            base_simple_name=remove_package(class_name),
        )

    def _direct_member(
        self, described: ResourceSignature, error_class: Optional[str], bundle: ResourceBundle
    ) -> Dict[str, object]:
        initcap = described.initcap
        instantiate_args = add_lists("this", argument_array(described.signature))
        factories = []
        if error_class is not None:
            instance = f"{initcap}.instantiate({instantiate_args})"
            message = f"get{initcap}({described.arguments})"
            plans = plan_factories(
                self.context.resolve_shape(error_class, bundle.factory_hints(error_class)),
                allows_cause(described.resource),
            )
            factories = [
                self._factory(plan, described.parameters, instance, message) for plan in plans
            ]
        return {
            "comment": described.comment,
            "initcap": initcap,
            "text": described.text,
            "parameters": described.parameters,
            "instantiate_args": instantiate_args,
            "error_class": error_class,
            "factories": factories,
        }

    def _functor_member(self, described: ResourceSignature, definition: _Definition) -> Dict[str, object]:
        return {
            "comment": described.comment,
            "initcap": described.initcap,
            "text": described.text,
            "functor": definition.name,
            "properties": property_list(described.resource),
        }

    def _definition_for(
        self,
        described: ResourceSignature,
        error_class: Optional[str],
        bundle: ResourceBundle,
        simple_name: str,
        definitions: Dict[Tuple[str, Optional[str], bool], _Definition],
    ) -> _Definition:
        allow_cause = allows_cause(described.resource)
        key = (described.parameters, error_class, allow_cause)
        if key in definitions:
            return definitions[key]

        instantiate_args = add_lists(f"{simple_name}.this", argument_array(described.signature))
        definition = _Definition(
            name=f"_Def{len(definitions)}",
            error_class=error_class,
            parameters=described.parameters,
            instantiate_args=instantiate_args,
        )
        if error_class is not None:
            instance = f"instantiate({instantiate_args})"
            plans = plan_factories(
                self.context.resolve_shape(error_class, bundle.factory_hints(error_class)),
                allow_cause,
            )
            definition.factories = [
                self._factory(plan, described.parameters, instance, f"{instance}.toString()")
                for plan in plans
            ]
        definitions[key] = definition
        return definition

    @staticmethod
    def _factory(plan: FactoryPlan, parameters: str, instance: str, message: str) -> Dict[str, str]:
        first = instance if plan.constructor == "instance" else message
        return {
            "parameters": add_lists(parameters, "Throwable err") if plan.takes_cause else parameters,
            "arguments": add_lists(first, plan.cause),
        }


def java_file_name(class_name: str, locale: Locale | None = None) -> str:
    return class_name_sans_package(class_name, locale) + SOURCE_SUFFIX


__all__ = [
    "DEFAULT_BASE_CLASS",
    "DEFAULT_EXCEPTION_CLASS",
    "DEFINITION_CLASS",
    "JAVA_TYPES",
    "JavaRenderer",
    "RUNTIME_PACKAGE",
    "STYLES",
    "STYLE_DIRECT",
    "STYLE_FUNCTOR",
    "allows_cause",
    "error_class_for",
    "java_file_name",
    "property_list",
]
