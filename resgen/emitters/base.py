"""Pieces shared by the managed and native renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..errors import GenerationError
from ..inference import ParameterSignature, SignatureError, TypeTable, infer_signature
from ..models import Resource
from ..shapes import ConstructorShape
from .text import comment_block, quote_for_java, quote_for_properties

TOOL_NAME = "resgen"

COMMENT_STYLE_NORMAL = "normal"
COMMENT_STYLE_SCM_SAFE = "scm-safe"


@dataclass(frozen=True)
class HeaderInfo:
    """What every generated file says about where it came from."""

    source: Path
    scm_safe: bool = False
    timestamp: str = field(
        default_factory=lambda: datetime.now(UTC).replace(microsecond=0).isoformat()
    )

    @property
    def source_for_comments(self) -> str:
        """Source path for comments; only the file name under scm-safe style."""
        path = str(self.source).replace("\\", "/")
        if self.scm_safe:
            slash = path.rfind("/")
            if slash > 0:
                path = "..." + path[slash:]
        return path

    @property
    def banner(self) -> List[str]:
        if self.scm_safe:
            return ["// This class is generated. Do NOT modify it manually."]
        return [
            "// This class is generated. Do NOT modify it, or",
            "// add it to source control.",
        ]

    @property
    def generated_on(self) -> Optional[str]:
        return None if self.scm_safe else self.timestamp


@dataclass(frozen=True)
class FactoryPlan:
    """One exception factory to emit.

    ``constructor`` is ``"instance"`` or ``"message"``; ``cause`` is what is
    passed as the second constructor argument (``None`` when there is none).
    """

    constructor: str
    cause: Optional[str] = None

    @property
    def takes_cause(self) -> bool:
        return self.cause == "err"


def plan_factories(shape: Optional[ConstructorShape], allow_cause: bool = True) -> List[FactoryPlan]:
    """Choose the factories for an exception class with the given constructors.

    The plain factory prefers the structured-instance constructor and falls
    back to the message constructor, using a cause-accepting constructor with
    a ``null`` cause when the one-argument form is missing. The cause
    overload prefers the instance form as well.
    """
    if shape is None:
        return []
    plans: List[FactoryPlan] = []
    if shape.instance:
        plans.append(FactoryPlan("instance"))
    elif shape.instance_cause:
        plans.append(FactoryPlan("instance", "null"))
    elif shape.message:
        plans.append(FactoryPlan("message"))
    elif shape.message_cause:
        plans.append(FactoryPlan("message", "null"))
    if allow_cause:
        if shape.instance_cause:
            plans.append(FactoryPlan("instance", "err"))
        elif shape.message_cause:
            plans.append(FactoryPlan("message", "err"))
    return plans


def add_lists(*items: Optional[str]) -> str:
    """Join non-empty comma-separated lists: ``add_lists("a", "", "b, c")`` -> ``"a, b, c"``."""
    return ", ".join(item for item in items if item)


def argument_array(signature: ParameterSignature) -> str:
    arguments = signature.argument_list()
    if not arguments:
        return "emptyObjectArray"
    return f"new Object[] {{{arguments}}}"


def require_text(resource: Resource, source: Path) -> str:
    if resource.text is None:
        raise GenerationError("Resource has no message", path=source, resource=resource.name)
    return resource.text


@dataclass(frozen=True)
class ResourceSignature:
    """A resource together with its inferred parameters rendered for one backend."""

    resource: Resource
    text: str
    signature: ParameterSignature
    parameters: str
    arguments: str
    comment: str

    @property
    def name(self) -> str:
        return self.resource.name

    @property
    def initcap(self) -> str:
        return self.resource.initcap


def describe_resource(resource: Resource, source: Path, types: TypeTable) -> ResourceSignature:
    text = require_text(resource, source)
    try:
        signature = infer_signature(text)
    except SignatureError as exc:
        raise GenerationError(str(exc), path=source, resource=resource.name) from exc
    return ResourceSignature(
        resource=resource,
        text=text,
        signature=signature,
        parameters=signature.parameter_list(types),
        arguments=signature.argument_list(),
        comment=comment_block(resource.name, text, resource.comment),
    )


def create_environment(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["java_string"] = quote_for_java
    env.filters["properties_value"] = quote_for_properties
    env.globals["tool_name"] = TOOL_NAME
    return env


__all__ = [
    "COMMENT_STYLE_NORMAL",
    "COMMENT_STYLE_SCM_SAFE",
    "FactoryPlan",
    "HeaderInfo",
    "ResourceSignature",
    "TOOL_NAME",
    "add_lists",
    "argument_array",
    "create_environment",
    "describe_resource",
    "plan_factories",
    "require_text",
]
