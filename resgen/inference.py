"""Infers the parameter signature of a positional-placeholder message template.

The scan is textual: for each index ``N`` it looks for the last occurrence of
``{N`` and reads the format keyword that follows a comma. It cannot tell a
placeholder from identical literal text, and ``{1`` also matches the start of
``{10``; generated accessors depend on exactly this behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Iterator, Sequence, Tuple

from .errors import ResgenError

_PLACEHOLDER_INDEX = re.compile(r"\{(\d+)")

# A JVM method takes at most 255 parameters.
MAX_PARAMETERS = 255


class SignatureError(ResgenError, ValueError):
    """Raised when a template refers to a placeholder beyond ``MAX_PARAMETERS``."""


class ParamKind(str, Enum):
    """Inferred kind of a single template parameter."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    UNKNOWN = "unknown"


_KEYWORD_KINDS: Tuple[Tuple[str, ParamKind], ...] = (
    ("number", ParamKind.NUMBER),
    ("date", ParamKind.DATE),
    ("time", ParamKind.TIME),
    # Choice formats do not pin down a concrete argument type.
    ("choice", ParamKind.UNKNOWN),
)


@dataclass(frozen=True)
class TypeTable:
    """Backend-specific type names for the four concrete parameter kinds."""

    string: str
    number: str
    date: str
    time: str

    def name_for(self, kind: ParamKind) -> str:
        if kind is ParamKind.NUMBER:
            return self.number
        if kind is ParamKind.DATE:
            return self.date
        if kind is ParamKind.TIME:
            return self.time
        return self.string


@dataclass(frozen=True)
class ParameterSignature:
    """Ordered parameter kinds, one per placeholder position ``{0}``, ``{1}``, ..."""

    raw_kinds: Tuple[ParamKind, ...]

    @property
    def kinds(self) -> Tuple[ParamKind, ...]:
        """Kinds as seen by backends: unknown positions default to strings."""
        return tuple(
            ParamKind.STRING if kind is ParamKind.UNKNOWN else kind for kind in self.raw_kinds
        )

    def __len__(self) -> int:
        return len(self.raw_kinds)

    def __iter__(self) -> Iterator[ParamKind]:
        return iter(self.kinds)

    def type_names(self, table: TypeTable) -> Tuple[str, ...]:
        return tuple(table.name_for(kind) for kind in self.kinds)

    def parameter_list(self, table: TypeTable) -> str:
        """Render a declaration list such as ``String p0, Number p1``.

        Pointer and reference types (ending in ``*`` or ``&``) are joined to
        the parameter name without a space.
        """
        parts = []
        for index, type_name in enumerate(self.type_names(table)):
            separator = "" if type_name.endswith(("&", "*")) else " "
            parts.append(f"{type_name}{separator}p{index}")
        return ", ".join(parts)

    def argument_list(self) -> str:
        return ", ".join(f"p{index}" for index in range(len(self.raw_kinds)))


def infer_signature(template: str) -> ParameterSignature:
    """Return the parameter signature of ``template``.

    The signature covers every position up to the highest placeholder index
    found, so ``"{2}"`` yields three parameters. Raises :class:`SignatureError`
    when that would exceed ``MAX_PARAMETERS``.
    """
    indices = [int(match.group(1)) for match in _PLACEHOLDER_INDEX.finditer(template)]
    if not indices:
        return ParameterSignature(())
    highest = max(indices)
    if highest >= MAX_PARAMETERS:
        raise SignatureError(
            f"Placeholder {{{highest}}} needs {highest + 1} parameters; "
            f"at most {MAX_PARAMETERS} are supported"
        )
    return ParameterSignature(
        tuple(placeholder_kind(template, index) for index in range(highest + 1))
    )


def placeholder_kind(template: str, index: int) -> ParamKind:
    """Return the kind of placeholder ``index``, or UNKNOWN if it never appears."""
    token = "{" + str(index)
    position = template.rfind(token)
    if position < 0:
        return ParamKind.UNKNOWN
    position += len(token)
    end = len(template)
    while position < end and template[position] == " ":
        position += 1
    if position < end and template[position] == ",":
        position += 1
        while position < end and template[position] == " ":
            position += 1
        remainder = template[position:]
        for keyword, kind in _KEYWORD_KINDS:
            if remainder.startswith(keyword):
                return kind
    return ParamKind.STRING


def describe(signature: ParameterSignature | Sequence[ParamKind]) -> str:
    return "[" + ", ".join(kind.value for kind in signature) + "]"


__all__ = [
    "MAX_PARAMETERS",
    "ParamKind",
    "ParameterSignature",
    "SignatureError",
    "TypeTable",
    "describe",
    "infer_signature",
    "placeholder_kind",
]
