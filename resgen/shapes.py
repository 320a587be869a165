"""Exception constructor shapes and the providers that describe them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Protocol, Sequence

SHAPE_MESSAGE = "message"
SHAPE_MESSAGE_CAUSE = "message_cause"
SHAPE_INSTANCE = "instance"
SHAPE_INSTANCE_CAUSE = "instance_cause"
SHAPE_TOKENS = (SHAPE_MESSAGE, SHAPE_MESSAGE_CAUSE, SHAPE_INSTANCE, SHAPE_INSTANCE_CAUSE)

# Namespace searched when a bare class name is not found.
FALLBACK_NAMESPACE = "java.lang."

_HINT_SIGNATURES: Dict[str, str] = {
    "(String message)": SHAPE_MESSAGE,
    "(String message, Throwable cause)": SHAPE_MESSAGE_CAUSE,
    "(ResourceInstance r)": SHAPE_INSTANCE,
    "(ResourceInstance r, Throwable cause)": SHAPE_INSTANCE_CAUSE,
}


@dataclass(frozen=True)
class ConstructorShape:
    """Which of the four supported constructors an exception class exposes."""

    message: bool = False
    message_cause: bool = False
    instance: bool = False
    instance_cause: bool = False

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "ConstructorShape":
        flags = {token: False for token in SHAPE_TOKENS}
        for token in tokens:
            key = token.strip().lower().replace("+", "_").replace("-", "_")
            if key not in flags:
                raise ValueError(
                    f"Unknown constructor shape '{token}'; expected one of {', '.join(SHAPE_TOKENS)}"
                )
            flags[key] = True
        return cls(**flags)

    @property
    def is_empty(self) -> bool:
        return not (self.message or self.message_cause or self.instance or self.instance_cause)

    @property
    def accepts_cause(self) -> bool:
        return self.message_cause or self.instance_cause


class ConstructorShapeProvider(Protocol):
    """Capability that describes exception classes known at generation time."""

    def lookup(self, class_name: str) -> Optional[ConstructorShape]:
        """Return the shape of ``class_name``, or None if the class is unknown."""


_MESSAGE_AND_CAUSE = ConstructorShape(message=True, message_cause=True)
_MESSAGE_ONLY = ConstructorShape(message=True)

DEFAULT_SHAPES: Mapping[str, ConstructorShape] = {
    "java.lang.Throwable": _MESSAGE_AND_CAUSE,
    "java.lang.Exception": _MESSAGE_AND_CAUSE,
    "java.lang.RuntimeException": _MESSAGE_AND_CAUSE,
    "java.lang.Error": _MESSAGE_AND_CAUSE,
    "java.lang.IllegalArgumentException": _MESSAGE_AND_CAUSE,
    "java.lang.IllegalStateException": _MESSAGE_AND_CAUSE,
    "java.lang.UnsupportedOperationException": _MESSAGE_AND_CAUSE,
    "java.lang.SecurityException": _MESSAGE_AND_CAUSE,
    "java.lang.NullPointerException": _MESSAGE_ONLY,
    "java.lang.ArithmeticException": _MESSAGE_ONLY,
    "java.lang.IndexOutOfBoundsException": _MESSAGE_ONLY,
    "java.lang.ClassCastException": _MESSAGE_ONLY,
    "java.lang.AssertionError": ConstructorShape(message_cause=True),
    "java.io.IOException": _MESSAGE_AND_CAUSE,
    "java.io.UncheckedIOException": ConstructorShape(message_cause=True),
    "java.sql.SQLException": _MESSAGE_AND_CAUSE,
}


class StaticShapeTable:
    """Provider backed by a table of class name to constructor shape."""

    def __init__(self, shapes: Mapping[str, ConstructorShape] | None = None) -> None:
        self._shapes: Dict[str, ConstructorShape] = dict(DEFAULT_SHAPES)
        if shapes:
            self._shapes.update(shapes)

    @classmethod
    def from_tokens(cls, table: Mapping[str, Sequence[str]]) -> "StaticShapeTable":
        return cls({name: ConstructorShape.from_tokens(tokens) for name, tokens in table.items()})

    def lookup(self, class_name: str) -> Optional[ConstructorShape]:
        shape = self._shapes.get(class_name)
        if shape is None and not class_name.startswith(FALLBACK_NAMESPACE):
            shape = self._shapes.get(FALLBACK_NAMESPACE + class_name)
        return shape


def shape_from_hints(signatures: Iterable[str]) -> ConstructorShape:
    """Build a shape from ``(className, signature)`` factory hints.

    Unrecognised signatures are ignored.
    """
    tokens = []
    for signature in signatures:
        token = _HINT_SIGNATURES.get(_normalise_signature(signature))
        if token is not None:
            tokens.append(token)
    return ConstructorShape.from_tokens(tokens)


def _normalise_signature(signature: str) -> str:
    text = " ".join(signature.replace(",", ", ").split())
    return text.replace("( ", "(").replace(" )", ")").replace(" ,", ",")


__all__ = [
    "ConstructorShape",
    "ConstructorShapeProvider",
    "DEFAULT_SHAPES",
    "SHAPE_TOKENS",
    "StaticShapeTable",
    "shape_from_hints",
]
