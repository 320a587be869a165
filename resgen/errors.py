"""Error types raised by the resgen engine."""

from __future__ import annotations

from pathlib import Path


class ResgenError(RuntimeError):
    """Base class for errors the generator raises deliberately."""


class GenerationError(ResgenError):
    """Raised when an include cannot be generated.

    The offending source file and resource name, when known, are kept as
    attributes and folded into the message so a driver can report them.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        resource: str | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.resource = resource
        self.detail = message
        super().__init__(self._render(message))

    def _render(self, message: str) -> str:
        parts = [message]
        if self.resource is not None:
            parts.append(f"resource '{self.resource}'")
        if self.path is not None:
            parts.append(f"in {self.path}")
        return " ".join(parts) if len(parts) == 1 else f"{parts[0]} ({', '.join(parts[1:])})"


class LocaleSetError(GenerationError):
    """Raised when a bundle's own locale is missing from the requested locale list."""


__all__ = ["GenerationError", "LocaleSetError", "ResgenError"]
