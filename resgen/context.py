"""Per-run state shared by every include processed in one generation run."""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Dict, Optional, Sequence, Set

from .logging import get_logger
from .shapes import ConstructorShape, ConstructorShapeProvider, StaticShapeTable, shape_from_hints


@dataclass
class RunContext:
    """Constructor-shape cache and warning memo for a single run.

    A fresh context is built for every run; nothing leaks from one run into
    the next. Warnings go to the ``resgen.context`` logger, where a run's
    :func:`~resgen.logging.collect_warnings` picks them up for the report.
    """

    provider: ConstructorShapeProvider = field(default_factory=StaticShapeTable)
    _shape_cache: Dict[str, Optional[ConstructorShape]] = field(default_factory=dict)
    _warned_classes: Set[str] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def __post_init__(self) -> None:
        self.logger = get_logger("context")

    def resolve_shape(
        self, class_name: str, hints: Sequence[str] = ()
    ) -> Optional[ConstructorShape]:
        """Return the constructor shape of ``class_name`` or None if unresolvable.

        The provider is asked once per class name. When it does not know the
        class, the bundle's factory ``hints`` for that class are used instead.
        If neither yields a shape a warning is issued, once per class name.
        """
        with self._lock:
            if class_name not in self._shape_cache:
                self._shape_cache[class_name] = self.provider.lookup(class_name)
            shape = self._shape_cache[class_name]
        if shape is not None:
            return shape

        hinted = shape_from_hints(hints)
        if not hinted.is_empty:
            return hinted

        self._warn_missing_class(class_name)
        return None

    def warn(self, message: str) -> None:
        self.logger.warning("%s", message)

    def _warn_missing_class(self, class_name: str) -> None:
        with self._lock:
            if class_name in self._warned_classes:
                return
            self._warned_classes.add(class_name)
        self.warn(
            f"Could not find exception class '{class_name}'. "
            "Exception factory methods will not be generated."
        )


__all__ = ["RunContext"]
