"""Decides whether a generated file must be regenerated."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Iterable


@dataclass(frozen=True)
class StalenessDecision:
    """Outcome of comparing one source timestamp with one candidate output."""

    up_to_date: bool
    reason: str

    @property
    def stale(self) -> bool:
        return not self.up_to_date


def is_up_to_date(source_mtime: float, output_path: Path, force: bool = False) -> StalenessDecision:
    """Return whether ``output_path`` is at least as new as its source.

    Ties count as up to date. ``force`` always yields a stale decision.
    """
    if force:
        return StalenessDecision(False, "regeneration forced")
    try:
        output_mtime = output_path.stat().st_mtime
    except FileNotFoundError:
        return StalenessDecision(False, f"{output_path} does not exist")
    if output_mtime >= source_mtime:
        return StalenessDecision(True, f"{output_path} is up to date")
    return StalenessDecision(False, f"{output_path} is older than its source")


def check_locale_properties(
    source_mtime: float,
    target: Path,
    override: Path,
    force: bool = False,
) -> StalenessDecision:
    """Staleness for a locale properties file with a possible override source.

    An existing target that is the override file itself is never rewritten,
    whatever the timestamps or ``force`` say. A missing one is generated.
    """
    if _same_file(target, override):
        return StalenessDecision(True, f"{target} is maintained by hand")
    return is_up_to_date(source_mtime, target, force)


def all_up_to_date(source_mtime: float, outputs: Iterable[Path], force: bool = False) -> StalenessDecision:
    """Combined decision for outputs that are always regenerated together."""
    for output in outputs:
        decision = is_up_to_date(source_mtime, output, force)
        if decision.stale:
            return decision
    return StalenessDecision(True, "all outputs are up to date")


def is_read_only(path: Path) -> bool:
    return path.exists() and not os.access(path, os.W_OK)


def _same_file(first: Path, second: Path) -> bool:
    if not (first.exists() and second.exists()):
        return False
    return os.path.samefile(first, second)


__all__ = [
    "StalenessDecision",
    "all_up_to_date",
    "check_locale_properties",
    "is_read_only",
    "is_up_to_date",
]
