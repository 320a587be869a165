"""Helper utilities for laying out resource bundle sources in tests."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Mapping

from resgen.config import GenerationConfig, IncludeConfig

BIRTHDAY_XML = """\
<?xml version="1.0" ?>
<resourceBundle locale="en_US">
  <message name="HappyBirthday">
    <!-- Greeting for a birthday. -->
    <text>Happy Birthday, {0}! You don't look {1,number}.</text>
  </message>
  <exception name="TooYoung">
    <text>{0} has not been born yet.</text>
  </exception>
</resourceBundle>
"""


class BundleBuilder:
    """Writes source files under ``src/`` and builds configurations pointing at them."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path
        self.src = tmp_path / "src"
        self.dest = tmp_path / "out"
        self.src.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write ``path -> contents`` entries below the source directory."""
        for relative, content in files.items():
            path = self.src / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def birthday(self, name: str = "happy/Birthday.xml") -> Path:
        self.write({name: BIRTHDAY_XML})
        return self.src / name

    def config(self, *includes: str, **overrides: object) -> GenerationConfig:
        config = GenerationConfig(
            srcdir=self.src,
            destdir=self.dest,
            includes=[IncludeConfig(name=name) for name in includes],
        )
        for key, value in overrides.items():
            setattr(config, key, value)
        return config

    def output(self, relative: str) -> Path:
        return self.dest / relative

    @staticmethod
    def touch(path: Path, mtime: float) -> None:
        os.utime(path, (mtime, mtime))


__all__ = ["BIRTHDAY_XML", "BundleBuilder"]
