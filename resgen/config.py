"""Configuration loading for resgen (.resgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .emitters.base import COMMENT_STYLE_NORMAL, COMMENT_STYLE_SCM_SAFE
from .emitters.cpp import DEFAULT_BASE_CLASS as DEFAULT_CPP_BASE_CLASS
from .emitters.java import DEFAULT_BASE_CLASS, STYLE_DIRECT, STYLE_FUNCTOR
from .errors import ResgenError
from .shapes import ConstructorShape

CONFIG_FILE_NAME = ".resgen.yml"

MODE_MANAGED = "managed"
MODE_NATIVE = "native"
MODE_ALL = "all"

_MODE_ALIASES: Dict[str, str] = {
    MODE_MANAGED: MODE_MANAGED,
    "java": MODE_MANAGED,
    MODE_NATIVE: MODE_NATIVE,
    "c++": MODE_NATIVE,
    "cpp": MODE_NATIVE,
    MODE_ALL: MODE_ALL,
}

_STYLE_ALIASES: Dict[str, str] = {
    STYLE_DIRECT: STYLE_DIRECT,
    STYLE_FUNCTOR: STYLE_FUNCTOR,
    "dynamic": STYLE_DIRECT,
}

_COMMENT_STYLES = (COMMENT_STYLE_NORMAL, COMMENT_STYLE_SCM_SAFE)


class ConfigError(ResgenError):
    """Raised when the configuration file cannot be parsed or holds invalid values."""


@dataclass
class IncludeConfig:
    """One source file to process, relative to ``srcdir``."""

    name: str
    class_name: Optional[str] = None
    base_class_name: str = DEFAULT_BASE_CLASS
    cpp_class_name: Optional[str] = None
    cpp_base_class_name: str = DEFAULT_CPP_BASE_CLASS


@dataclass
class GenerationConfig:
    """Settings for one generation run, from .resgen.yml and the command line."""

    srcdir: Optional[Path] = None
    destdir: Optional[Path] = None
    resdir: Optional[Path] = None
    mode: str = MODE_MANAGED
    locales: Optional[str] = None
    style: str = STYLE_DIRECT
    force: bool = False
    comment_style: str = COMMENT_STYLE_NORMAL
    includes: List[IncludeConfig] = field(default_factory=list)
    exception_shapes: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def managed(self) -> bool:
        return self.mode in (MODE_MANAGED, MODE_ALL)

    @property
    def native(self) -> bool:
        return self.mode in (MODE_NATIVE, MODE_ALL)

    @property
    def scm_safe(self) -> bool:
        return self.comment_style == COMMENT_STYLE_SCM_SAFE

    def validate(self) -> "GenerationConfig":
        """Normalise aliases and directory defaults; raise ConfigError on bad values."""
        mode = _MODE_ALIASES.get(self.mode.strip().lower())
        if mode is None:
            raise ConfigError(f"Invalid mode '{self.mode}'; expected managed, native or all")
        self.mode = mode

        style = _STYLE_ALIASES.get(self.style.strip().lower())
        if style is None:
            raise ConfigError(f"Invalid style '{self.style}'; expected direct or functor")
        self.style = style

        comment_style = self.comment_style.strip().lower()
        if comment_style not in _COMMENT_STYLES:
            raise ConfigError(
                f"Invalid comment style '{self.comment_style}'; expected normal or scm-safe"
            )
        self.comment_style = comment_style

        if self.srcdir is None:
            raise ConfigError("Source directory (srcdir) is required")
        self.destdir = self.destdir or self.srcdir
        self.resdir = self.resdir or self.destdir

        if not self.includes:
            raise ConfigError("At least one include is required")
        for include in self.includes:
            if not include.name:
                raise ConfigError("Include without a name")

        for class_name, tokens in self.exception_shapes.items():
            try:
                ConstructorShape.from_tokens(tokens)
            except ValueError as exc:
                raise ConfigError(f"Invalid exception shape for '{class_name}': {exc}") from exc
        return self


def load_config(config_path: Path) -> GenerationConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return GenerationConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    config = GenerationConfig(
        srcdir=_as_path(root, data.get("srcdir")),
        destdir=_as_path(root, data.get("destdir")),
        resdir=_as_path(root, data.get("resdir")),
        locales=_as_locales(data.get("locales")),
        force=_as_bool(data.get("force")) or False,
        includes=[_as_include(item) for item in _as_list(data.get("includes"))],
        exception_shapes=_as_shapes(data.get("exception_shapes")),
    )
    for key in ("mode", "style", "comment_style"):
        value = _as_str(data.get(key))
        if value:
            setattr(config, key, value)
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_include(value: Any) -> IncludeConfig:
    if isinstance(value, str):
        return IncludeConfig(name=value)
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid include entry: {value!r}")
    name = _as_str(value.get("name"))
    if not name:
        raise ConfigError(f"Include without a name: {value!r}")
    include = IncludeConfig(
        name=name,
        class_name=_as_str(value.get("class_name")),
        cpp_class_name=_as_str(value.get("cpp_class_name")),
    )
    base = _as_str(value.get("base_class_name"))
    if base:
        include.base_class_name = base
    cpp_base = _as_str(value.get("cpp_base_class_name"))
    if cpp_base:
        include.cpp_base_class_name = cpp_base
    return include


def _as_shapes(value: Any) -> Dict[str, List[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("exception_shapes must be a mapping of class name to shapes")
    return {str(name): _as_str_list(tokens) for name, tokens in value.items()}


def _as_locales(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return _as_str(value)


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    return root / Path(text).expanduser()


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "GenerationConfig",
    "IncludeConfig",
    "MODE_ALL",
    "MODE_MANAGED",
    "MODE_NATIVE",
    "load_config",
]
