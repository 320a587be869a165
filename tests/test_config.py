"""Tests for resgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.config import ConfigError, GenerationConfig, IncludeConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, GenerationConfig)
    assert config.srcdir is None
    assert config.mode == "managed"
    assert config.style == "direct"
    assert config.comment_style == "normal"
    assert config.force is False
    assert config.includes == []
    assert config.exception_shapes == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".resgen.yml"
    config_file.write_text(
        """
mode: all
srcdir: src
destdir: build/generated
locales: [en_US, fr_FR]
style: functor
force: true
comment_style: scm-safe
includes:
  - happy/Birthday.xml
  - name: happy/Birthday_fr_FR.properties
    class_name: happy.Birthday
    base_class_name: com.acme.BaseBundle
    cpp_class_name: BirthdayResource
    cpp_base_class_name: acme::Bundle
exception_shapes:
  com.acme.AppError: [instance, instance_cause]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.mode == "all"
    assert config.srcdir == tmp_path.resolve() / "src"
    assert config.destdir == tmp_path.resolve() / "build" / "generated"
    assert config.resdir is None
    assert config.locales == "en_US,fr_FR"
    assert config.style == "functor"
    assert config.force is True
    assert config.comment_style == "scm-safe"
    assert config.includes[0] == IncludeConfig(name="happy/Birthday.xml")
    second = config.includes[1]
    assert second.class_name == "happy.Birthday"
    assert second.base_class_name == "com.acme.BaseBundle"
    assert second.cpp_class_name == "BirthdayResource"
    assert second.cpp_base_class_name == "acme::Bundle"
    assert config.exception_shapes == {"com.acme.AppError": ["instance", "instance_cause"]}


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_malformed_yaml(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("mode: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_validate_normalises_aliases_and_directory_defaults(tmp_path: Path) -> None:
    config = GenerationConfig(
        srcdir=tmp_path,
        mode="C++",
        style="dynamic",
        comment_style="SCM-SAFE",
        includes=[IncludeConfig(name="Messages.xml")],
    ).validate()

    assert config.mode == "native"
    assert config.native and not config.managed
    assert config.style == "direct"
    assert config.scm_safe
    assert config.destdir == tmp_path
    assert config.resdir == tmp_path


def test_validate_resdir_defaults_to_destdir(tmp_path: Path) -> None:
    config = GenerationConfig(
        srcdir=tmp_path / "src", destdir=tmp_path / "out", includes=[IncludeConfig(name="a.xml")]
    ).validate()

    assert config.resdir == tmp_path / "out"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"mode": "python"}, "Invalid mode"),
        ({"style": "fancy"}, "Invalid style"),
        ({"comment_style": "terse"}, "Invalid comment style"),
        ({"srcdir": None}, "srcdir"),
        ({"includes": []}, "At least one include"),
        ({"includes": [IncludeConfig(name="")]}, "Include without a name"),
        ({"exception_shapes": {"com.acme.X": ["sometimes"]}}, "Invalid exception shape"),
    ],
)
def test_validate_rejects_invalid_values(tmp_path: Path, overrides: dict, message: str) -> None:
    config = GenerationConfig(srcdir=tmp_path, includes=[IncludeConfig(name="a.xml")])
    for key, value in overrides.items():
        setattr(config, key, value)

    with pytest.raises(ConfigError, match=message):
        config.validate()
