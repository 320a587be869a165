"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.cli import _build_parser, main
from tests._fixtures.bundle_builder import BundleBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate", "happy/Birthday.xml"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.includes == ["happy/Birthday.xml"]


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "--verbose"])
    assert args.verbose is True


def test_cli_flags_default_to_none_so_config_values_survive() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate"])
    assert args.force is None
    assert args.mode is None
    assert args.comment_style is None


def test_generate_writes_sources(bundle_builder: BundleBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    bundle_builder.birthday()

    main(
        [
            "generate",
            "happy/Birthday.xml",
            "--config",
            str(bundle_builder.root),
            "--srcdir",
            str(bundle_builder.src),
            "--destdir",
            str(bundle_builder.dest),
            "--locales",
            "en_US,fr_FR",
            "--comment-style",
            "scm-safe",
        ]
    )

    out = capsys.readouterr().out
    assert "6 file(s) generated" in out
    assert "0 failure(s)" in out
    assert (bundle_builder.dest / "happy" / "Birthday_fr_FR.java").exists()


def test_generate_reads_config_file(bundle_builder: BundleBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    bundle_builder.birthday()
    (bundle_builder.root / ".resgen.yml").write_text(
        "srcdir: src\ndestdir: out\nmode: all\nincludes:\n  - happy/Birthday.xml\n",
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--config", str(bundle_builder.root)])

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "1 failure(s)" in captured.out
    assert "No exception class specified" in captured.err


def test_generate_exits_with_error_on_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "a.xml", "--config", str(tmp_path), "--srcdir", str(tmp_path), "--mode", "cobol"])

    assert excinfo.value.code == 1
    assert "Invalid mode" in capsys.readouterr().err


def test_signature_command_prints_parameters(capsys: pytest.CaptureFixture[str]) -> None:
    main(["signature", "Hello {0}, you are {1,number}"])

    assert capsys.readouterr().out.splitlines() == ["[string, number]", "String p0, Number p1"]


def test_signature_command_native_types(capsys: pytest.CaptureFixture[str]) -> None:
    main(["signature", "{0} on {1,date}", "--backend", "native"])

    assert capsys.readouterr().out.splitlines()[-1] == "const std::string &p0, time_t p1"


def test_signature_command_rejects_oversized_template(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["signature", "Error {2000000000}"])

    assert excinfo.value.code == 1
    assert "resgen signature failed: Placeholder {2000000000}" in capsys.readouterr().err
