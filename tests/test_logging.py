"""Tests for resgen.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from resgen.logging import collect_warnings, configure_logging, get_logger


def test_collector_keeps_only_warnings_from_the_resgen_hierarchy() -> None:
    with collect_warnings() as collector:
        get_logger("emitters.java").info("Rendering happy.Birthday")
        get_logger("context").warning("Could not find exception class '%s'.", "com.acme.Missing")
        get_logger("orchestrator").error("Failed to generate happy/Birthday.xml")
        logging.getLogger("elsewhere").warning("not ours")

    assert collector.messages == ["Could not find exception class 'com.acme.Missing'."]


def test_collector_detaches_when_the_block_ends() -> None:
    with collect_warnings() as collector:
        pass
    get_logger("context").warning("after the run")

    assert collector.messages == []
    assert collector not in logging.getLogger("resgen").handlers


def test_configure_logging_keeps_an_active_collector(capsys: pytest.CaptureFixture[str]) -> None:
    with collect_warnings() as collector:
        configure_logging()
        configure_logging(verbose=True)
        get_logger("properties").warning("odd quotes")

    assert collector.messages == ["odd quotes"]
    assert capsys.readouterr().err.count("[resgen] WARNING odd quotes") == 1


def test_console_prints_progress_without_level(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()

    get_logger("orchestrator").info("Generating out/happy/Birthday.java")
    get_logger("orchestrator").debug("hidden unless verbose")

    assert capsys.readouterr().err == "[resgen] Generating out/happy/Birthday.java\n"


def test_log_file_records_logger_names(tmp_path: Path) -> None:
    log_file = tmp_path / "resgen.log"
    configure_logging(log_file=log_file)

    get_logger("context").warning("missing class")
    for handler in logging.getLogger("resgen").handlers:
        handler.flush()

    assert "WARNING resgen.context: missing class" in log_file.read_text(encoding="utf-8")
