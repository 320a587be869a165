"""Logging for resgen runs: console/file sinks and the warning collector behind run reports."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Iterator, List

_LOGGER_NAME = "resgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the resgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class _ConsoleFormatter(logging.Formatter):
    """Progress lines stay terse; anything above INFO names its level."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return f"[resgen] {message}"
        return f"[resgen] {record.levelname} {message}"


class WarningCollector(logging.Handler):
    """Keeps the text of WARNING records so a run can report them.

    Progress (INFO) and per-include failures (ERROR) are reported separately
    and are not collected.
    """

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno == logging.WARNING:
            self.messages.append(record.getMessage())


@contextmanager
def collect_warnings() -> Iterator[WarningCollector]:
    """Collect warnings logged anywhere under the resgen hierarchy while active."""
    logger = logging.getLogger(_LOGGER_NAME)
    collector = WarningCollector()
    logger.addHandler(collector)
    try:
        yield collector
    finally:
        logger.removeHandler(collector)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the resgen logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # A run's collector attaches itself; only console and file sinks are replaced.
    for handler in list(logger.handlers):
        if not isinstance(handler, WarningCollector):
            logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(_ConsoleFormatter())
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["WarningCollector", "collect_warnings", "configure_logging", "get_logger"]
