from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from resgen.context import RunContext
from resgen.logging import WarningCollector, collect_warnings
from tests._fixtures.bundle_builder import BundleBuilder


@pytest.fixture
def bundle_builder(tmp_path: Path) -> BundleBuilder:
    """Provide a source tree rooted at the pytest tmp_path."""
    return BundleBuilder(tmp_path)


@pytest.fixture
def run_context() -> RunContext:
    return RunContext()


@pytest.fixture
def collected_warnings() -> Iterator[WarningCollector]:
    """Warnings logged under the resgen hierarchy during the test."""
    with collect_warnings() as collector:
        yield collector


@pytest.fixture(autouse=True)
def _reset_resgen_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing resgen records."""
    yield
    logger = logging.getLogger("resgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
