from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.component_builder import ComponentTreeBuilder


@pytest.fixture
def tree(tmp_path: Path) -> ComponentTreeBuilder:
    """Provide a reusable component tree rooted at the pytest tmp_path."""
    return ComponentTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("patternsync")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
