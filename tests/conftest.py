"""Shared test fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from picolsp.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_picolsp_logger() -> Iterator[None]:
    """Undo handler, level and propagation changes made by configure_logging."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate

    yield

    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
