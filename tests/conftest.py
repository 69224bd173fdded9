"""Shared fixtures for botwire tests."""

import logging

import pytest
import structlog

from botwire.logging_config import LOGGER_PREFIX, SUBSYSTEMS


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo any logging configuration a test applied."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    structlog.reset_defaults()
    for name in (LOGGER_PREFIX, *(f"{LOGGER_PREFIX}.{s}" for s in SUBSYSTEMS)):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
