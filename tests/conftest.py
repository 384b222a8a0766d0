import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_ccnotify_logger():
    """Undo configure_logging() calls made by CLI tests."""
    logger = logging.getLogger("ccnotify")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
