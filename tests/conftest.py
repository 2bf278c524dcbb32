"""Shared test fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_hashthing_logger():
    """Undo CLI logging setup so caplog sees hashthing records."""
    yield
    logger = logging.getLogger("hashthing")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
