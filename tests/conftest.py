"""Pytest configuration and shared fixtures for twofold tests."""

import logging

import pytest

from twofold._config import reset_config
from twofold._logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def clean_state():
    """Reset the process-wide config and the twofold logger around each test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    reset_config()
    yield
    reset_config()
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def sample_success():
    """Sample Success value for testing."""
    from twofold import Success

    return Success(42)


@pytest.fixture
def sample_error():
    """Sample Error value for testing."""
    from twofold import Error

    return Error('not found')
