"""Tests for logging setup."""

import io
import logging

import pytest

from tuntest import configure_logging, debug_logging
from tuntest.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


def test_configure_defaults_to_info():
    """Test configure_logging defaults to INFO."""
    logger = configure_logging(handler=logging.NullHandler())
    assert logger.name == "tuntest"
    assert logger.level == logging.INFO


def test_debug_logging():
    """Test debug_logging enables DEBUG on logger and handlers."""
    logger = debug_logging()
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_configure_is_idempotent():
    """Test repeated configuration adds no extra handlers."""
    configure_logging()
    configure_logging(debug=True)
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


def test_module_loggers_inherit_level():
    """Test module loggers use the package configuration."""
    stream = io.StringIO()
    configure_logging(debug=True, handler=logging.StreamHandler(stream))
    logging.getLogger("tuntest.library").debug("loaded %d resources", 3)
    output = stream.getvalue()
    assert "[DEBUG] tuntest.library: loaded 3 resources" in output
