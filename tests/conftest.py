"""Shared pytest fixtures for depadvice tests."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    # The CLI configures logging globally; keep tests independent of order.
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("depadvice").setLevel(logging.NOTSET)
