"""Restore the texttok logger after each logging test."""

import pytest


@pytest.fixture(autouse=True)
def _restore_logger(monkeypatch):
    from texttok._logging import logger

    # setup_logging() writes TEXTTOK_LOG_FORMAT; setenv makes monkeypatch restore it
    monkeypatch.setenv("TEXTTOK_LOG_FORMAT", "human")
    handlers = logger.handlers[:]
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
