"""
Global pytest fixtures for texttok tests.

This module provides:
- Package import fixture
- Marker registration

Tokenizer fixtures (vocabularies, configured tokenizers) live in
tests/tokenizer/conftest.py.
"""

import pytest


@pytest.fixture(scope="session")
def texttok():
    """Import and return the texttok module."""
    import texttok

    return texttok


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
