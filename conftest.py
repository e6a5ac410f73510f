"""
Root pytest configuration.

Registers the shared tokenizer fixtures at the rootdir level, where
pytest_plugins declarations must live.
"""

pytest_plugins = ["tests.tokenizer.conftest"]
