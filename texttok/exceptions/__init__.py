"""
texttok exceptions.

This module defines the exception hierarchy for texttok:

    TexttokError (base)
    ├── TokenizerError - Tokenizer failures outside of parameter validation
    │   └── VocabularyError - Malformed vocabulary input
    ├── IOError - Vocabulary file read/write failures
    ├── InteropError - Array export failures (NumPy)
    ├── StateError - Operation requires state the object does not have
    └── ValidationError - Invalid parameter value
"""

from .exceptions import (
    InteropError,
    IOError,
    StateError,
    TexttokError,
    TokenizerError,
    ValidationError,
    VocabularyError,
)

__all__ = [
    # Base
    "TexttokError",
    # Tokenizer
    "TokenizerError",
    "VocabularyError",
    # I/O
    "IOError",
    # Interop
    "InteropError",
    # State
    "StateError",
    # Validation
    "ValidationError",
]
