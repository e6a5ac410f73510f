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

Data never raises: tokenize(), encode(), decode() and encode_sequence()
accept any text and any id list. These exceptions cover configuration,
vocabulary installation and persistence.

Usage:
    try:
        tokenizer.load_vocab_file("vocab.txt")
    except texttok.IOError as e:
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")
"""

from typing import Any

__all__ = [
    "TexttokError",
    "TokenizerError",
    "VocabularyError",
    "IOError",
    "InteropError",
    "StateError",
    "ValidationError",
]


class TexttokError(Exception):
    """
    Base exception for all texttok errors.

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "VOCAB_MISSING").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"path": "..."}).

    Example
    -------
    >>> try:
    ...     tokenizer.load_vocab_file("missing.txt")
    ... except texttok.TexttokError as e:
    ...     print(e.code, e.details)
    IO_ERROR {'path': 'missing.txt'}
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code!r})"


# =============================================================================
# Tokenizer Errors
# =============================================================================


class TokenizerError(TexttokError, RuntimeError):
    """
    Tokenizer failure that is not a parameter error.

    Base class for vocabulary errors; catch it to handle any failure while
    installing or reading a vocabulary.
    """

    def __init__(
        self,
        message: str,
        code: str = "TOKENIZER_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class VocabularyError(TokenizerError, ValueError):
    """
    Vocabulary input cannot be installed.

    Raised when the lines or tokens handed to a vocabulary are not strings.
    Blank lines are not an error; they are dropped on load.
    """

    def __init__(
        self,
        message: str,
        code: str = "VOCAB_INVALID",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# I/O Errors
# =============================================================================


class IOError(TexttokError, OSError):
    """
    Vocabulary file cannot be opened, read or written.

    Inherits from OSError, so ``except OSError`` also catches it.
    """

    def __init__(
        self,
        message: str,
        code: str = "IO_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# Interop Errors
# =============================================================================


class InteropError(TexttokError, TypeError):
    """
    Array export failed.

    Raised by BatchEncoding.to_numpy() when NumPy is not installed.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTEROP_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# State Errors
# =============================================================================


class StateError(TexttokError, RuntimeError):
    """
    Operation requires state the object does not have.

    Example: saving a vocabulary from a tokenizer that never installed one.
    """

    def __init__(
        self,
        message: str,
        code: str = "STATE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(TexttokError, ValueError):
    """
    Invalid parameter value.

    Inherits from both TexttokError and ValueError, so both work::

        except texttok.TexttokError:   # catches all texttok errors
        except ValueError:             # catches validation errors (Pythonic)

    Example:
        >>> Tokenizer().add_delimiter("ab")
        ValidationError: delimiter must be a single ASCII character, got 'ab'
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
