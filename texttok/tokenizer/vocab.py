"""
Vocabulary: the bidirectional token/id mapping behind encode and decode.

A Vocabulary is immutable once built. Tokenizer installs a new instance
wholesale whenever the vocabulary is loaded, built or its special token
strings change.

File format (one token per line, in id order)::

    [PAD]
    [UNK]
    [CLS]
    [SEP]
    the
    ...

Trailing whitespace is stripped on load and blank lines are skipped;
leading and inner whitespace is part of the token.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from .._logging import scoped_logger
from ..exceptions import IOError, VocabularyError
from .config import SpecialTokens

__all__ = ["Vocabulary", "SPECIAL_ROLES"]

logger = scoped_logger("vocab")

SPECIAL_ROLES = ("unk", "pad", "cls", "sep")

# Only these characters are trimmed from the end of a vocabulary line
_TRAILING_WHITESPACE = " \t\r\n"

# Files are read and written byte-transparently
_FILE_ENCODING = "utf-8"
_FILE_ERRORS = "surrogateescape"


def clean_lines(lines: Iterable[str]) -> list[str]:
    """Strip trailing whitespace from each line and drop the blank ones."""
    tokens = []
    for lineno, line in enumerate(lines):
        if not isinstance(line, str):
            raise VocabularyError(
                f"vocabulary line {lineno} must be str, got {type(line).__name__}",
                details={"line": lineno, "type": type(line).__name__},
            )
        token = line.rstrip(_TRAILING_WHITESPACE)
        if token:
            tokens.append(token)
    return tokens


class Vocabulary:
    """
    Ordered token list with its inverse map and resolved special ids.

    Ids are contiguous from 0 in insertion order. When a token occurs more
    than once, every occurrence keeps its own id slot and the token maps to
    the last one.

    Example:
        >>> vocab = Vocabulary(["[PAD]", "[UNK]", "hello"])
        >>> vocab.get("hello")
        2
        >>> vocab.special_id("unk")
        1
        >>> vocab.special_id("cls") is None
        True
    """

    __slots__ = ("_id_to_token", "_token_to_id", "_special_tokens", "_special_ids")

    def __init__(
        self,
        tokens: Iterable[str] = (),
        special_tokens: SpecialTokens | None = None,
    ):
        self._id_to_token: tuple[str, ...] = tuple(tokens)
        self._token_to_id: dict[str, int] = {}
        for token_id, token in enumerate(self._id_to_token):
            if not isinstance(token, str) or not token:
                raise VocabularyError(
                    f"vocabulary entry {token_id} must be a non-empty string, got {token!r}",
                    details={"id": token_id},
                )
            self._token_to_id[token] = token_id

        duplicates = len(self._id_to_token) - len(self._token_to_id)
        if duplicates:
            logger.warning(
                "Vocabulary has duplicate entries; each maps to its last id",
                extra={"duplicates": duplicates, "vocab_size": len(self._id_to_token)},
            )

        self._special_tokens = special_tokens or SpecialTokens()
        self._special_ids = self._resolve(self._special_tokens)

    def _resolve(self, special_tokens: SpecialTokens) -> dict[str, int | None]:
        return {
            role: self._token_to_id.get(getattr(special_tokens, role)) for role in SPECIAL_ROLES
        }

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        special_tokens: SpecialTokens | None = None,
    ) -> Vocabulary:
        """
        Build a vocabulary from raw lines, ids assigned in line order.

        Args:
            lines: Vocabulary lines. Trailing whitespace is stripped and
                blank lines are dropped before ids are assigned.
            special_tokens: Marker strings to resolve. Defaults to
                ``SpecialTokens()``.

        Raises
        ------
            VocabularyError: If a line is not a string.
        """
        return cls(clean_lines(lines), special_tokens)

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike[str],
        special_tokens: SpecialTokens | None = None,
    ) -> Vocabulary:
        """
        Load a one-token-per-line vocabulary file.

        Raises
        ------
            IOError: If the file cannot be opened or read.
        """
        try:
            # Lines end at "\n" only; a stray "\r" inside a token is kept
            with open(path, encoding=_FILE_ENCODING, errors=_FILE_ERRORS, newline="\n") as f:
                tokens = clean_lines(f)
        except OSError as e:
            raise IOError(
                f"Failed to read vocabulary file '{path}': {e.strerror or e}",
                details={"path": str(path)},
            ) from e
        logger.debug("Vocabulary file read", extra={"path": str(path), "vocab_size": len(tokens)})
        return cls(tokens, special_tokens)

    @classmethod
    def build(
        cls,
        counts: Mapping[str, int],
        special_tokens: SpecialTokens | None = None,
        *,
        min_frequency: int = 1,
        max_vocab_size: int = 50000,
    ) -> Vocabulary:
        """
        Build a vocabulary from token frequencies.

        The four special tokens come first, in the order pad, unk, cls, sep
        (a string repeated across roles is inserted once). Regular tokens
        follow by descending count, ties kept in the mapping's iteration
        order, which for a ``Counter`` is first occurrence. Tokens counted
        fewer than ``min_frequency`` times are dropped, and at most
        ``max_vocab_size - 4`` regular tokens are added.

        Args:
            counts: Token frequencies, e.g. a ``collections.Counter``.
            special_tokens: Marker strings. Defaults to ``SpecialTokens()``.
            min_frequency: Minimum count for a token to be kept.
            max_vocab_size: Size limit; the four special slots count against it.
        """
        special_tokens = special_tokens or SpecialTokens()
        specials = special_tokens.build_order()

        ranked = sorted(
            (item for item in counts.items() if item[1] >= min_frequency),
            key=lambda item: -item[1],
        )

        tokens: list[str] = []
        present: set[str] = set()
        for token in specials:
            if token not in present:
                present.add(token)
                tokens.append(token)

        budget = max_vocab_size - len(specials)
        added = 0
        for token, _ in ranked:
            if added >= budget:
                break
            if token in present:
                continue
            present.add(token)
            tokens.append(token)
            added += 1

        logger.debug(
            "Vocabulary built",
            extra={
                "candidates": len(ranked),
                "regular_tokens": added,
                "vocab_size": len(tokens),
            },
        )
        return cls(tokens, special_tokens)

    def with_special_tokens(self, special_tokens: SpecialTokens) -> Vocabulary:
        """Same entries, special ids re-resolved against new marker strings."""
        clone = object.__new__(Vocabulary)
        clone._id_to_token = self._id_to_token
        clone._token_to_id = self._token_to_id
        clone._special_tokens = special_tokens
        clone._special_ids = self._resolve(special_tokens)
        return clone

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self, path: str | os.PathLike[str]) -> Path:
        """
        Write the vocabulary, one token per line in id order.

        Returns
        -------
            The path written.

        Raises
        ------
            VocabularyError: If a token cannot be stored as a line: it holds
                a newline or ends in whitespace that loading would strip.
                Nothing is written in that case.
            IOError: If the file cannot be written.
        """
        for token_id, token in enumerate(self._id_to_token):
            if "\n" in token or token != token.rstrip(_TRAILING_WHITESPACE):
                raise VocabularyError(
                    f"vocabulary entry {token_id} ({token!r}) cannot be saved as one line",
                    details={"id": token_id, "token": token},
                )

        target = Path(path)
        try:
            with open(target, "w", encoding=_FILE_ENCODING, errors=_FILE_ERRORS, newline="\n") as f:
                for token in self._id_to_token:
                    f.write(token)
                    f.write("\n")
        except OSError as e:
            raise IOError(
                f"Failed to write vocabulary file '{path}': {e.strerror or e}",
                details={"path": str(path)},
            ) from e
        logger.debug("Vocabulary saved", extra={"path": str(target), "vocab_size": len(self)})
        return target

    # =========================================================================
    # Lookup
    # =========================================================================

    def __len__(self) -> int:
        return len(self._id_to_token)

    def __iter__(self) -> Iterator[str]:
        return iter(self._id_to_token)

    def __contains__(self, token: object) -> bool:
        return token in self._token_to_id

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self)})"

    def get(self, token: str) -> int | None:
        """Id of ``token``, or None if it is not in the vocabulary."""
        return self._token_to_id.get(token)

    def token(self, token_id: int) -> str | None:
        """Token with id ``token_id``, or None if the id is out of range."""
        if 0 <= token_id < len(self._id_to_token):
            return self._id_to_token[token_id]
        return None

    @property
    def tokens(self) -> tuple[str, ...]:
        """All tokens in id order."""
        return self._id_to_token

    def to_dict(self) -> dict[str, int]:
        """Copy of the token-to-id mapping."""
        return dict(self._token_to_id)

    @property
    def special_tokens(self) -> SpecialTokens:
        """Marker strings the special ids were resolved against."""
        return self._special_tokens

    def special_id(self, role: str) -> int | None:
        """
        Resolved id for a special role ("unk", "pad", "cls" or "sep").

        None means the role's string is not in the vocabulary.
        """
        return self._special_ids[role]
