"""
Text encoding and decoding.

Provides the Tokenizer class: delimiter-based splitting of UTF-8 text,
vocabulary-backed encoding to ids, decoding back to text, and BERT-style
sequence assembly with [CLS]/[SEP] markers.
"""

from __future__ import annotations

import os
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from .._logging import scoped_logger
from ..exceptions import StateError, ValidationError
from . import scanner
from .batch import BatchEncoding
from .config import SpecialTokens, TokenizerConfig
from .special_tokens import SpecialTokensMixin
from .vocab import Vocabulary

__all__ = ["Tokenizer", "INVALID_TOKEN", "UNKNOWN_ID"]

logger = scoped_logger("tokenizer")

# Returned by get_token_by_id() for ids that do not resolve
INVALID_TOKEN = "[INVALID]"

# Emitted by encode() for an unknown token when the vocabulary has no unk entry
UNKNOWN_ID = -1


def _check_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be int, got {type(value).__name__}",
            details={"param": name, "type": type(value).__name__},
        )
    return value


def _check_iterable(name: str, value: object, hint: str = "") -> None:
    # A bare string would otherwise be consumed one character at a time
    if isinstance(value, (str, bytes)):
        raise ValidationError(
            f"{name} must be an iterable of strings, not a single {type(value).__name__}.{hint}",
            details={"param": name, "type": type(value).__name__},
        )


class Tokenizer(SpecialTokensMixin):
    """
    Delimiter-based text tokenizer with optional vocabulary.

    Splits text on configurable ASCII delimiters (and optionally ASCII
    punctuation) without ever cutting a multi-byte UTF-8 character, then
    maps tokens to ids through a vocabulary.

    Configuration is fluent; every setter returns the tokenizer:

        >>> tokenizer = (
        ...     Tokenizer()
        ...     .set_lowercase(True)
        ...     .set_split_on_punctuation(True)
        ...     .set_keep_punctuation(True)
        ... )
        >>> tokenizer.tokenize("Hello, world!")
        ['hello', ',', 'world', '!']

    With a vocabulary:

        >>> tokenizer.load_vocab_file("vocab.txt")
        >>> ids = tokenizer.encode_sequence("Hello, world!", max_length=8)
        >>> tokenizer.decode(ids)
        '[CLS] hello , world ! [SEP]'

    Without a vocabulary, encode() returns positional indices and decode()
    returns an empty string. Check ``has_vocab`` to tell these fallbacks
    apart from vocabulary-backed results.

    Reads (tokenize, encode, decode, ...) never mutate the tokenizer and are
    safe to share across threads once setup is done. Setters and vocabulary
    installers are not synchronized; do not call them while other threads
    use the same instance.
    """

    __slots__ = ("_config", "_vocab", "_padding_side")

    def __init__(
        self,
        config: TokenizerConfig | None = None,
        *,
        padding_side: str = "right",
        **overrides: Any,
    ):
        """
        Create a tokenizer.

        Args:
            config: Splitting configuration. Defaults to ``TokenizerConfig()``.
            padding_side: Default padding side for batches ("right" or "left").
            **overrides: TokenizerConfig fields applied on top of ``config``,
                e.g. ``Tokenizer(lowercase=True)``.

        Raises
        ------
            ValidationError: If an override is not a TokenizerConfig field
                or padding_side is invalid.
        """
        config = config or TokenizerConfig()
        if overrides:
            try:
                config = config.override(**overrides)
            except TypeError as e:
                raise ValidationError(
                    f"Unknown tokenizer option: {e}",
                    details={"options": sorted(overrides)},
                ) from e
        self._config = config
        self._vocab: Vocabulary | None = None
        self._padding_side = "right"
        self.padding_side = padding_side

    def __repr__(self) -> str:
        c = self._config
        return (
            f"Tokenizer(vocab_size={self.vocab_size}, lowercase={c.lowercase}, "
            f"split_on_punctuation={c.split_on_punctuation}, "
            f"keep_punctuation={c.keep_punctuation})"
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def config(self) -> TokenizerConfig:
        """Current configuration (immutable; use the setters to change it)."""
        return self._config

    @config.setter
    def config(self, value: TokenizerConfig) -> None:
        if not isinstance(value, TokenizerConfig):
            raise ValidationError(
                f"config must be TokenizerConfig, got {type(value).__name__}",
                details={"param": "config"},
            )
        previous = self._config.special_tokens
        self._config = value
        if self._vocab is not None and value.special_tokens != previous:
            self._vocab = self._vocab.with_special_tokens(value.special_tokens)

    def set_lowercase(self, enable: bool) -> Tokenizer:
        """Fold ASCII letters to lowercase during normalization."""
        self._config = self._config.override(lowercase=bool(enable))
        return self

    def set_keep_punctuation(self, enable: bool) -> Tokenizer:
        """Emit punctuation met while splitting as one-character tokens."""
        self._config = self._config.override(keep_punctuation=bool(enable))
        return self

    def set_split_on_punctuation(self, enable: bool) -> Tokenizer:
        """Treat ASCII punctuation as delimiters."""
        self._config = self._config.override(split_on_punctuation=bool(enable))
        return self

    def add_delimiter(self, delim: str) -> Tokenizer:
        """
        Add one delimiter character.

        Raises
        ------
            ValidationError: If ``delim`` is not a single ASCII character.
        """
        self._config = self._config.with_delimiters([delim])
        return self

    def add_delimiters(self, delims: Iterable[str]) -> Tokenizer:
        """
        Add every character of ``delims`` as a delimiter.

        Example:
            >>> Tokenizer().add_delimiters(",;").tokenize("a,b;c")
            ['a', 'b', 'c']
        """
        self._config = self._config.with_delimiters(delims)
        return self

    def set_special_tokens(
        self,
        unk: str = "[UNK]",
        pad: str = "[PAD]",
        cls: str = "[CLS]",
        sep: str = "[SEP]",
    ) -> Tokenizer:
        """
        Set the marker strings. Omitted arguments reset to their defaults.

        An installed vocabulary re-resolves its special ids against the new
        strings immediately.
        """
        self.config = self._config.override(
            special_tokens=SpecialTokens(unk=unk, pad=pad, cls=cls, sep=sep)
        )
        return self

    @property
    def padding_side(self) -> str:
        """Default padding side for encode_batch(): "right" (default) or "left".

        Raises
        ------
        ValidationError
            If set to a value other than ``"left"`` or ``"right"``.
        """
        return self._padding_side

    @padding_side.setter
    def padding_side(self, value: str) -> None:
        if value not in ("left", "right"):
            raise ValidationError(
                f"padding_side must be 'left' or 'right', got {value!r}",
                details={"param": "padding_side", "value": value},
            )
        self._padding_side = value

    # =========================================================================
    # Vocabulary Installation
    # =========================================================================

    def _install(self, vocab: Vocabulary, source: str) -> None:
        self._vocab = vocab
        logger.debug(
            "Vocabulary installed",
            extra={
                "source": source,
                "vocab_size": len(vocab),
                "special_ids": {role: vocab.special_id(role) for role in ("unk", "pad", "cls", "sep")},
            },
        )

    def load_vocab(self, lines: Iterable[str]) -> Tokenizer:
        """
        Install a vocabulary from ordered lines, replacing any previous one.

        Trailing whitespace is stripped from each line and blank lines are
        skipped; the remaining lines get ids 0..N-1 in order.

        Args:
            lines: Vocabulary lines, e.g. ``open("vocab.txt")`` or a list.

        Raises
        ------
            ValidationError: If lines is a single string, e.g. a file path.
            VocabularyError: If a line is not a string.
        """
        _check_iterable("lines", lines, " Use load_vocab_file() to read a file.")
        self._install(Vocabulary.from_lines(lines, self._config.special_tokens), "lines")
        return self

    def load_vocab_file(self, path: str | os.PathLike[str]) -> Tokenizer:
        """
        Install a vocabulary from a one-token-per-line text file.

        Raises
        ------
            IOError: If the file cannot be opened or read. The current
                vocabulary is left untouched.
        """
        self._install(Vocabulary.from_file(path, self._config.special_tokens), "file")
        return self

    def build_vocab(
        self,
        texts: Iterable[str | bytes],
        min_frequency: int = 1,
        max_vocab_size: int = 50000,
    ) -> Tokenizer:
        """
        Build and install a vocabulary from a corpus.

        Each text is tokenized with the current configuration. Tokens seen
        fewer than ``min_frequency`` times are dropped; the rest are ranked
        by frequency, after the special tokens in the order pad, unk, cls,
        sep.

        Args:
            texts: Corpus texts.
            min_frequency: Minimum count for a token to be kept.
            max_vocab_size: Total size limit, special tokens included.

        Raises
        ------
            ValidationError: If texts is a single string or a limit is not an int.

        Example:
            >>> tok = Tokenizer(lowercase=True).build_vocab(["the cat", "The dog"])
            >>> tok.get_vocab()
            {'[PAD]': 0, '[UNK]': 1, '[CLS]': 2, '[SEP]': 3, 'the': 4, 'cat': 5, 'dog': 6}
        """
        _check_iterable("texts", texts, " Wrap a single text in a list.")
        min_frequency = _check_int("min_frequency", min_frequency)
        max_vocab_size = _check_int("max_vocab_size", max_vocab_size)

        counts: Counter[str] = Counter()
        for text in texts:
            counts.update(self.tokenize(text))

        vocab = Vocabulary.build(
            counts,
            self._config.special_tokens,
            min_frequency=min_frequency,
            max_vocab_size=max_vocab_size,
        )
        self._install(vocab, "corpus")
        return self

    def save_vocab(self, path: str | os.PathLike[str]) -> Path:
        """
        Write the vocabulary to ``path``, one token per line in id order.

        Returns
        -------
            The path written.

        Raises
        ------
            StateError: If no vocabulary is installed.
            IOError: If the file cannot be written.
        """
        if self._vocab is None:
            raise StateError(
                "No vocabulary to save. Call load_vocab() or build_vocab() first.",
                code="VOCAB_MISSING",
            )
        return self._vocab.save(path)

    # =========================================================================
    # Vocabulary Access
    # =========================================================================

    @property
    def has_vocab(self) -> bool:
        """True once a vocabulary has been loaded or built."""
        return self._vocab is not None

    @property
    def vocab(self) -> Vocabulary | None:
        """The installed vocabulary, or None."""
        return self._vocab

    @property
    def vocab_size(self) -> int:
        """Number of entries in the vocabulary (0 without one)."""
        return len(self._vocab) if self._vocab is not None else 0

    def get_vocab(self) -> dict[str, int]:
        """
        Get the complete vocabulary as a dictionary.

        Returns
        -------
            Dictionary mapping token strings to their IDs (empty without a
            vocabulary).
        """
        return self._vocab.to_dict() if self._vocab is not None else {}

    def id_to_token(self, token_id: int) -> str | None:
        """
        Get the string representation of a token ID.

        Returns
        -------
            The token string, or None if the ID is invalid or no vocabulary
            is installed.
        """
        if self._vocab is None:
            return None
        return self._vocab.token(token_id)

    def get_token_by_id(self, token_id: int) -> str:
        """
        Like :meth:`id_to_token`, but returns ``"[INVALID]"`` instead of None.

        Example:
            >>> tokenizer.get_token_by_id(-5)
            '[INVALID]'
        """
        token = self.id_to_token(token_id)
        return INVALID_TOKEN if token is None else token

    def token_to_id(self, token: str) -> int | None:
        """
        Get the ID of a token string.

        Returns
        -------
            The token ID, or None if the token is not in the vocabulary.
        """
        if self._vocab is None:
            return None
        return self._vocab.get(token)

    def __contains__(self, token: object) -> bool:
        """Check if a string exists as a single token in the vocabulary."""
        return self._vocab is not None and token in self._vocab

    def convert_ids_to_tokens(self, ids: Iterable[int]) -> list[str | None]:
        """Convert token IDs to their string representations."""
        return [self.id_to_token(token_id) for token_id in ids]

    def convert_tokens_to_ids(self, tokens: Iterable[str]) -> list[int | None]:
        """Convert token strings to their IDs."""
        return [self.token_to_id(token) for token in tokens]

    # =========================================================================
    # Tokenization
    # =========================================================================

    def tokenize(
        self, text: str | bytes, *, return_bytes: bool = False
    ) -> list[str] | list[bytes]:
        r"""
        Split text into normalized token strings.

        Any byte sequence is accepted. Multi-byte UTF-8 characters are never
        split and never case-folded; invalid or truncated sequences are
        carried through as-is.

        Args:
            text: Text to tokenize, as str or UTF-8 bytes.
            return_bytes: If True, return the raw token byte strings.

        Returns
        -------
            List of token strings (default) or bytes (if return_bytes=True).

        Raises
        ------
            ValidationError: If text is neither str nor bytes.

        Example:
            >>> Tokenizer(lowercase=True).tokenize("Café  NAÏVE")
            ['café', 'naÏve']

            >>> Tokenizer().tokenize("café", return_bytes=True)
            [b'caf\xc3\xa9']
        """
        config = self._config
        data, errors = scanner.as_bytes(text)
        tokens = scanner.scan(data, config)
        if return_bytes:
            return tokens
        return [token.decode("utf-8", errors=errors) for token in tokens]

    def count_tokens(self, text: str | bytes) -> int:
        """
        Count the tokens :meth:`tokenize` would produce, without building them.

        Example:
            >>> Tokenizer().count_tokens("one two  three")
            3
        """
        data, _ = scanner.as_bytes(text)
        return scanner.count(data, self._config)

    @staticmethod
    def simple_split(text: str | bytes) -> list[str]:
        """Tokenize with the default configuration (whitespace splitting only)."""
        return Tokenizer().tokenize(text)

    # =========================================================================
    # Core Encoding/Decoding
    # =========================================================================

    def encode(self, text: str | bytes) -> list[int]:
        """
        Convert text to token IDs.

        Each token maps to its vocabulary id; a token missing from the
        vocabulary maps to ``unk_token_id``, or to -1 when the vocabulary has
        no unknown entry either.

        Without a vocabulary the result is the positional indices
        ``[0, 1, ..., n - 1]``, one per token.

        Example:
            >>> Tokenizer().encode("no vocab here")
            [0, 1, 2]
        """
        vocab = self._vocab
        tokens = self.tokenize(text)
        if vocab is None:
            return list(range(len(tokens)))

        unk_id = vocab.special_id("unk")
        if unk_id is None:
            unk_id = UNKNOWN_ID
        ids = []
        for token in tokens:
            token_id = vocab.get(token)
            ids.append(unk_id if token_id is None else token_id)
        return ids

    def decode(self, ids: Iterable[int]) -> str:
        """
        Convert token IDs back to space-joined text.

        Ids outside the vocabulary are skipped, and so is every pad token.
        Other special tokens ([CLS], [SEP], [UNK]) appear literally.

        Returns
        -------
            Decoded text, or "" when no vocabulary is installed.

        Example:
            >>> tokenizer.decode([101, 7592, 999, 102, 0, 0])
            '[CLS] hello ! [SEP]'
        """
        vocab = self._vocab
        if vocab is None:
            return ""
        pad = vocab.special_tokens.pad
        parts = []
        for token_id in ids:
            token = vocab.token(token_id)
            if token is None or token == pad:
                continue
            parts.append(token)
        return " ".join(parts)

    def encode_sequence(
        self,
        text: str | bytes,
        max_length: int = 512,
        add_special_tokens: bool = True,
    ) -> list[int]:
        """
        Encode text as a model input sequence: ``[CLS] tokens... [SEP]``.

        Content tokens are truncated from the end so the whole sequence fits
        ``max_length``. A marker whose id is not in the vocabulary is left
        out and gives its slot back to content.

        Args:
            text: Text to encode.
            max_length: Maximum sequence length. Values of 0 or less keep no
                content tokens; the markers are still added.
            add_special_tokens: If False, or without a vocabulary, only
                truncate ``encode(text)``.

        Example:
            >>> tokenizer.encode_sequence("a b c d e f", max_length=5)
            [101, 1037, 1038, 1039, 102]
        """
        max_length = _check_int("max_length", max_length)
        vocab = self._vocab
        ids = self.encode(text)

        if not add_special_tokens or vocab is None:
            return ids[: max(max_length, 0)]

        cls_id = vocab.special_id("cls")
        sep_id = vocab.special_id("sep")

        budget = max_length
        if cls_id is not None:
            budget -= 1
        if sep_id is not None:
            budget -= 1

        result = [] if cls_id is None else [cls_id]
        result.extend(ids[: max(budget, 0)])
        if sep_id is not None:
            result.append(sep_id)
        return result

    def encode_batch(
        self,
        texts: Sequence[str | bytes],
        max_length: int = 512,
        add_special_tokens: bool = True,
        *,
        padding_side: str | None = None,
    ) -> BatchEncoding:
        """
        Encode several texts with :meth:`encode_sequence`.

        Args:
            texts: Texts to encode.
            max_length: Per-sequence maximum length.
            add_special_tokens: Add [CLS]/[SEP] markers.
            padding_side: Overrides the tokenizer's ``padding_side``.

        Returns
        -------
            BatchEncoding, padded on export with ``pad_token_id``.

        Raises
        ------
            ValidationError: If texts is a single string instead of a sequence.

        Example:
            >>> batch = tokenizer.encode_batch(["Hello world", "Hi"], max_length=8)
            >>> batch.to_list()["attention_mask"]
            [[1, 1, 1, 1], [1, 1, 1, 0]]
        """
        if isinstance(texts, (str, bytes)) or not isinstance(texts, Sequence):
            raise ValidationError(
                f"texts must be a list of str, got {type(texts).__name__}",
                details={"param": "texts", "type": type(texts).__name__},
            )
        sequences = [self.encode_sequence(text, max_length, add_special_tokens) for text in texts]
        return BatchEncoding(
            sequences,
            padding_side=padding_side if padding_side is not None else self._padding_side,
            pad_token_id=self.pad_token_id,
        )

    def __call__(
        self,
        text: str | bytes | Sequence[str | bytes],
        max_length: int = 512,
        add_special_tokens: bool = True,
        **kwargs: Any,
    ) -> BatchEncoding:
        """
        HuggingFace-style callable: encode one text or a list into a batch.

        A single string is wrapped as a batch of one.

        Raises
        ------
            ValidationError: If an unsupported keyword argument is given.

        Example:
            >>> batch = tokenizer(["Hello", "World!"], max_length=16)
            >>> batch["input_ids"]
        """
        if kwargs:
            raise ValidationError(
                f"Unknown argument(s) for tokenizer(): {', '.join(sorted(kwargs))}",
                details={"arguments": sorted(kwargs)},
            )
        texts = [text] if isinstance(text, (str, bytes)) else text
        return self.encode_batch(texts, max_length, add_special_tokens)
