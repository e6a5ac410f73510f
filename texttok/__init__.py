"""
texttok - Delimiter-based text tokenization for ML preprocessing.

Splits raw text into tokens on configurable ASCII delimiters and
punctuation, maps tokens to vocabulary ids, and assembles fixed-size
``[CLS] ... [SEP]`` sequences for downstream models.

Quick Start
-----------

    >>> from texttok import Tokenizer
    >>>
    >>> tokenizer = (
    ...     Tokenizer()
    ...     .set_lowercase(True)
    ...     .set_split_on_punctuation(True)
    ...     .set_keep_punctuation(True)
    ... )
    >>> tokenizer.tokenize("Hello, world!")
    ['hello', ',', 'world', '!']

Vocabulary files (one token per line, e.g. BERT's vocab.txt):

    >>> tokenizer.load_vocab_file("vocab.txt")
    >>> ids = tokenizer.encode_sequence("What is machine learning?", max_length=20)
    >>> tokenizer.decode(ids)
    '[CLS] what is machine learning ? [SEP]'

Or build one from a corpus:

    >>> tokenizer.build_vocab(corpus, min_frequency=2, max_vocab_size=30000)
    >>> tokenizer.save_vocab("vocab.txt")

Batches pad to a common width:

    >>> batch = tokenizer.encode_batch(["Hello world", "Hi"], max_length=16)
    >>> batch.to_list()["attention_mask"]
    [[1, 1, 1, 1], [1, 1, 1, 0]]


Core Classes
------------

- `Tokenizer` - Splitting, encoding, decoding, sequence assembly
- `TokenizerConfig` - Immutable splitting configuration
- `Vocabulary` - Token/id mapping with resolved special ids
- `BatchEncoding` - Padded batch export (lists or NumPy)

Logging
-------

    >>> import texttok
    >>> texttok.setup_logging("DEBUG", format="human")

Or set ``TEXTTOK_LOG_LEVEL`` / ``TEXTTOK_LOG_FORMAT`` in the environment.
"""

from texttok._logging import setup_logging
from texttok._version import __version__ as __version__
from texttok.exceptions import (
    InteropError,
    IOError,
    StateError,
    TexttokError,
    TokenizerError,
    ValidationError,
    VocabularyError,
)
from texttok.tokenizer import (
    INVALID_TOKEN,
    UNKNOWN_ID,
    BatchEncoding,
    SpecialTokens,
    Tokenizer,
    TokenizerConfig,
    Vocabulary,
)

__all__ = [
    # Core
    "Tokenizer",
    "TokenizerConfig",
    "SpecialTokens",
    "Vocabulary",
    "BatchEncoding",
    "INVALID_TOKEN",
    "UNKNOWN_ID",
    # Logging
    "setup_logging",
    # Exceptions
    "TexttokError",
    "TokenizerError",
    "VocabularyError",
    "IOError",
    "InteropError",
    "StateError",
    "ValidationError",
]
