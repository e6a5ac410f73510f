"""
Tokenizer module - Text splitting, encoding and decoding.

Provides:
- Tokenizer: Text-to-token splitting, encoding to ids and decoding
- TokenizerConfig: Immutable splitting configuration
- SpecialTokens: Marker token strings (UNK, PAD, CLS, SEP)
- Vocabulary: Bidirectional token/id mapping
- BatchEncoding: Padded batch container
"""

from .batch import BatchEncoding
from .config import DEFAULT_DELIMITERS, SpecialTokens, TokenizerConfig
from .tokenizer import INVALID_TOKEN, UNKNOWN_ID, Tokenizer
from .utf8 import utf8_char_length
from .vocab import Vocabulary

__all__ = [
    # Core
    "Tokenizer",
    # Configuration
    "TokenizerConfig",
    "SpecialTokens",
    "DEFAULT_DELIMITERS",
    # Vocabulary
    "Vocabulary",
    "INVALID_TOKEN",
    "UNKNOWN_ID",
    # Batch Encoding
    "BatchEncoding",
    # Primitives
    "utf8_char_length",
]
