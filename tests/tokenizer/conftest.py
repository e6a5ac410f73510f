"""
Shared fixtures for tokenizer tests.

Provides a small BERT-style vocabulary, the standard tokenizer
configurations, and collections of test strings.
"""

import pytest

from texttok import Tokenizer

# =============================================================================
# Vocabulary
# =============================================================================

# BERT-style layout: pad first, then the other markers, then regular tokens.
VOCAB_LINES = [
    "[PAD]",
    "[UNK]",
    "[CLS]",
    "[SEP]",
    "hello",
    "world",
    ",",
    "!",
    ".",
    "?",
    "what",
    "is",
    "machine",
    "learning",
    "the",
    "a",
    "test",
    "café",
    "你好",
    "🚀",
]

PAD_ID = 0
UNK_ID = 1
CLS_ID = 2
SEP_ID = 3


def vocab_id(token):
    """Id of ``token`` in VOCAB_LINES."""
    return VOCAB_LINES.index(token)


# =============================================================================
# Test Strings
# =============================================================================

BASIC_STRINGS = [
    "Hello",
    "Hello, world!",
    "The quick brown fox jumps over the lazy dog.",
    "Testing 123",
    "",
]

WHITESPACE_STRINGS = [
    " ",
    "   ",
    "\t",
    "\n",
    "a\tb\nc\rd\fe\vf",
    "  leading",
    "trailing  ",
    "multiple   spaces",
]

PUNCTUATION_STRINGS = [
    "Hello!",
    "Wait... what?!",
    "!!!",
    "ab!!",
    "user@example.com",
    "It's",
    "C++ vs Python",
    "(parenthetical)",
    "a - b",
]

MULTILINGUAL_STRINGS = [
    "café naïve résumé",
    "Привет мир",
    "你好世界",
    "こんにちは",
    "مرحبا",
    "Hello 世界!",
    "🚀🌟💡",
    "👨‍👩‍👧‍👦 family",
]

# Invalid or truncated UTF-8, only expressible as bytes
MALFORMED_BYTES = [
    b"\xff\xfe abc",
    b"ab\xe4",
    b"\xc3 x",
    b"\xc3A b",
    b"\x80\x80 ok",
    b"caf\xc3\xa9",
]

ALL_STRINGS = (
    BASIC_STRINGS + WHITESPACE_STRINGS + PUNCTUATION_STRINGS + MULTILINGUAL_STRINGS
)


# =============================================================================
# Tokenizer Fixtures
# =============================================================================


@pytest.fixture
def plain_tokenizer():
    """Default tokenizer: whitespace splitting only, no vocabulary."""
    return Tokenizer()


@pytest.fixture
def bert_tokenizer():
    """Lowercasing, punctuation-splitting tokenizer without a vocabulary."""
    return (
        Tokenizer()
        .set_lowercase(True)
        .set_split_on_punctuation(True)
        .set_keep_punctuation(True)
    )


@pytest.fixture
def tokenizer(bert_tokenizer):
    """BERT-style tokenizer with VOCAB_LINES installed."""
    return bert_tokenizer.load_vocab(VOCAB_LINES)


@pytest.fixture
def vocab_file(tmp_path):
    """VOCAB_LINES written to a vocab.txt file."""
    path = tmp_path / "vocab.txt"
    path.write_text("\n".join(VOCAB_LINES) + "\n", encoding="utf-8")
    return path
