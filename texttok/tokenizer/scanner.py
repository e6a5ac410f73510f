"""
Delimiter scanner.

Splits UTF-8 text into token spans. ``tokenize`` and ``count_tokens`` both
consume :func:`iter_spans`, so the token count can never drift from the
tokens actually produced.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..exceptions import ValidationError
from .config import TokenizerConfig
from .utf8 import PUNCTUATION_BYTES, ascii_lower, utf8_char_length

__all__ = ["as_bytes", "iter_spans", "normalize", "scan", "count"]

Span = tuple[int, int]


def as_bytes(text: str | bytes) -> tuple[bytes, str]:
    """
    Return the UTF-8 bytes of ``text`` and the error handler that decodes
    its token slices back to ``str``.

    ``str`` input round-trips exactly (lone surrogates included);
    ``bytes`` input may hold invalid UTF-8, which surrogateescape preserves.
    """
    if isinstance(text, str):
        return text.encode("utf-8", errors="surrogatepass"), "surrogatepass"
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text), "surrogateescape"
    raise ValidationError(
        f"text must be str or bytes, got {type(text).__name__}",
        details={"param": "text", "type": type(text).__name__},
    )


def iter_spans(data: bytes, config: TokenizerConfig) -> Iterator[Span]:
    """
    Yield ``(start, end)`` byte spans of the tokens in ``data``, in order.

    A byte with the high bit set starts a multi-byte character; the scanner
    jumps over the length its lead byte declares, so such characters are
    never split and never act as delimiters. An ASCII byte splits when it
    is a delimiter, or punctuation while ``split_on_punctuation`` is set.
    At a split the pending span is emitted, then the whole run of splitting
    bytes is consumed; with ``keep_punctuation`` every punctuation byte in
    that run becomes a one-byte span of its own.
    """
    delims = config.delimiter_bytes
    if config.split_on_punctuation:
        splitters = delims | PUNCTUATION_BYTES
    else:
        splitters = delims
    keep_punct = config.keep_punctuation

    size = len(data)
    start = 0
    i = 0
    while i < size:
        c = data[i]
        if c & 0x80:
            i += utf8_char_length(c)
            continue
        if c not in splitters:
            i += 1
            continue

        if i > start:
            yield start, i

        # Splitters are all ASCII, so the run stops at any multi-byte lead
        while i < size and data[i] in splitters:
            if keep_punct and data[i] in PUNCTUATION_BYTES:
                yield i, i + 1
            i += 1
        start = i

    # A truncated trailing character leaves i past the end
    if start < size:
        yield start, size


def normalize(token: bytes, config: TokenizerConfig) -> bytes:
    """Apply the configured normalization (ASCII case folding) to one token."""
    if config.lowercase:
        return ascii_lower(token)
    return token


def scan(data: bytes, config: TokenizerConfig) -> list[bytes]:
    """Return the normalized token byte strings of ``data``."""
    return [normalize(data[start:end], config) for start, end in iter_spans(data, config)]


def count(data: bytes, config: TokenizerConfig) -> int:
    """Number of tokens :func:`scan` would return, without building them."""
    n = 0
    for _ in iter_spans(data, config):
        n += 1
    return n
