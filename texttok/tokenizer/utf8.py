"""
Byte-level primitives shared by the scanner, the counter and normalization.

All three walk UTF-8 text one character at a time and must agree exactly on
where a character ends, including for truncated or invalid input.
"""

from __future__ import annotations

import string

__all__ = ["utf8_char_length", "is_ascii_punct", "ascii_lower", "PUNCTUATION_BYTES"]

# The C-locale ispunct() class: every printable ASCII byte that is neither
# alphanumeric nor space.
PUNCTUATION_BYTES = frozenset(string.punctuation.encode("ascii"))

_UPPER_A = ord("A")
_UPPER_Z = ord("Z")
_CASE_OFFSET = ord("a") - ord("A")


def utf8_char_length(lead: int) -> int:
    """
    Byte length of the UTF-8 character starting with ``lead``.

    The lead byte alone decides the length; the following bytes are not
    checked. An invalid lead byte (a stray continuation byte or 0xF8-0xFF)
    counts as a single byte.

    Example:
        >>> utf8_char_length(0x41)  # 'A'
        1
        >>> utf8_char_length("é".encode()[0])
        2
    """
    if lead & 0x80 == 0:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


def is_ascii_punct(byte: int) -> bool:
    """True for ASCII punctuation bytes (``!"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~``)."""
    return byte in PUNCTUATION_BYTES


def ascii_lower(data: bytes) -> bytes:
    """
    Fold ASCII ``A``-``Z`` to lowercase, leaving every other byte untouched.

    Multi-byte characters are copied whole, using the length declared by
    their lead byte (clipped at the end of ``data``), so bytes swallowed by
    a malformed sequence are never folded either.
    """
    out = bytearray()
    i = 0
    size = len(data)
    while i < size:
        c = data[i]
        if c & 0x80 == 0:
            out.append(c + _CASE_OFFSET if _UPPER_A <= c <= _UPPER_Z else c)
            i += 1
        else:
            length = utf8_char_length(c)
            out += data[i : i + length]
            i += length
    return bytes(out)
