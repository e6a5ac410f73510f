"""Configuration for text splitting and special tokens."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from ..exceptions import ValidationError

__all__ = ["TokenizerConfig", "SpecialTokens", "DEFAULT_DELIMITERS"]

# space, tab, newline, carriage return, form feed, vertical tab
DEFAULT_DELIMITERS = frozenset(" \t\n\r\f\v")


def _check_delimiter(delim: object) -> str:
    if not isinstance(delim, str) or len(delim) != 1 or ord(delim) > 0x7F:
        raise ValidationError(
            f"delimiter must be a single ASCII character, got {delim!r}",
            details={"param": "delimiter", "value": delim},
        )
    return delim


@dataclass(frozen=True)
class SpecialTokens:
    """
    Strings of the four reserved marker tokens.

    A vocabulary resolves each string to an id when it is installed; a
    string missing from the vocabulary simply has no id.

    Attributes
    ----------
        unk: Replaces tokens missing from the vocabulary. Default "[UNK]".
        pad: Fills batches to a common length; never decoded. Default "[PAD]".
        cls: Starts an encoded sequence. Default "[CLS]".
        sep: Ends an encoded sequence. Default "[SEP]".
    """

    unk: str = "[UNK]"
    pad: str = "[PAD]"
    cls: str = "[CLS]"
    sep: str = "[SEP]"

    def __post_init__(self) -> None:
        for name in ("unk", "pad", "cls", "sep"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValidationError(
                    f"special token {name!r} must be a non-empty string, got {value!r}",
                    details={"param": name, "value": value},
                )

    def build_order(self) -> tuple[str, str, str, str]:
        """Order in which a built vocabulary reserves the specials: pad, unk, cls, sep."""
        return (self.pad, self.unk, self.cls, self.sep)


@dataclass(frozen=True)
class TokenizerConfig:
    r"""
    How text is split into tokens.

    TokenizerConfig is immutable. ``Tokenizer``'s fluent setters swap in a
    modified copy, so a config captured before a call never changes under it.

        >>> base = TokenizerConfig(lowercase=True)
        >>> bert = base.override(split_on_punctuation=True, keep_punctuation=True)

    Attributes
    ----------
        delimiters: Single ASCII characters that always split tokens.
            Defaults to space, ``\t``, ``\n``, ``\r``, ``\f`` and ``\v``.

        lowercase: Fold ASCII letters to lowercase. Non-ASCII characters are
            never touched. Default False.

        split_on_punctuation: Treat every ASCII punctuation byte as an extra
            delimiter. Default False.

        keep_punctuation: Emit each punctuation byte met while splitting as
            its own one-character token instead of dropping it. Default False.

        special_tokens: Strings of the unk/pad/cls/sep markers.
    """

    delimiters: frozenset[str] = DEFAULT_DELIMITERS
    lowercase: bool = False
    split_on_punctuation: bool = False
    keep_punctuation: bool = False
    special_tokens: SpecialTokens = field(default_factory=SpecialTokens)

    def __post_init__(self) -> None:
        delimiters = frozenset(_check_delimiter(d) for d in self.delimiters)
        object.__setattr__(self, "delimiters", delimiters)
        if not isinstance(self.special_tokens, SpecialTokens):
            raise ValidationError(
                "special_tokens must be a SpecialTokens instance, "
                f"got {type(self.special_tokens).__name__}",
                details={"param": "special_tokens"},
            )

    @property
    def delimiter_bytes(self) -> frozenset[int]:
        """Delimiters as byte values, the form the scanner compares against."""
        return frozenset(ord(d) for d in self.delimiters)

    def override(self, **kwargs: object) -> TokenizerConfig:
        """
        Create a new config with specified fields overridden.

        Example:
            >>> config = TokenizerConfig()
            >>> config.override(lowercase=True).lowercase
            True
            >>> config.lowercase
            False
        """
        return replace(self, **kwargs)

    def with_delimiters(self, delims: Iterable[str]) -> TokenizerConfig:
        """Return a config whose delimiter set also contains ``delims``."""
        added = frozenset(_check_delimiter(d) for d in delims)
        return replace(self, delimiters=self.delimiters | added)
