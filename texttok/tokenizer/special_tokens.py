"""
Special token handling for tokenizers.

Provides properties and methods for the four marker tokens (UNK, PAD, CLS,
SEP). This is a mixin class used by Tokenizer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import TokenizerConfig
    from .vocab import Vocabulary


class SpecialTokensMixin:
    """
    Special token properties and methods for Tokenizer.

    Requires the following attributes on the implementing class:
    - _config: TokenizerConfig
    - _vocab: Vocabulary | None

    Ids are None when no vocabulary is installed or when the marker string
    is not one of its entries. That is a normal state, not an error:
    encode_sequence() simply leaves the missing marker out.
    """

    _config: TokenizerConfig
    _vocab: Vocabulary | None

    def _special_id(self, role: str) -> int | None:
        if self._vocab is None:
            return None
        return self._vocab.special_id(role)

    @property
    def unk_token_id(self) -> int | None:
        """
        Id substituted for tokens missing from the vocabulary.

        Example:
            >>> tokenizer.unk_token_id  # BERT vocab.txt
            100
        """
        return self._special_id("unk")

    @property
    def unk_token(self) -> str:
        """Configured unknown-token string (default "[UNK]")."""
        return self._config.special_tokens.unk

    @property
    def pad_token_id(self) -> int | None:
        """Padding token id. Pad tokens are always dropped by decode()."""
        return self._special_id("pad")

    @property
    def pad_token(self) -> str:
        """Configured padding string (default "[PAD]")."""
        return self._config.special_tokens.pad

    @property
    def cls_token_id(self) -> int | None:
        """Id placed first by encode_sequence()."""
        return self._special_id("cls")

    @property
    def cls_token(self) -> str:
        """Configured sequence-start string (default "[CLS]")."""
        return self._config.special_tokens.cls

    @property
    def sep_token_id(self) -> int | None:
        """Id placed last by encode_sequence()."""
        return self._special_id("sep")

    @property
    def sep_token(self) -> str:
        """Configured separator string (default "[SEP]")."""
        return self._config.special_tokens.sep

    @property
    def special_ids(self) -> frozenset[int]:
        """
        Immutable set of all resolved special token IDs.

        Use for fast O(1) membership testing.

        Example:
            >>> tokenizer.special_ids
            frozenset({0, 1, 2, 3})
        """
        ids = (self.unk_token_id, self.pad_token_id, self.cls_token_id, self.sep_token_id)
        return frozenset(i for i in ids if i is not None)

    def is_special_id(self, token_id: int) -> bool:
        """
        Check if a token ID is one of the resolved special tokens.

        Example:
            >>> tokenizer.is_special_id(tokenizer.cls_token_id)
            True
        """
        return token_id in self.special_ids
