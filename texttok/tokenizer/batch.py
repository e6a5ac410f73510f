"""
Batch tokenization container.

Holds the id sequences of several texts and pads them to a common width on
export, producing the rectangular input_ids/attention_mask pair that model
code expects.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ..exceptions import InteropError, ValidationError

__all__ = ["BatchEncoding"]

_PADDING_SIDES = ("left", "right")


def _check_padding_side(value: object) -> str:
    if value not in _PADDING_SIDES:
        raise ValidationError(
            f"padding_side must be 'left' or 'right', got {value!r}.",
            details={"param": "padding_side", "value": value, "allowed": list(_PADDING_SIDES)},
        )
    return value  # type: ignore[return-value]


class BatchEncoding:
    """
    Container for batch tokenization results.

    **List-like interface** - Works like a list of id lists:

        >>> batch = tokenizer.encode_batch(["Hello world", "Hi"])
        >>> len(batch)
        2
        >>> batch[1]
        [2, 7592, 3]

    **Dictionary-like access** - Compatible with HuggingFace patterns:

        >>> batch["input_ids"]       # padded 2D list
        >>> batch["attention_mask"]  # 1 for real tokens, 0 for padding

    Sequences are stored unpadded; padding is applied on export, using
    ``padding_side`` and ``pad_token_id`` (both overridable per call).
    """

    __slots__ = ("_sequences", "_padding_side", "_pad_token_id")

    def __init__(
        self,
        sequences: list[list[int]] | None = None,
        *,
        padding_side: str = "right",
        pad_token_id: int | None = None,
    ):
        self._sequences = [list(seq) for seq in sequences or []]
        self._padding_side = _check_padding_side(padding_side)
        self._pad_token_id = pad_token_id

    def __len__(self) -> int:
        return len(self._sequences)

    def __getitem__(self, key: int | str) -> Any:
        """
        Get a sequence by index (list-like) or a padded field by key (dict-like).

        Raises
        ------
            KeyError: If key is a string other than "input_ids" or "attention_mask".
            IndexError: If the index is out of range.
        """
        if isinstance(key, str):
            if key == "input_ids":
                return self.to_list(return_attention_mask=False)["input_ids"]
            if key == "attention_mask":
                return self.to_list()["attention_mask"]
            raise KeyError(f"{key!r}. Available keys: 'input_ids', 'attention_mask'")
        return list(self._sequences[key])

    def __contains__(self, key: object) -> bool:
        return key in ("input_ids", "attention_mask")

    def keys(self) -> list[str]:
        return ["input_ids", "attention_mask"]

    def __iter__(self) -> Iterator[list[int]]:
        for seq in self._sequences:
            yield list(seq)

    def __repr__(self) -> str:
        return (
            f"BatchEncoding(num_sequences={len(self)}, "
            f"total_tokens={self.total_tokens}, padding_side={self._padding_side!r})"
        )

    @property
    def total_tokens(self) -> int:
        """Number of ids across all sequences, padding excluded."""
        return sum(len(seq) for seq in self._sequences)

    def lengths(self) -> list[int]:
        """Unpadded length of each sequence."""
        return [len(seq) for seq in self._sequences]

    def max_length(self) -> int:
        """Length of the longest sequence (0 for an empty batch)."""
        return max(self.lengths(), default=0)

    @property
    def padding_side(self) -> str:
        """
        Side for padding: "right" (default) or "left".

        Raises
        ------
        ValidationError
            If set to a value other than ``"left"`` or ``"right"``.
        """
        return self._padding_side

    @padding_side.setter
    def padding_side(self, value: str) -> None:
        self._padding_side = _check_padding_side(value)

    @property
    def pad_token_id(self) -> int | None:
        """Pad id used on export. None falls back to 0."""
        return self._pad_token_id

    @pad_token_id.setter
    def pad_token_id(self, value: int | None) -> None:
        self._pad_token_id = value

    def to_list(
        self,
        padding: bool = True,
        pad_id: int | None = None,
        padding_side: str | None = None,
        max_length: int | None = None,
        return_attention_mask: bool = True,
    ) -> dict[str, list[list[int]]]:
        """
        Convert batch to padded Python lists.

        Args:
            padding: If True (default), pad shorter sequences.
            pad_id: Id used for padding. Defaults to ``pad_token_id``, or 0
                if the vocabulary has no pad entry.
            padding_side: "right" (pad at end) or "left" (pad at start).
                Defaults to ``padding_side``.
            max_length: Width to pad to. Defaults to the longest sequence;
                a smaller value is raised to the longest sequence, since
                sequences are never cut here.
            return_attention_mask: If True (default), include attention_mask.

        Returns
        -------
            Dictionary with:
            - "input_ids": 2D list of padded token IDs
            - "attention_mask": 2D list of masks (1=real, 0=padding)

        Raises
        ------
            ValidationError: If padding_side is not 'left' or 'right', or
                padding=False and the sequences differ in length.
        """
        final_side = _check_padding_side(
            padding_side if padding_side is not None else self._padding_side
        )
        final_pad_id = pad_id if pad_id is not None else (self._pad_token_id or 0)

        lengths = self.lengths()
        if not padding and len(set(lengths)) > 1:
            raise ValidationError(
                f"Sequences have different lengths {sorted(set(lengths))}. "
                "Use padding=True to pad to uniform length.",
                details={"lengths": lengths},
            )

        width = max(self.max_length(), max_length or 0)
        input_ids: list[list[int]] = []
        attention_mask: list[list[int]] = []
        for seq in self._sequences:
            fill = width - len(seq)
            if final_side == "right":
                input_ids.append(seq + [final_pad_id] * fill)
                attention_mask.append([1] * len(seq) + [0] * fill)
            else:
                input_ids.append([final_pad_id] * fill + seq)
                attention_mask.append([0] * fill + [1] * len(seq))

        output = {"input_ids": input_ids}
        if return_attention_mask:
            output["attention_mask"] = attention_mask
        return output

    def to_numpy(self, **kwargs: Any) -> dict[str, Any]:
        """
        Padded batch as int64 NumPy arrays of shape (num_sequences, width).

        Accepts the same keyword arguments as :meth:`to_list`.

        Raises
        ------
            InteropError: If NumPy is not installed.
        """
        try:
            import numpy as np
        except ImportError as e:
            raise InteropError(
                "to_numpy() requires NumPy. Install it with: pip install 'texttok[numpy]'",
                details={"missing": "numpy"},
            ) from e

        padded = self.to_list(**kwargs)
        width = len(padded["input_ids"][0]) if padded["input_ids"] else 0
        return {
            key: np.asarray(rows, dtype=np.int64).reshape(len(rows), width)
            for key, rows in padded.items()
        }
