"""
Batch encoding tests.

Tests for Tokenizer.encode_batch(), Tokenizer.__call__() and the
BatchEncoding container.
"""

import pytest

from tests.tokenizer.conftest import CLS_ID, PAD_ID, SEP_ID, vocab_id

HELLO = vocab_id("hello")
WORLD = vocab_id("world")


@pytest.fixture
def batch(tokenizer):
    return tokenizer.encode_batch(["hello world", "hello"])


class TestEncodeBatch:
    """Tokenizer.encode_batch()."""

    def test_sequences(self, batch):
        """Each text is encoded with encode_sequence()."""
        assert len(batch) == 2
        assert batch[0] == [CLS_ID, HELLO, WORLD, SEP_ID]
        assert batch[1] == [CLS_ID, HELLO, SEP_ID]
        assert list(batch) == [batch[0], batch[1]]

    def test_lengths(self, batch):
        """Unpadded sizes are reported."""
        assert batch.lengths() == [4, 3]
        assert batch.max_length() == 4
        assert batch.total_tokens == 7

    def test_max_length_applies_per_sequence(self, tokenizer):
        """Truncation is applied to every sequence."""
        batch = tokenizer.encode_batch(["hello world hello", "hello"], max_length=3)
        assert batch.lengths() == [3, 3]

    def test_without_special_tokens(self, tokenizer):
        """add_special_tokens=False skips the markers."""
        batch = tokenizer.encode_batch(["hello world"], add_special_tokens=False)
        assert batch[0] == [HELLO, WORLD]

    def test_empty_batch(self, tokenizer):
        """An empty list gives an empty batch."""
        batch = tokenizer.encode_batch([])
        assert len(batch) == 0
        assert batch.to_list() == {"input_ids": [], "attention_mask": []}

    @pytest.mark.parametrize("bad", ["hello", b"hello", 42, {"a", "b"}])
    def test_rejects_non_sequence(self, tokenizer, texttok, bad):
        """A bare string or non-sequence is rejected."""
        with pytest.raises(texttok.ValidationError):
            tokenizer.encode_batch(bad)

    def test_pad_id_from_vocab(self, batch):
        """The batch carries the vocabulary's pad id."""
        assert batch.pad_token_id == PAD_ID


class TestPadding:
    """BatchEncoding.to_list() padding."""

    def test_right_padding(self, batch):
        """Right padding appends pad ids and zero mask."""
        out = batch.to_list()
        assert out["input_ids"] == [
            [CLS_ID, HELLO, WORLD, SEP_ID],
            [CLS_ID, HELLO, SEP_ID, PAD_ID],
        ]
        assert out["attention_mask"] == [[1, 1, 1, 1], [1, 1, 1, 0]]

    def test_left_padding(self, batch):
        """Left padding prepends."""
        out = batch.to_list(padding_side="left")
        assert out["input_ids"][1] == [PAD_ID, CLS_ID, HELLO, SEP_ID]
        assert out["attention_mask"][1] == [0, 1, 1, 1]

    def test_tokenizer_padding_side(self, tokenizer):
        """The tokenizer's padding_side is the batch default."""
        tokenizer.padding_side = "left"
        batch = tokenizer.encode_batch(["hello world", "hello"])
        assert batch.padding_side == "left"
        assert batch["attention_mask"][1] == [0, 1, 1, 1]

    def test_padding_side_override(self, tokenizer):
        """encode_batch(padding_side=...) overrides the tokenizer default."""
        batch = tokenizer.encode_batch(["hello"], padding_side="left")
        assert batch.padding_side == "left"
        assert tokenizer.padding_side == "right"

    def test_custom_pad_id(self, batch):
        """pad_id overrides the batch pad id."""
        assert batch.to_list(pad_id=-100)["input_ids"][1][-1] == -100

    def test_pad_id_fallback_zero(self, texttok):
        """Without a pad entry, padding uses 0."""
        tokenizer = texttok.Tokenizer().load_vocab(["[CLS]", "[SEP]", "a", "b"])
        batch = tokenizer.encode_batch(["a b", "a"])
        assert batch.pad_token_id is None
        assert batch.to_list()["input_ids"][1] == [0, 2, 1, 0]

    def test_pad_to_max_length(self, batch):
        """max_length widens every row."""
        out = batch.to_list(max_length=6)
        assert [len(row) for row in out["input_ids"]] == [6, 6]
        assert out["attention_mask"][0] == [1, 1, 1, 1, 0, 0]

    def test_max_length_never_truncates(self, batch):
        """A max_length below the longest row is ignored."""
        assert len(batch.to_list(max_length=2)["input_ids"][0]) == 4

    def test_without_attention_mask(self, batch):
        """return_attention_mask=False omits the mask."""
        assert set(batch.to_list(return_attention_mask=False)) == {"input_ids"}

    def test_no_padding_ragged(self, batch, texttok):
        """padding=False on ragged sequences raises."""
        with pytest.raises(texttok.ValidationError):
            batch.to_list(padding=False)

    def test_no_padding_uniform(self, tokenizer):
        """padding=False works when sequences already match."""
        batch = tokenizer.encode_batch(["hello", "world"])
        assert batch.to_list(padding=False)["input_ids"] == [
            [CLS_ID, HELLO, SEP_ID],
            [CLS_ID, WORLD, SEP_ID],
        ]

    @pytest.mark.parametrize("side", ["center", "", None, "LEFT"])
    def test_invalid_padding_side(self, batch, texttok, side):
        """Padding side must be 'left' or 'right'."""
        with pytest.raises(texttok.ValidationError):
            batch.padding_side = side

    def test_invalid_tokenizer_padding_side(self, texttok):
        """The tokenizer validates padding_side at construction."""
        with pytest.raises(texttok.ValidationError):
            texttok.Tokenizer(padding_side="middle")


class TestDictInterface:
    """Dictionary-style access."""

    def test_keys(self, batch):
        assert batch.keys() == ["input_ids", "attention_mask"]
        assert "input_ids" in batch
        assert "token_type_ids" not in batch

    def test_getitem_keys(self, batch):
        """String keys return padded rows."""
        assert batch["input_ids"] == batch.to_list()["input_ids"]
        assert batch["attention_mask"] == batch.to_list()["attention_mask"]

    def test_unknown_key(self, batch):
        with pytest.raises(KeyError):
            batch["token_type_ids"]

    def test_index_out_of_range(self, batch):
        with pytest.raises(IndexError):
            batch[5]

    def test_rows_are_copies(self, batch):
        """Mutating a returned row does not change the batch."""
        batch[0].append(999)
        assert batch.lengths() == [4, 3]

    def test_repr(self, batch):
        assert repr(batch) == (
            "BatchEncoding(num_sequences=2, total_tokens=7, padding_side='right')"
        )


class TestNumpyExport:
    """BatchEncoding.to_numpy()."""

    def test_to_numpy(self, batch):
        """Padded rows become int64 arrays."""
        np = pytest.importorskip("numpy")

        out = batch.to_numpy()
        assert out["input_ids"].dtype == np.int64
        assert out["input_ids"].shape == (2, 4)
        assert out["attention_mask"].tolist() == [[1, 1, 1, 1], [1, 1, 1, 0]]

    def test_to_numpy_kwargs(self, batch):
        """to_numpy() accepts to_list() arguments."""
        pytest.importorskip("numpy")

        out = batch.to_numpy(padding_side="left", max_length=5)
        assert out["input_ids"].shape == (2, 5)
        assert out["input_ids"][1, 0] == PAD_ID

    def test_to_numpy_empty(self, tokenizer):
        """An empty batch exports zero-row arrays."""
        pytest.importorskip("numpy")

        out = tokenizer.encode_batch([]).to_numpy()
        assert out["input_ids"].shape == (0, 0)


class TestCallable:
    """Tokenizer.__call__()."""

    def test_single_string(self, tokenizer):
        """A single string becomes a batch of one."""
        batch = tokenizer("hello")
        assert len(batch) == 1
        assert batch[0] == [CLS_ID, HELLO, SEP_ID]

    def test_list(self, tokenizer):
        """A list behaves like encode_batch()."""
        assert tokenizer(["hello world", "hello"]).lengths() == [4, 3]

    def test_unknown_kwargs_rejected(self, tokenizer, texttok):
        """A misspelled keyword raises instead of falling back to defaults."""
        with pytest.raises(texttok.ValidationError) as exc_info:
            tokenizer("hello", max_lenght=8)
        assert exc_info.value.details == {"arguments": ["max_lenght"]}
