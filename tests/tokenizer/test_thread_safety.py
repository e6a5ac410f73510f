"""
Thread safety tests.

A configured tokenizer is read-only during encoding and may be shared
across threads.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from tests.tokenizer.conftest import ALL_STRINGS


class TestConcurrentReads:
    """Concurrent tokenize/encode/decode on one tokenizer."""

    def test_concurrent_encode(self, tokenizer):
        """Parallel encoding matches sequential encoding."""
        texts = ALL_STRINGS * 20
        expected = [tokenizer.encode_sequence(text, max_length=16) for text in texts]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda t: tokenizer.encode_sequence(t, max_length=16), texts))

        assert results == expected

    def test_concurrent_round_trip(self, tokenizer):
        """decode(encode()) is stable under concurrency."""
        texts = ALL_STRINGS * 20
        expected = [tokenizer.decode(tokenizer.encode(text)) for text in texts]

        def round_trip(text):
            return tokenizer.decode(tokenizer.encode(text))

        with ThreadPoolExecutor(max_workers=8) as pool:
            assert list(pool.map(round_trip, texts)) == expected

    @pytest.mark.slow
    def test_concurrent_count(self, bert_tokenizer):
        """count_tokens agrees with tokenize from many threads."""
        texts = ALL_STRINGS * 200

        def check(text):
            return bert_tokenizer.count_tokens(text) == len(bert_tokenizer.tokenize(text))

        with ThreadPoolExecutor(max_workers=8) as pool:
            assert all(pool.map(check, texts))
