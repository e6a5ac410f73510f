"""
Tokenizer tests.

Tests for texttok.tokenizer module:
- encode/: Splitting and encoding text to ids
- decode/: Decoding ids to text
- test_sequence.py: [CLS]/[SEP] assembly and truncation
- test_vocab.py: Loading, building and saving vocabularies
- test_thread_safety.py: Concurrent read access

Maps to: texttok/tokenizer/
"""
