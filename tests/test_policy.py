"""Tests for chunk size selection."""

import pytest

from doc_translate_ai.config import MIB, ChunkingConfig
from doc_translate_ai.translation import ChunkSizePolicy


class TestChunkSizePolicy:
    def test_large_file_tier(self):
        assert ChunkSizePolicy().decide(50 * MIB + 1, 10) == 25

    def test_large_file_wins_over_page_count(self):
        assert ChunkSizePolicy().decide(60 * MIB, 500) == 25

    def test_many_pages_tier(self):
        assert ChunkSizePolicy().decide(10 * MIB, 201) == 30

    def test_default_tier(self):
        assert ChunkSizePolicy().decide(10 * MIB, 120) == 50

    def test_thresholds_are_exclusive(self):
        policy = ChunkSizePolicy()
        assert policy.decide(50 * MIB, 200) == 50

    def test_is_pure(self):
        policy = ChunkSizePolicy()
        assert {policy.decide(70 * MIB, 300) for _ in range(5)} == {25}

    def test_fixed_override(self):
        assert ChunkSizePolicy(fixed_chunk_pages=5).decide(70 * MIB, 300) == 5

    def test_fixed_override_must_be_positive(self):
        with pytest.raises(ValueError):
            ChunkSizePolicy(fixed_chunk_pages=0).decide(1, 1)

    def test_from_config(self):
        config = ChunkingConfig(
            large_file_bytes=1000,
            large_file_chunk_pages=2,
            many_pages_threshold=10,
            many_pages_chunk_pages=3,
            default_chunk_pages=4,
        )
        policy = ChunkSizePolicy.from_config(config)

        assert policy.decide(1001, 1) == 2
        assert policy.decide(10, 11) == 3
        assert policy.decide(10, 5) == 4
